"""
Pressroom Errors
================

One exception hierarchy shared by the admin panel and the site generator.
Every error can describe itself as a JSON payload for API responses.
"""


class PressroomError(Exception):
    """Base class for all Pressroom errors"""
    code = 'PRESSROOM_ERROR'
    status = 500

    def __init__(self, message, details=None, suggestion=None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.suggestion = suggestion

    def to_dict(self):
        rv = {
            'success': False,
            'error': self.message,
            'code': self.code,
        }
        if self.details:
            rv['details'] = self.details
        if self.suggestion:
            rv['suggestion'] = self.suggestion
        return rv


class TemplateNotFound(PressroomError):
    """A named page template is missing on disk"""
    code = 'TEMPLATE_NOT_FOUND'

    def __init__(self, path):
        super().__init__(f"Template file does not exist: {path}", details=str(path))
        self.path = path


class MissingTemplateVariable(PressroomError):
    """Strict rendering found placeholders with no bound value"""
    code = 'MISSING_TEMPLATE_VARIABLE'

    def __init__(self, keys):
        keys = sorted(set(keys))
        super().__init__(f"Unbound template variables: {', '.join(keys)}")
        self.keys = keys


class ValidationError(PressroomError):
    """Input rejected before any remote call"""
    code = 'VALIDATION_ERROR'
    status = 400

    def __init__(self, message, field=None):
        super().__init__(message)
        self.field = field

    def to_dict(self):
        rv = super().to_dict()
        if self.field:
            rv['field'] = self.field
        return rv


class AuthError(PressroomError):
    code = 'AUTH_ERROR'
    status = 401


class NotFoundError(PressroomError):
    code = 'NOT_FOUND'
    status = 404


class ConflictError(PressroomError):
    """The record changed since the client last read it"""
    code = 'CONFLICT'
    status = 409


class StorageConsistencyError(PressroomError):
    """A blob and its record could not be kept in step"""
    code = 'STORAGE_CONSISTENCY_ERROR'
    status = 502


# (code, message, suggestion, substrings that select it)
_STORE_ERROR_KINDS = [
    ('NETWORK_ERROR', 'Network connection failed',
     'Check the network connection and that the backend URL is reachable',
     ('fetch failed', 'network', 'connection', 'timed out', 'timeout')),
    ('AUTH_ERROR', 'Authentication failed',
     'Sign in again or check the login state',
     ('jwt', 'auth', 'invalid login', 'unauthorized')),
    ('PERMISSION_ERROR', 'Permission denied',
     'Check the row-level security policies or contact the administrator',
     ('rls', 'permission', 'row-level security', 'forbidden')),
    ('STORAGE_ERROR', 'Storage service error',
     'Check the storage bucket configuration and its permissions',
     ('bucket', 'storage', 'object not found')),
    ('DATABASE_ERROR', 'Data conflict',
     'Check the input data and make sure unique constraints are respected',
     ('duplicate key', 'constraint')),
]


class StoreError(PressroomError):
    """A remote store call failed"""
    code = 'UNKNOWN_ERROR'
    status = 502

    def __init__(self, message, details=None, suggestion=None, code=None, http_status=None):
        super().__init__(message, details=details, suggestion=suggestion)
        if code:
            self.code = code
        self.http_status = http_status

    @classmethod
    def classify(cls, raw_message, http_status=None):
        """Build a StoreError whose code and suggestion match the raw backend message"""
        raw_message = raw_message or 'No error details available'
        lowered = raw_message.lower()
        for code, message, suggestion, needles in _STORE_ERROR_KINDS:
            if any(needle in lowered for needle in needles):
                return cls(message, details=raw_message, suggestion=suggestion,
                           code=code, http_status=http_status)
        return cls('Unknown error', details=raw_message,
                   suggestion='Check the application logs or contact support',
                   code='UNKNOWN_ERROR', http_status=http_status)

    def __str__(self):
        if self.details and self.details != self.message:
            return f"{self.message}: {self.details}"
        return self.message
