"""
Pressroom Core
==============

Core utilities shared by the admin modules and the site generator.
"""

from .config import Config
from .database import Database
from .errors import PressroomError, StoreError
from .logging_service import LoggingService
from .store import BackendClient, StoreResult

__all__ = ['Config', 'Database', 'LoggingService', 'PressroomError',
           'StoreError', 'BackendClient', 'StoreResult']
