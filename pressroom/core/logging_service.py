"""
Centralized logging service for Pressroom.
Stores application log records in SQLite alongside the regular Python loggers.
"""

import json
import logging
import traceback
from datetime import datetime

from flask import request, has_request_context

from .config import get_config_value
from .database import Database

console = logging.getLogger('pressroom')


class LoggingService:
    """Centralized logging service for application-wide logging"""

    @staticmethod
    def _log_db():
        return get_config_value('LOG_DB')

    @staticmethod
    def _ensure_logs_table(log_db):
        """Ensure the app_logs table exists"""
        Database.ensure_dir(log_db)
        with Database.connect(log_db) as conn:
            cursor = conn.cursor()
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS app_logs (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    timestamp TEXT NOT NULL,
                    level TEXT NOT NULL,
                    source TEXT NOT NULL,
                    message TEXT NOT NULL,
                    details TEXT,
                    ip_address TEXT,
                    user_agent TEXT,
                    request_path TEXT,
                    user_id TEXT
                )
            """)
            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_logs_timestamp
                ON app_logs(timestamp DESC)
            """)
            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_logs_level
                ON app_logs(level)
            """)
            conn.commit()

    @staticmethod
    def _get_request_context():
        """Extract request context information"""
        if not has_request_context():
            return None, None, None

        ip_address = request.headers.get('X-Forwarded-For', request.remote_addr)
        if ip_address and ',' in ip_address:
            ip_address = ip_address.split(',')[0].strip()

        return ip_address, request.headers.get('User-Agent', ''), request.path

    @staticmethod
    def log(level, source, message, details=None, user_id=None):
        """
        Log a message to the console logger and the app_logs table

        Args:
            level (str): Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            source (str): Source component (sitegen, posts, images, auth, ...)
            message (str): Main log message
            details (str/dict): Additional details (JSON-encoded if dict)
            user_id (str): Optional user identifier
        """
        level = level.upper()
        console.log(getattr(logging, level, logging.INFO), "[%s] %s", source, message)

        if isinstance(details, dict):
            details = json.dumps(details, indent=2, default=str)

        log_db = LoggingService._log_db()
        if not log_db:
            return

        try:
            LoggingService._ensure_logs_table(log_db)
            ip_address, user_agent, request_path = LoggingService._get_request_context()

            with Database.connect(log_db) as conn:
                cursor = conn.cursor()
                cursor.execute("""
                    INSERT INTO app_logs
                    (timestamp, level, source, message, details, ip_address, user_agent, request_path, user_id)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """, (
                    datetime.now().isoformat(), level, source, message, details,
                    ip_address, user_agent, request_path, user_id
                ))
                conn.commit()
        except Exception as e:
            # Fall back to the console if the log database is unavailable
            console.warning("Logging service error: %s", e)
            if details:
                console.warning("Details: %s", details)

    @staticmethod
    def debug(source, message, details=None, user_id=None):
        LoggingService.log('DEBUG', source, message, details, user_id)

    @staticmethod
    def info(source, message, details=None, user_id=None):
        LoggingService.log('INFO', source, message, details, user_id)

    @staticmethod
    def warning(source, message, details=None, user_id=None):
        LoggingService.log('WARNING', source, message, details, user_id)

    @staticmethod
    def error(source, message, details=None, user_id=None):
        LoggingService.log('ERROR', source, message, details, user_id)

    @staticmethod
    def critical(source, message, details=None, user_id=None):
        LoggingService.log('CRITICAL', source, message, details, user_id)

    @staticmethod
    def log_user_action(source, action, user_id=None, details=None):
        """Log operator actions (login, publish, upload, ...)"""
        LoggingService.info(source, f"User action: {action}", details, user_id)

    @staticmethod
    def log_error_with_traceback(source, error, details=None):
        """Log error with full traceback"""
        error_details = {
            'error_type': type(error).__name__,
            'error_message': str(error),
            'traceback': traceback.format_exc()
        }
        if details:
            error_details['additional_details'] = details

        LoggingService.error(source, f"Exception occurred: {type(error).__name__}", error_details)

    @staticmethod
    def recent_logs(limit=50, source=None):
        """Most recent log records, newest first"""
        log_db = LoggingService._log_db()
        if not log_db:
            return []
        LoggingService._ensure_logs_table(log_db)
        with Database.connect(log_db) as conn:
            cursor = conn.cursor()
            if source:
                cursor.execute("""
                    SELECT timestamp, level, source, message, details FROM app_logs
                    WHERE source = ? ORDER BY id DESC LIMIT ?
                """, (source, limit))
            else:
                cursor.execute("""
                    SELECT timestamp, level, source, message, details FROM app_logs
                    ORDER BY id DESC LIMIT ?
                """, (limit,))
            return [
                {'timestamp': row[0], 'level': row[1], 'source': row[2],
                 'message': row[3], 'details': row[4]}
                for row in cursor.fetchall()
            ]
