"""
Centralized diagnostics logging for PressDesk.
Stores structured log rows in SQLite so failed backend calls can be reviewed later.
"""

import json
import sqlite3
import traceback
from datetime import datetime, timedelta

from flask import request, has_request_context

from .config import get_config_value


class LoggingService:
    """Persistent diagnostics log (app_logs table in PRESSDESK_LOG_DB)"""

    @staticmethod
    def _db_path():
        return get_config_value('PRESSDESK_LOG_DB')

    @staticmethod
    def _ensure_logs_table(db_path):
        """Ensure the app_logs table exists"""
        with sqlite3.connect(db_path) as conn:
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
                    request_path TEXT
                )
            """)
            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_logs_timestamp
                ON app_logs(timestamp DESC)
            """)
            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_logs_source
                ON app_logs(source)
            """)
            conn.commit()

    @staticmethod
    def _get_request_context():
        """Get request context information if available"""
        if not has_request_context():
            return None, None, None

        ip_address = request.headers.get('X-Forwarded-For', request.remote_addr)
        if ip_address and ',' in ip_address:
            ip_address = ip_address.split(',')[0].strip()

        return ip_address, request.headers.get('User-Agent', ''), request.path

    @staticmethod
    def log(level, source, message, details=None):
        """
        Log a message to the diagnostics database

        Args:
            level (str): Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            source (str): Source component (blog, newsletter, backend, ...)
            message (str): Main log message
            details (str/dict): Additional details (JSON-encoded if dict)
        """
        db_path = LoggingService._db_path()
        if not db_path:
            return

        if isinstance(details, dict):
            details = json.dumps(details, indent=2, default=str)

        try:
            LoggingService._ensure_logs_table(db_path)
            ip_address, user_agent, request_path = LoggingService._get_request_context()

            with sqlite3.connect(db_path) as conn:
                cursor = conn.cursor()
                cursor.execute("""
                    INSERT INTO app_logs
                    (timestamp, level, source, message, details, ip_address, user_agent, request_path)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """, (
                    datetime.now().isoformat(), level.upper(), source, message, details,
                    ip_address, user_agent, request_path
                ))
                conn.commit()

        except sqlite3.Error as e:
            # Fallback to console logging if database fails
            print(f"[{datetime.now().isoformat()}] [{level.upper()}] [{source}] {message}")
            if details:
                print(f"Details: {details}")
            print(f"Logging service error: {e}")

    @staticmethod
    def info(source, message, details=None):
        LoggingService.log('INFO', source, message, details)

    @staticmethod
    def warning(source, message, details=None):
        LoggingService.log('WARNING', source, message, details)

    @staticmethod
    def error(source, message, details=None):
        LoggingService.log('ERROR', source, message, details)

    @staticmethod
    def log_api_call(source, endpoint, method='GET', status_code=200, details=None):
        """Log a backend API call"""
        message = f"API {method} {endpoint} - Status: {status_code}"
        level = 'INFO' if 200 <= status_code < 400 else 'WARNING' if status_code < 500 else 'ERROR'
        LoggingService.log(level, source, message, details)

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
    def cleanup_old_logs(days_to_keep=30):
        """Clean up old log entries"""
        db_path = LoggingService._db_path()
        if not db_path:
            return 0

        cutoff_iso = (datetime.now() - timedelta(days=days_to_keep)).isoformat()
        try:
            LoggingService._ensure_logs_table(db_path)
            with sqlite3.connect(db_path) as conn:
                cursor = conn.cursor()
                cursor.execute("DELETE FROM app_logs WHERE timestamp < ?", (cutoff_iso,))
                deleted_count = cursor.rowcount
                conn.commit()
        except sqlite3.Error as e:
            print(f"Failed to cleanup old logs: {e}")
            return 0

        LoggingService.info('system', f"Cleaned up {deleted_count} old log entries")
        return deleted_count


def db_log(level, source, message, details=None):
    """Shortcut used by modules: LoggingService.log with a lower-case level"""
    LoggingService.log(level, source, message, details)


# Convenience instance for easy importing
logger = LoggingService()
