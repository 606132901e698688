import os
import sqlite3


class Database:
    """Local SQLite access. Content lives in the hosted backend; this only holds app logs."""

    @staticmethod
    def connect(path):
        return sqlite3.connect(path)

    @staticmethod
    def ensure_dir(path):
        """Create the directory holding a database file if it is missing"""
        db_dir = os.path.dirname(path)
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)
        return db_dir
