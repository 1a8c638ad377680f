# payroll_ledger/data_access/database_manager.py

import os
import sqlite3
import logging

from payroll_ledger.config import DATA_FILE_PATH

logger = logging.getLogger(__name__)

class DatabaseManager:
    """Opens a short-lived sqlite connection to one snapshot file per `with` block."""

    def __init__(self, db_path=DATA_FILE_PATH):
        self.db_path = db_path
        self.conn = None

    def __enter__(self):
        try:
            self.conn = sqlite3.connect(self.db_path)
            self.conn.row_factory = sqlite3.Row # Access columns by name
            logger.debug(f"Database connection established to {self.db_path}")
            return self.conn
        except sqlite3.Error as e:
            logger.error(f"Error connecting to database {self.db_path}: {e}")
            raise

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.conn:
            self.conn.close()
            self.conn = None
            logger.debug("Database connection closed.")

    def exists(self) -> bool:
        return os.path.isfile(self.db_path)

    def delete_file(self) -> bool:
        if not self.exists():
            return False
        os.remove(self.db_path)
        logger.info(f"Snapshot file {self.db_path} deleted.")
        return True

    def fetch_one(self, query, params=None):
        try:
            with self as conn:
                cursor = conn.cursor()
                cursor.execute(query, params or ())
                return cursor.fetchone()
        except sqlite3.Error as e:
            logger.error(f"Fetch one failed: {query} with params {params} - {e}")
            raise

    def fetch_all(self, query, params=None):
        try:
            with self as conn:
                cursor = conn.cursor()
                cursor.execute(query, params or ())
                return cursor.fetchall()
        except sqlite3.Error as e:
            logger.error(f"Fetch all failed: {query} with params {params} - {e}")
            raise

    def create_tables(self, conn, employee_columns):
        """
        Creates the snapshot schema on an open connection.
        `employee_columns` is the union of every employee variant's field names.
        """
        variant_columns = ",\n".join(f"    {column}" for column in employee_columns)
        queries = [
            """
            CREATE TABLE IF NOT EXISTS schema_info (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            );
            """,
            f"""
            CREATE TABLE IF NOT EXISTS employees (
                position INTEGER NOT NULL,
                employee_type TEXT NOT NULL,
            {variant_columns},
                PRIMARY KEY (employee_id)
            );
            """,
        ]
        for query in queries:
            conn.execute(query)
        logger.debug(f"Snapshot tables checked/created in {self.db_path}")
