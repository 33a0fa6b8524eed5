# personnel_records/data_access/database_manager.py

import os
import sqlite3
import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional, Sequence

from personnel_records.config import DATABASE_PATH
from personnel_records.constants import ContractStatus, EMPLOYEES_TABLE, PERSONNEL_FILES_TABLE

logger = logging.getLogger(__name__)


def _casefold(value: Optional[str]) -> Optional[str]:
    return value.casefold() if value is not None else None


class DatabaseManager:
    """
    Hands out ready-to-use connections to the SQLite store and owns the schema.
    Holds no open connection itself: every call gets its own connection.
    """

    def __init__(self, db_path: str = DATABASE_PATH):
        self.db_path = str(db_path)

    def get_connection(self) -> sqlite3.Connection:
        """
        Opens a new connection in auto-commit mode (isolation_level=None).
        Callers that need a transaction wrap it in a TransactionManager.
        """
        try:
            if self.db_path != ":memory:":
                parent_dir = os.path.dirname(os.path.abspath(self.db_path))
                os.makedirs(parent_dir, exist_ok=True)
            conn = sqlite3.connect(self.db_path, isolation_level=None)
            conn.row_factory = sqlite3.Row  # Access columns by name
            conn.execute("PRAGMA foreign_keys = ON;")  # Enforce foreign key constraints
            conn.create_function("casefold", 1, _casefold, deterministic=True)
            logger.debug(f"Database connection established to {self.db_path}")
            return conn
        except sqlite3.Error as e:
            logger.error(f"Error connecting to database {self.db_path}: {e}")
            raise

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Implicit auto-committing connection, closed on exit."""
        conn = self.get_connection()
        try:
            yield conn
        finally:
            conn.close()
            logger.debug("Database connection closed.")

    def fetch_one(self, query: str, params: Optional[Sequence] = None) -> Optional[sqlite3.Row]:
        try:
            with self.connection() as conn:
                cursor = conn.execute(query, params or ())
                return cursor.fetchone()
        except sqlite3.Error as e:
            logger.error(f"Fetch one failed: {query} with params {params} - {e}")
            raise

    def fetch_all(self, query: str, params: Optional[Sequence] = None) -> List[sqlite3.Row]:
        try:
            with self.connection() as conn:
                cursor = conn.execute(query, params or ())
                return cursor.fetchall()
        except sqlite3.Error as e:
            logger.error(f"Fetch all failed: {query} with params {params} - {e}")
            raise

    def create_tables(self) -> None:
        queries = [
            f"""
            CREATE TABLE IF NOT EXISTS {EMPLOYEES_TABLE} (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                surname TEXT NOT NULL,
                national_id TEXT NOT NULL,
                email TEXT,
                hire_date TEXT,          -- ISO Date
                area TEXT,
                deleted INTEGER NOT NULL DEFAULT 0
            );
            """,
            """
            CREATE TABLE IF NOT EXISTS {table} (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                file_number TEXT NOT NULL,
                category TEXT,
                status TEXT NOT NULL CHECK(status IN ({statuses})),
                opened_on TEXT,          -- ISO Date
                notes TEXT,
                employee_id INTEGER NOT NULL,
                deleted INTEGER NOT NULL DEFAULT 0,
                FOREIGN KEY (employee_id) REFERENCES {employees}(id) ON DELETE RESTRICT
            );
            """.format(
                table=PERSONNEL_FILES_TABLE,
                employees=EMPLOYEES_TABLE,
                statuses=', '.join(f"'{cs.value}'" for cs in ContractStatus),
            ),
            # Natural keys are unique among non-deleted rows only, so a key frees up after a soft delete.
            f"""
            CREATE UNIQUE INDEX IF NOT EXISTS ux_{EMPLOYEES_TABLE}_national_id
                ON {EMPLOYEES_TABLE} (national_id) WHERE deleted = 0;
            """,
            f"""
            CREATE UNIQUE INDEX IF NOT EXISTS ux_{PERSONNEL_FILES_TABLE}_file_number
                ON {PERSONNEL_FILES_TABLE} (file_number) WHERE deleted = 0;
            """,
            f"""
            CREATE UNIQUE INDEX IF NOT EXISTS ux_{PERSONNEL_FILES_TABLE}_employee_id
                ON {PERSONNEL_FILES_TABLE} (employee_id) WHERE deleted = 0;
            """,
        ]

        try:
            with self.connection() as conn:
                logger.info("Checking/Creating database tables...")
                conn.execute("BEGIN")
                try:
                    for query_index, query in enumerate(queries):
                        logger.debug(f"Executing schema statement {query_index + 1}/{len(queries)}")
                        conn.execute(query)
                    conn.commit()
                except sqlite3.Error:
                    conn.rollback()
                    raise
                logger.info("Database tables checked/created successfully.")
        except sqlite3.Error as e:
            logger.error(f"Failed to initialize database schema: {e}", exc_info=True)
            raise

    def table_names(self) -> List[str]:
        rows = self.fetch_all("SELECT name FROM sqlite_master WHERE type='table' ORDER BY name;")
        return [row["name"] for row in rows]
