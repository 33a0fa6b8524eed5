# personnel_records/data_access/transaction_manager.py
"""
Explicit transaction scope over a single sqlite3 connection.

    with TransactionManager(db_manager.get_connection()) as tx:
        tx.begin()
        repository.add_tx(entity, tx)
        tx.commit()

Leaving the block without reaching commit() rolls the work back, and the
connection is always closed on exit. Cleanup failures are logged, never
raised, so they cannot hide the error that caused the block to exit.
"""

import sqlite3
import logging
from enum import Enum

from personnel_records.exceptions import StorageError, TransactionStateError

logger = logging.getLogger(__name__)


class TransactionState(Enum):
    IDLE = "idle"
    ACTIVE = "active"
    CLOSED = "closed"


class TransactionManager:
    def __init__(self, connection: sqlite3.Connection):
        if connection is None:
            raise ValueError("connection cannot be None")
        try:
            connection.in_transaction  # raises on a closed connection
        except sqlite3.Error as e:
            raise StorageError(f"Cannot open a transaction scope on an unusable connection: {e}") from e
        self._connection = connection
        self._state = TransactionState.IDLE

    @property
    def connection(self) -> sqlite3.Connection:
        return self._connection

    @property
    def state(self) -> TransactionState:
        return self._state

    @property
    def is_active(self) -> bool:
        return self._state is TransactionState.ACTIVE

    def begin(self) -> None:
        if self._state is TransactionState.CLOSED:
            raise StorageError("Cannot begin a transaction: the scope is closed")
        if self._state is TransactionState.ACTIVE:
            raise TransactionStateError("A transaction is already active on this scope")
        try:
            self._connection.execute("BEGIN")
        except sqlite3.Error as e:
            logger.error(f"Could not begin transaction: {e}", exc_info=True)
            raise StorageError(f"Cannot begin a transaction: {e}") from e
        self._state = TransactionState.ACTIVE
        logger.debug("Transaction started.")

    def commit(self) -> None:
        if self._state is not TransactionState.ACTIVE:
            raise TransactionStateError("There is no active transaction to commit")
        try:
            self._connection.commit()
        except sqlite3.Error as e:
            # Still active: close() will roll back.
            logger.error(f"Commit failed: {e}", exc_info=True)
            raise StorageError(f"Commit failed: {e}") from e
        self._state = TransactionState.IDLE
        logger.debug("Transaction committed.")

    def rollback(self) -> None:
        if self._state is not TransactionState.ACTIVE:
            return
        try:
            self._connection.rollback()
            logger.debug("Transaction rolled back.")
        except sqlite3.Error as e:
            logger.error(f"Error during rollback: {e}")
        finally:
            self._state = TransactionState.IDLE

    def close(self) -> None:
        if self._state is TransactionState.CLOSED:
            return
        if self._state is TransactionState.ACTIVE:
            self.rollback()
        try:
            self._connection.isolation_level = None  # back to auto-commit
        except sqlite3.Error as e:
            logger.warning(f"Could not restore auto-commit before closing the connection: {e}")
        try:
            self._connection.close()
        except sqlite3.Error as e:
            logger.warning(f"Error closing the connection: {e}")
        self._state = TransactionState.CLOSED

    def __enter__(self) -> "TransactionManager":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if exc_type is not None and self.is_active:
            logger.warning(f"Rolling back transaction after {exc_type.__name__}: {exc_val}")
        self.close()
        return False
