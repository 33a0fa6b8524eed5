"""
Tests for transaction_manager.py - explicit transaction scope over one connection.
"""

import sqlite3
from unittest.mock import MagicMock

import pytest

from personnel_records.data_access.transaction_manager import TransactionManager, TransactionState
from personnel_records.exceptions import StorageError, TransactionStateError


def insert_marker(conn: sqlite3.Connection, value: str) -> None:
    conn.execute("INSERT INTO markers (value) VALUES (?)", (value,))


@pytest.fixture
def marker_db(db_manager):
    with db_manager.connection() as conn:
        conn.execute("CREATE TABLE markers (value TEXT NOT NULL)")
    return db_manager


def count_markers(db_manager) -> int:
    return db_manager.fetch_one("SELECT COUNT(*) AS total FROM markers")["total"]


class TestConstruction:
    """Test building a scope."""

    def test_none_connection_is_rejected(self):
        with pytest.raises(ValueError):
            TransactionManager(None)

    def test_closed_connection_is_rejected(self, db_manager):
        conn = db_manager.get_connection()
        conn.close()
        with pytest.raises(StorageError):
            TransactionManager(conn)

    def test_new_scope_is_idle(self, db_manager):
        tx = TransactionManager(db_manager.get_connection())
        assert tx.state is TransactionState.IDLE
        assert not tx.is_active
        tx.close()


class TestLifecycle:
    """Test begin / commit / rollback / close."""

    def test_commit_persists_work(self, marker_db):
        with TransactionManager(marker_db.get_connection()) as tx:
            tx.begin()
            insert_marker(tx.connection, "a")
            insert_marker(tx.connection, "b")
            tx.commit()
            assert tx.state is TransactionState.IDLE

        assert count_markers(marker_db) == 2

    def test_rollback_discards_work(self, marker_db):
        with TransactionManager(marker_db.get_connection()) as tx:
            tx.begin()
            insert_marker(tx.connection, "a")
            tx.rollback()
            assert tx.state is TransactionState.IDLE

        assert count_markers(marker_db) == 0

    def test_close_without_commit_rolls_back(self, marker_db):
        tx = TransactionManager(marker_db.get_connection())
        tx.begin()
        insert_marker(tx.connection, "a")
        tx.close()

        assert tx.state is TransactionState.CLOSED
        assert count_markers(marker_db) == 0

    def test_exception_in_block_rolls_back_and_propagates(self, marker_db):
        with pytest.raises(RuntimeError, match="boom"):
            with TransactionManager(marker_db.get_connection()) as tx:
                tx.begin()
                insert_marker(tx.connection, "a")
                raise RuntimeError("boom")

        assert tx.state is TransactionState.CLOSED
        assert count_markers(marker_db) == 0

    def test_uncommitted_work_is_invisible_to_other_connections(self, marker_db):
        with TransactionManager(marker_db.get_connection()) as tx:
            tx.begin()
            insert_marker(tx.connection, "a")
            assert count_markers(marker_db) == 0
            tx.commit()
        assert count_markers(marker_db) == 1

    def test_scope_can_be_reused_after_commit(self, marker_db):
        with TransactionManager(marker_db.get_connection()) as tx:
            tx.begin()
            insert_marker(tx.connection, "a")
            tx.commit()
            tx.begin()
            insert_marker(tx.connection, "b")
            tx.commit()
        assert count_markers(marker_db) == 2

    def test_close_closes_connection_and_is_idempotent(self, db_manager):
        conn = db_manager.get_connection()
        tx = TransactionManager(conn)
        tx.close()
        tx.close()

        assert tx.state is TransactionState.CLOSED
        with pytest.raises(sqlite3.ProgrammingError):
            conn.execute("SELECT 1")


class TestStateErrors:
    """Test calls made in the wrong state."""

    def test_commit_without_begin(self, db_manager):
        with TransactionManager(db_manager.get_connection()) as tx:
            with pytest.raises(TransactionStateError):
                tx.commit()

    def test_double_begin(self, db_manager):
        with TransactionManager(db_manager.get_connection()) as tx:
            tx.begin()
            with pytest.raises(TransactionStateError):
                tx.begin()

    def test_begin_after_close(self, db_manager):
        tx = TransactionManager(db_manager.get_connection())
        tx.close()
        with pytest.raises(StorageError):
            tx.begin()

    def test_rollback_without_begin_is_noop(self, db_manager):
        with TransactionManager(db_manager.get_connection()) as tx:
            tx.rollback()
            assert tx.state is TransactionState.IDLE

    def test_transaction_state_error_is_storage_error(self):
        assert issubclass(TransactionStateError, StorageError)


class TestCleanupFailures:
    """Cleanup failures are logged and never raised."""

    def test_failing_rollback_is_swallowed(self):
        conn = MagicMock()
        conn.rollback.side_effect = sqlite3.OperationalError("disk I/O error")
        tx = TransactionManager(conn)
        tx.begin()

        tx.rollback()

        assert tx.state is TransactionState.IDLE

    def test_failing_close_is_swallowed(self):
        conn = MagicMock()
        conn.close.side_effect = sqlite3.OperationalError("cannot close")
        tx = TransactionManager(conn)
        tx.begin()

        tx.close()

        conn.rollback.assert_called_once()
        assert tx.state is TransactionState.CLOSED

    def test_failing_cleanup_does_not_mask_original_error(self):
        conn = MagicMock()
        conn.rollback.side_effect = sqlite3.OperationalError("rollback failed")
        conn.close.side_effect = sqlite3.OperationalError("close failed")

        with pytest.raises(KeyError):
            with TransactionManager(conn) as tx:
                tx.begin()
                raise KeyError("original")

    def test_failing_commit_raises_storage_error_and_stays_active(self):
        conn = MagicMock()
        conn.commit.side_effect = sqlite3.OperationalError("database is locked")
        tx = TransactionManager(conn)
        tx.begin()

        with pytest.raises(StorageError):
            tx.commit()

        assert tx.is_active
        tx.close()
        conn.rollback.assert_called_once()
