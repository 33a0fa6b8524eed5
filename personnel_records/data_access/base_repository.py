# personnel_records/data_access/base_repository.py

import sqlite3
import logging
from abc import ABC, abstractmethod
from datetime import date, datetime
from enum import Enum
from typing import Generic, TypeVar, List, Optional, Dict, Any, Sequence, TYPE_CHECKING

from personnel_records.data_access.database_manager import DatabaseManager
from personnel_records.data_access.transaction_manager import TransactionManager
from personnel_records.exceptions import StorageError, RecordNotFoundError
from personnel_records.utils.date_converter import to_db_date

if TYPE_CHECKING:
    from personnel_records.business_logic.entities.base_entity import PersistentEntity

logger = logging.getLogger(__name__)

T = TypeVar('T', bound='PersistentEntity')


class BaseRepository(Generic[T], ABC):
    """
    Shared persistence for soft-deletable entities.

    Every write has two forms: the plain one runs on its own auto-committing
    connection, the *_tx one runs on a caller-managed TransactionManager and
    never closes it. Reads always filter out logically deleted rows.
    """

    def __init__(self, db_manager: DatabaseManager, table_name: str, db_columns: List[str]):
        if db_manager is None:
            raise ValueError("db_manager cannot be None")
        self.db_manager = db_manager
        self._table_name = table_name
        self._db_columns = db_columns  # mutable columns, without id and deleted
        logger.debug(f"BaseRepository for {self._table_name} initialized. Columns: {self._db_columns}")

    @property
    def table_name(self) -> str:
        return self._table_name

    # --- mapping hooks ---

    @abstractmethod
    def _entity_from_row(self, row: Dict[str, Any]) -> T:
        ...

    def _select_base(self) -> str:
        return f"SELECT * FROM {self._table_name} t WHERE t.deleted = 0"

    def _entity_to_dict_for_db(self, entity: T) -> Dict[str, Any]:
        """Converts the entity's persisted fields to storage values."""
        data_to_persist = {}
        for col in self._db_columns:
            v = getattr(entity, col, None)
            processed_v = v
            if isinstance(v, Enum): processed_v = v.value
            elif isinstance(v, bool): processed_v = 1 if v else 0
            elif isinstance(v, (datetime, date)): processed_v = to_db_date(v)
            data_to_persist[col] = processed_v
        return data_to_persist

    def _entity_to_dict_for_insert(self, entity: T) -> Dict[str, Any]:
        return self._entity_to_dict_for_db(entity)

    # --- statement execution ---

    def _run_write(self, query: str, params: Sequence, tx: Optional[TransactionManager]) -> sqlite3.Cursor:
        logger.debug(f"{type(self).__name__}: Query: {query} Values: {tuple(params)}")
        try:
            if tx is not None:
                return tx.connection.execute(query, params)
            with self.db_manager.connection() as conn:
                return conn.execute(query, params)
        except sqlite3.Error as e:
            logger.error(f"Write on {self._table_name} failed: {e}", exc_info=True)
            raise StorageError(f"Storage rejected the write on {self._table_name}: {e}") from e

    def _fetch_one(self, query: str, params: Sequence, tx: Optional[TransactionManager] = None) -> Optional[T]:
        try:
            if tx is not None:
                row = tx.connection.execute(query, params).fetchone()
            else:
                row = self.db_manager.fetch_one(query, params)
        except sqlite3.Error as e:
            raise StorageError(f"Read on {self._table_name} failed: {e}") from e
        return self._entity_from_row(dict(row)) if row else None

    def _fetch_all(self, query: str, params: Sequence = ()) -> List[T]:
        try:
            rows = self.db_manager.fetch_all(query, params)
        except sqlite3.Error as e:
            raise StorageError(f"Read on {self._table_name} failed: {e}") from e
        return [self._entity_from_row(dict(row)) for row in rows if row]

    # --- create ---

    def add(self, entity: T) -> T:
        return self._insert(entity, None)

    def add_tx(self, entity: T, tx: TransactionManager) -> T:
        return self._insert(entity, tx)

    def _insert(self, entity: T, tx: Optional[TransactionManager]) -> T:
        fields_to_insert = self._entity_to_dict_for_insert(entity)
        columns = ', '.join(fields_to_insert.keys())
        placeholders = ', '.join(['?'] * len(fields_to_insert))
        query = f"INSERT INTO {self._table_name} ({columns}) VALUES ({placeholders})"

        cursor = self._run_write(query, tuple(fields_to_insert.values()), tx)
        if cursor.rowcount == 0:
            raise StorageError(f"Insert into {self._table_name} affected no rows.")
        if not cursor.lastrowid:
            raise StorageError(f"Could not retrieve the generated id after insert into {self._table_name}.")
        entity.id = cursor.lastrowid
        logger.debug(f"{type(self).__name__}.add: Entity ID set to {entity.id} after insert.")
        return entity

    # --- update ---

    def update(self, entity: T) -> T:
        return self._update(entity, None)

    def update_tx(self, entity: T, tx: TransactionManager) -> T:
        return self._update(entity, tx)

    def _update_where(self, entity: T) -> tuple:
        """WHERE clause and parameters selecting the row an update may touch."""
        return "id = ? AND deleted = 0", (entity.id,)

    def _update(self, entity: T, tx: Optional[TransactionManager]) -> T:
        fields_to_update = self._entity_to_dict_for_db(entity)
        set_clause = ', '.join([f"{key} = ?" for key in fields_to_update.keys()])
        where_clause, where_params = self._update_where(entity)
        query = f"UPDATE {self._table_name} SET {set_clause} WHERE {where_clause}"

        cursor = self._run_write(query, tuple(fields_to_update.values()) + tuple(where_params), tx)
        if cursor.rowcount == 0:
            raise RecordNotFoundError(
                f"Could not update {self._table_name} row: ID {entity.id} not found.")
        logger.info(f"{type(self).__name__}.update: Entity ID {entity.id} in table {self._table_name} updated.")
        return entity

    # --- soft delete ---

    def soft_delete(self, entity_id: int) -> None:
        self._soft_delete(entity_id, None)

    def soft_delete_tx(self, entity_id: int, tx: TransactionManager) -> None:
        self._soft_delete(entity_id, tx)

    def _soft_delete_set_clause(self) -> str:
        return "deleted = 1"

    def _soft_delete(self, entity_id: int, tx: Optional[TransactionManager]) -> None:
        query = f"UPDATE {self._table_name} SET {self._soft_delete_set_clause()} WHERE id = ? AND deleted = 0"
        cursor = self._run_write(query, (entity_id,), tx)
        if cursor.rowcount == 0:
            raise RecordNotFoundError(
                f"Could not soft-delete {self._table_name} row: ID {entity_id} not found.")
        logger.info(f"{type(self).__name__}.soft_delete: Entity ID {entity_id} in table {self._table_name} marked deleted.")

    # --- reads ---

    def get_by_id(self, entity_id: int) -> Optional[T]:
        return self._fetch_one(f"{self._select_base()} AND t.id = ?", (entity_id,))

    def get_all(self) -> List[T]:
        return self._fetch_all(self._select_base())
