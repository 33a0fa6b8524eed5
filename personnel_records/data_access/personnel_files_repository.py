# personnel_records/data_access/personnel_files_repository.py

from typing import Dict, Any, Optional, List

from personnel_records.data_access.base_repository import BaseRepository
from personnel_records.data_access.database_manager import DatabaseManager
from personnel_records.data_access.transaction_manager import TransactionManager
from personnel_records.business_logic.entities.personnel_file_entity import PersonnelFileEntity
from personnel_records.constants import ContractStatus, PERSONNEL_FILES_TABLE
from personnel_records.utils.date_converter import from_db_date
import logging

logger = logging.getLogger(__name__)


class PersonnelFilesRepository(BaseRepository[PersonnelFileEntity]):
    """
    Child table of employees. Inserts need employee_id already set on the entity;
    updates never change it.
    """

    def __init__(self, db_manager: DatabaseManager):
        super().__init__(db_manager=db_manager,
                         table_name=PERSONNEL_FILES_TABLE,
                         db_columns=["file_number", "category", "status", "opened_on", "notes"])

    def _entity_to_dict_for_insert(self, entity: PersonnelFileEntity) -> Dict[str, Any]:
        # employee_id is written once, on INSERT; updates only use it to scope the WHERE clause.
        data = self._entity_to_dict_for_db(entity)
        data["employee_id"] = entity.employee_id
        return data

    def _update_where(self, entity: PersonnelFileEntity) -> tuple:
        if entity.employee_id:
            return "id = ? AND employee_id = ? AND deleted = 0", (entity.id, entity.employee_id)
        return "id = ? AND deleted = 0", (entity.id,)

    def _soft_delete_set_clause(self) -> str:
        return f"deleted = 1, status = '{ContractStatus.INACTIVE.value}'"

    def _entity_from_row(self, row: Dict[str, Any]) -> PersonnelFileEntity:
        if row is None:
            raise ValueError("Input row cannot be None for PersonnelFileEntity")
        try:
            return PersonnelFileEntity(
                id=row['id'],
                file_number=row['file_number'],
                category=row.get('category'),
                status=ContractStatus(row['status']),
                opened_on=from_db_date(row.get('opened_on')),
                notes=row.get('notes'),
                employee_id=row['employee_id'],
                deleted=bool(row['deleted']),
            )
        except KeyError as e:
            logger.error(f"KeyError when creating PersonnelFileEntity from row: {e}. Row: {row}")
            raise
        except ValueError as e:  # For date or ContractStatus conversion
            logger.error(f"ValueError when creating PersonnelFileEntity: {e}. Row: {row}")
            raise

    def get_by_file_number(self, file_number: str, tx: Optional[TransactionManager] = None) -> Optional[PersonnelFileEntity]:
        if not file_number or not file_number.strip():
            return None
        query = f"{self._select_base()} AND t.file_number = ?"
        return self._fetch_one(query, (file_number.strip(),), tx)

    def get_by_status(self, status: ContractStatus) -> List[PersonnelFileEntity]:
        query = f"{self._select_base()} AND t.status = ?"
        return self._fetch_all(query, (status.value,))
