# personnel_records/data_access/employees_repository.py

from typing import Dict, Any, Optional, List

from personnel_records.data_access.base_repository import BaseRepository
from personnel_records.data_access.database_manager import DatabaseManager
from personnel_records.data_access.transaction_manager import TransactionManager
from personnel_records.business_logic.entities.employee_entity import EmployeeEntity
from personnel_records.business_logic.entities.personnel_file_entity import PersonnelFileEntity
from personnel_records.constants import ContractStatus, EMPLOYEES_TABLE, PERSONNEL_FILES_TABLE
from personnel_records.utils.date_converter import from_db_date
import logging

logger = logging.getLogger(__name__)

# Employee columns plus the owned personnel file, loaded in one round trip.
SELECT_WITH_FILE = f"""
    SELECT t.id AS id, t.name, t.surname, t.national_id, t.email, t.hire_date, t.area, t.deleted,
           pf.id AS file_id, pf.file_number, pf.category, pf.status, pf.opened_on, pf.notes,
           pf.employee_id AS file_employee_id
    FROM {EMPLOYEES_TABLE} t
    LEFT JOIN {PERSONNEL_FILES_TABLE} pf ON pf.employee_id = t.id AND pf.deleted = 0
    WHERE t.deleted = 0"""


class EmployeesRepository(BaseRepository[EmployeeEntity]):
    def __init__(self, db_manager: DatabaseManager):
        super().__init__(db_manager=db_manager,
                         table_name=EMPLOYEES_TABLE,
                         db_columns=["name", "surname", "national_id", "email", "hire_date", "area"])

    def _select_base(self) -> str:
        return SELECT_WITH_FILE

    def _entity_from_row(self, row: Dict[str, Any]) -> EmployeeEntity:
        if row is None:
            raise ValueError("Input row cannot be None for EmployeeEntity")
        try:
            personnel_file = None
            if row.get('file_id'):
                personnel_file = PersonnelFileEntity(
                    id=row['file_id'],
                    file_number=row['file_number'],
                    category=row.get('category'),
                    status=ContractStatus(row['status']),
                    opened_on=from_db_date(row.get('opened_on')),
                    notes=row.get('notes'),
                    employee_id=row['file_employee_id'],
                )
            return EmployeeEntity(
                id=row['id'],
                name=row['name'],
                surname=row['surname'],
                national_id=row['national_id'],
                email=row.get('email'),
                hire_date=from_db_date(row.get('hire_date')),
                area=row.get('area'),
                personnel_file=personnel_file,
                deleted=bool(row['deleted']),  # DB stores 0 or 1
            )
        except KeyError as e:
            logger.error(f"KeyError when creating EmployeeEntity from row: {e}. Row: {row}")
            raise
        except ValueError as e:  # For date or ContractStatus conversion
            logger.error(f"ValueError when creating EmployeeEntity: {e}. Row: {row}")
            raise

    def get_by_national_id(self, national_id: str, tx: Optional[TransactionManager] = None) -> Optional[EmployeeEntity]:
        if not national_id or not national_id.strip():
            return None
        query = f"{SELECT_WITH_FILE} AND t.national_id = ?"
        return self._fetch_one(query, (national_id.strip(),), tx)

    def search_by_name(self, text: str) -> List[EmployeeEntity]:
        """Case-insensitive substring match on name or surname."""
        if not text or not text.strip():
            return []
        needle = text.strip().casefold()
        query = f"{SELECT_WITH_FILE} AND (instr(casefold(t.name), ?) > 0 OR instr(casefold(t.surname), ?) > 0)"
        return self._fetch_all(query, (needle, needle))
