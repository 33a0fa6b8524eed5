"""
Pytest configuration and shared fixtures.
"""

from datetime import date

import pytest

from personnel_records.app import build_records_service
from personnel_records.business_logic.employee_manager import EmployeeManager
from personnel_records.business_logic.entities.employee_entity import EmployeeEntity
from personnel_records.business_logic.entities.personnel_file_entity import PersonnelFileEntity
from personnel_records.business_logic.personnel_file_manager import PersonnelFileManager
from personnel_records.business_logic.records_service import RecordsService
from personnel_records.constants import ContractStatus
from personnel_records.data_access.database_manager import DatabaseManager
from personnel_records.data_access.employees_repository import EmployeesRepository
from personnel_records.data_access.personnel_files_repository import PersonnelFilesRepository


@pytest.fixture
def db_path(tmp_path) -> str:
    """Path of a fresh on-disk SQLite database."""
    return str(tmp_path / "test_personnel.db")


@pytest.fixture
def db_manager(db_path) -> DatabaseManager:
    """Database manager with the schema already created."""
    manager = DatabaseManager(db_path)
    manager.create_tables()
    return manager


@pytest.fixture
def employees_repository(db_manager) -> EmployeesRepository:
    return EmployeesRepository(db_manager)


@pytest.fixture
def personnel_files_repository(db_manager) -> PersonnelFilesRepository:
    return PersonnelFilesRepository(db_manager)


@pytest.fixture
def personnel_file_manager(personnel_files_repository) -> PersonnelFileManager:
    return PersonnelFileManager(personnel_files_repository)


@pytest.fixture
def employee_manager(db_manager, employees_repository, personnel_file_manager) -> EmployeeManager:
    return EmployeeManager(employees_repository,
                           personnel_file_manager,
                           connection_factory=db_manager.get_connection)


@pytest.fixture
def service(db_path) -> RecordsService:
    """Fully wired service, the way the application builds it."""
    return build_records_service(db_path)


def make_employee(national_id: str = "30111222",
                  file_number: str = "L-001",
                  name: str = "Ana",
                  surname: str = "Gomez") -> EmployeeEntity:
    return EmployeeEntity(
        name=name,
        surname=surname,
        national_id=national_id,
        email=f"{name.lower()}.{surname.lower()}@example.com",
        hire_date=date(2021, 3, 15),
        area="Logistics",
        personnel_file=PersonnelFileEntity(
            file_number=file_number,
            status=ContractStatus.ACTIVE,
            category="Full-time",
            opened_on=date(2021, 3, 15),
            notes="Initial contract",
        ),
    )


@pytest.fixture
def sample_employee() -> EmployeeEntity:
    """Unsaved employee Ana Gomez with personnel file L-001."""
    return make_employee()


@pytest.fixture
def other_employee() -> EmployeeEntity:
    """Unsaved employee Bruno Diaz with personnel file L-002."""
    return make_employee(national_id="28999000", file_number="L-002", name="Bruno", surname="Diaz")


@pytest.fixture
def count_rows(db_manager):
    """Counts rows in a table, deleted ones included."""
    def _count(table: str, where: str = "1 = 1") -> int:
        row = db_manager.fetch_one(f"SELECT COUNT(*) AS total FROM {table} WHERE {where}")
        return row["total"]
    return _count
