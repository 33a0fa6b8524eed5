# personnel_records/app.py
import os
import sys
import logging
import logging.config
from typing import Optional

from personnel_records.config import DATABASE_PATH, LOGS_DIR, LOGGING_CONFIG

# --- Data Access Layer (DAL) ---
from personnel_records.data_access.database_manager import DatabaseManager
from personnel_records.data_access.employees_repository import EmployeesRepository
from personnel_records.data_access.personnel_files_repository import PersonnelFilesRepository

# --- Business Logic Layer (BLL) ---
from personnel_records.business_logic.personnel_file_manager import PersonnelFileManager
from personnel_records.business_logic.employee_manager import EmployeeManager
from personnel_records.business_logic.records_service import RecordsService

logger = logging.getLogger(__name__)


def configure_logging(config: Optional[dict] = None) -> None:
    """Applies LOGGING_CONFIG (or the given dictConfig mapping)."""
    if config is None:
        os.makedirs(LOGS_DIR, exist_ok=True)
        config = LOGGING_CONFIG
    logging.config.dictConfig(config)


def _wire(db_manager: DatabaseManager) -> RecordsService:
    employees_repository = EmployeesRepository(db_manager)
    personnel_files_repository = PersonnelFilesRepository(db_manager)

    personnel_file_manager = PersonnelFileManager(personnel_files_repository)
    employee_manager = EmployeeManager(employees_repository,
                                       personnel_file_manager,
                                       connection_factory=db_manager.get_connection)
    return RecordsService(employee_manager, personnel_file_manager)


def build_records_service(db_path: Optional[str] = None, create_schema: bool = True) -> RecordsService:
    db_manager = DatabaseManager(db_path or DATABASE_PATH)
    if create_schema:
        db_manager.create_tables()
    logger.debug(f"Records service wired to database {db_manager.db_path}")
    return _wire(db_manager)


def main() -> int:
    configure_logging()
    logger.info("Initializing Database Manager and creating tables...")
    db_manager = DatabaseManager(DATABASE_PATH)
    try:
        db_manager.create_tables()
        for table in db_manager.table_names():
            if table.startswith("sqlite_"):
                continue
            row = db_manager.fetch_one(f"SELECT COUNT(*) AS total FROM {table} WHERE deleted = 0")
            logger.info(f"Table '{table}': {row['total']} active rows.")
    except Exception as e:
        logger.error(f"FATAL: Could not initialize database at {db_manager.db_path}: {e}", exc_info=True)
        return 1
    logger.info(f"Database ready at {db_manager.db_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
