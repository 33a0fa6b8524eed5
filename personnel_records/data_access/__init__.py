# personnel_records/data_access/__init__.py

from .database_manager import DatabaseManager
from .transaction_manager import TransactionManager, TransactionState
from .base_repository import BaseRepository

from .employees_repository import EmployeesRepository
from .personnel_files_repository import PersonnelFilesRepository
