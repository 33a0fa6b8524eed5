# personnel_records/business_logic/employee_manager.py

import sqlite3
from typing import Callable, Optional, List

from personnel_records.business_logic.entities.employee_entity import EmployeeEntity
from personnel_records.business_logic.personnel_file_manager import PersonnelFileManager
from personnel_records.data_access.employees_repository import EmployeesRepository
from personnel_records.data_access.transaction_manager import TransactionManager
from personnel_records.exceptions import (
    ValidationError, BusinessRuleError, DuplicateKeyError, NotFoundError,
    StorageError, DataIntegrityError, CoordinationError
)
from personnel_records.utils.date_converter import to_display_str
import logging

logger = logging.getLogger(__name__)


class EmployeeManager:
    """
    Unit of work for the employee / personnel-file pair.

    Every write opens one TransactionManager on a fresh connection and runs
    both row changes on it; the scope's close rolls back whatever was not
    committed.
    """

    def __init__(self,
                 employees_repository: EmployeesRepository,
                 personnel_file_manager: PersonnelFileManager,
                 connection_factory: Callable[[], sqlite3.Connection]):
        """
        :param employees_repository: An instance of EmployeesRepository.
        :param personnel_file_manager: An instance of PersonnelFileManager.
        :param connection_factory: Returns a new connection for each write scope.
        """
        if employees_repository is None: raise ValueError("employees_repository cannot be None")
        if personnel_file_manager is None: raise ValueError("personnel_file_manager cannot be None")
        if connection_factory is None: raise ValueError("connection_factory cannot be None")

        self.employees_repository = employees_repository
        self.personnel_file_manager = personnel_file_manager
        self.connection_factory = connection_factory

    def _open_scope(self) -> TransactionManager:
        try:
            connection = self.connection_factory()
        except sqlite3.Error as e:
            raise StorageError(f"Could not acquire a database connection: {e}") from e
        return TransactionManager(connection)

    def add_employee(self, employee: EmployeeEntity) -> EmployeeEntity:
        """
        Creates the employee and its personnel file in one transaction.
        The employee row goes first so its generated id can be the file's foreign key.
        """
        self._validate_employee(employee)
        self._validate_national_id_unique(employee.national_id, None)
        if employee.personnel_file is None:
            raise BusinessRuleError("An employee must be created together with a personnel file.")
        self.personnel_file_manager.validate_personnel_file(employee.personnel_file)

        personnel_file = employee.personnel_file
        try:
            with self._open_scope() as tx:
                tx.begin()

                self.employees_repository.add_tx(employee, tx)
                if not employee.id:
                    raise StorageError("Could not create the employee: the generated ID is 0.")

                self.personnel_file_manager.add_personnel_file_tx(personnel_file, employee.id, tx)

                tx.commit()
        except Exception as e:
            logger.error(f"Error adding employee '{employee.national_id}': {e}", exc_info=True)
            # Nothing was persisted; ids handed out inside the rolled-back transaction are void.
            employee.id = 0
            personnel_file.id = 0
            personnel_file.employee_id = None
            raise CoordinationError(f"Error creating employee: {e}") from e

        logger.info(f"Employee '{employee.full_name}' (ID: {employee.id}, hired {to_display_str(employee.hire_date)}) "
                    f"created with personnel file '{personnel_file.file_number}' (ID: {personnel_file.id}).")
        return employee

    def update_employee(self, employee: EmployeeEntity) -> EmployeeEntity:
        if employee is None or not isinstance(employee.id, int) or employee.id <= 0:
            raise ValidationError("The employee to update cannot be None and must have an ID.")
        if employee.personnel_file is None or not employee.personnel_file.id or employee.personnel_file.id <= 0:
            raise BusinessRuleError("The employee must have an attached personnel file with an ID to be updated.")

        self._validate_employee(employee)
        self._validate_national_id_unique(employee.national_id, employee.id)
        self.personnel_file_manager.validate_personnel_file(employee.personnel_file)

        personnel_file = employee.personnel_file
        original_owner_id = personnel_file.employee_id
        # Restricts the file update to this employee's own file.
        personnel_file.employee_id = employee.id
        try:
            with self._open_scope() as tx:
                tx.begin()

                self.personnel_file_manager.update_personnel_file_tx(personnel_file, tx)
                self.employees_repository.update_tx(employee, tx)

                tx.commit()
        except Exception as e:
            logger.error(f"Error updating employee ID {employee.id}: {e}", exc_info=True)
            personnel_file.employee_id = original_owner_id
            raise CoordinationError(f"Error updating employee: {e}") from e

        logger.info(f"Details for employee ID {employee.id} (personnel file ID: {personnel_file.id}) updated.")
        return employee

    def delete_employee(self, employee_id: int) -> None:
        """Soft-deletes the personnel file and then the employee, in one transaction."""
        self._validate_id(employee_id)

        employee = self.employees_repository.get_by_id(employee_id)
        if employee is None:
            logger.warning(f"Employee ID {employee_id} not found for deletion.")
            raise NotFoundError(f"No active employee found with ID {employee_id}.")
        if employee.personnel_file is None:
            logger.critical(f"Employee ID {employee_id} exists without a personnel file.")
            raise DataIntegrityError(f"Data error: employee {employee_id} has no personnel file attached.")

        personnel_file = employee.personnel_file
        try:
            with self._open_scope() as tx:
                tx.begin()

                self.personnel_file_manager.delete_personnel_file_tx(personnel_file.id, tx)
                self.employees_repository.soft_delete_tx(employee_id, tx)

                tx.commit()
        except Exception as e:
            logger.error(f"Error deleting employee ID {employee_id}: {e}", exc_info=True)
            raise CoordinationError(f"Error deleting employee: {e}") from e

        personnel_file.mark_deleted()
        employee.mark_deleted()
        logger.info(f"Employee ID {employee_id} and personnel file ID {personnel_file.id} marked deleted.")

    def get_employee_by_id(self, employee_id: int) -> EmployeeEntity:
        self._validate_id(employee_id)
        employee = self.employees_repository.get_by_id(employee_id)
        if employee is None:
            logger.debug(f"Employee with ID {employee_id} not found.")
            raise NotFoundError(f"No active employee found with ID {employee_id}.")
        return employee

    def get_all_employees(self) -> List[EmployeeEntity]:
        logger.debug("Fetching all employees.")
        return self.employees_repository.get_all()

    def get_employee_by_national_id(self, national_id: str) -> EmployeeEntity:
        if not national_id or not national_id.strip():
            raise ValidationError("The national ID cannot be empty.")
        employee = self.employees_repository.get_by_national_id(national_id)
        if employee is None:
            raise NotFoundError(f"No active employee found with national ID {national_id.strip()}.")
        return employee

    def search_employees_by_name(self, text: Optional[str]) -> List[EmployeeEntity]:
        if not text or not text.strip():
            return []
        logger.debug(f"Searching for employees with name query: '{text}'")
        return self.employees_repository.search_by_name(text)

    # --- validation ---

    def _validate_id(self, employee_id: int) -> None:
        if not isinstance(employee_id, int) or employee_id <= 0:
            raise ValidationError("The employee ID must be greater than 0.")

    def _validate_employee(self, employee: Optional[EmployeeEntity]) -> None:
        if employee is None:
            raise ValidationError("The employee cannot be None.")
        for field_name, label in (("name", "name"), ("surname", "surname"), ("national_id", "national ID")):
            value = getattr(employee, field_name)
            if not isinstance(value, str) or not value.strip():
                raise ValidationError(f"The employee {label} cannot be empty.")
        employee.national_id = employee.national_id.strip()

    def _validate_national_id_unique(self, national_id: str, employee_id: Optional[int]) -> None:
        """employee_id is None on insert; on update the employee's own row is not a conflict."""
        existing = self.employees_repository.get_by_national_id(national_id)
        if existing is not None and (employee_id is None or existing.id != employee_id):
            logger.warning(f"National ID {national_id} already belongs to employee ID {existing.id}.")
            raise DuplicateKeyError(f"An employee with national ID {national_id} already exists.")
