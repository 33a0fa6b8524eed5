# personnel_records/business_logic/records_service.py

from typing import List, Optional, Union

from personnel_records.business_logic.entities.employee_entity import EmployeeEntity
from personnel_records.business_logic.entities.personnel_file_entity import PersonnelFileEntity
from personnel_records.business_logic.employee_manager import EmployeeManager
from personnel_records.business_logic.personnel_file_manager import PersonnelFileManager
from personnel_records.constants import ContractStatus
import logging

logger = logging.getLogger(__name__)


class RecordsService:
    """
    Single entry point for callers (UI, scripts, other services).
    Employee writes go through EmployeeManager so the employee and its
    personnel file always change together.
    """

    def __init__(self, employee_manager: EmployeeManager, personnel_file_manager: PersonnelFileManager):
        if employee_manager is None: raise ValueError("employee_manager cannot be None")
        if personnel_file_manager is None: raise ValueError("personnel_file_manager cannot be None")
        self.employee_manager = employee_manager
        self.personnel_file_manager = personnel_file_manager

    # --- employees ---

    def create_employee(self, employee: EmployeeEntity) -> EmployeeEntity:
        return self.employee_manager.add_employee(employee)

    def update_employee(self, employee: EmployeeEntity) -> EmployeeEntity:
        return self.employee_manager.update_employee(employee)

    def delete_employee(self, employee_id: int) -> None:
        self.employee_manager.delete_employee(employee_id)

    def get_employee(self, employee_id: int) -> EmployeeEntity:
        return self.employee_manager.get_employee_by_id(employee_id)

    def list_employees(self) -> List[EmployeeEntity]:
        return self.employee_manager.get_all_employees()

    def find_employee_by_national_id(self, national_id: str) -> EmployeeEntity:
        return self.employee_manager.get_employee_by_national_id(national_id)

    def search_employees_by_name(self, text: Optional[str]) -> List[EmployeeEntity]:
        return self.employee_manager.search_employees_by_name(text)

    # --- personnel files ---

    def list_personnel_files(self) -> List[PersonnelFileEntity]:
        return self.personnel_file_manager.get_all_personnel_files()

    def list_personnel_files_by_status(self, status: Union[ContractStatus, str]) -> List[PersonnelFileEntity]:
        return self.personnel_file_manager.get_personnel_files_by_status(status)

    def get_personnel_file(self, file_id: int) -> PersonnelFileEntity:
        return self.personnel_file_manager.get_personnel_file_by_id(file_id)

    def find_personnel_file_by_number(self, file_number: str) -> PersonnelFileEntity:
        return self.personnel_file_manager.get_personnel_file_by_number(file_number)

    def update_personnel_file(self, personnel_file: PersonnelFileEntity) -> PersonnelFileEntity:
        return self.personnel_file_manager.update_personnel_file(personnel_file)

    def create_personnel_file(self, personnel_file: Optional[PersonnelFileEntity] = None) -> None:
        logger.warning("Rejected standalone personnel file creation.")
        self.personnel_file_manager.add_personnel_file(personnel_file)

    def delete_personnel_file(self, file_id: Optional[int] = None) -> None:
        logger.warning(f"Rejected standalone deletion of personnel file ID {file_id}.")
        self.personnel_file_manager.delete_personnel_file(file_id)
