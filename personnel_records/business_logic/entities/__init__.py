# personnel_records/business_logic/entities/__init__.py
from .base_entity import PersistentEntity
from .personnel_file_entity import PersonnelFileEntity
from .employee_entity import EmployeeEntity

__all__ = [
    "PersistentEntity", "PersonnelFileEntity", "EmployeeEntity",
]
