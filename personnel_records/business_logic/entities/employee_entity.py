# personnel_records/business_logic/entities/employee_entity.py
from dataclasses import dataclass, field
from typing import Optional
from datetime import date
from .personnel_file_entity import PersonnelFileEntity


@dataclass
class EmployeeEntity:
    name: str
    surname: str
    national_id: str  # unique among non-deleted employees
    email: Optional[str] = field(default=None)
    hire_date: Optional[date] = field(default=None)
    area: Optional[str] = field(default=None)
    personnel_file: Optional[PersonnelFileEntity] = field(default=None)  # owned 1:1
    id: int = field(default=0, kw_only=True)
    deleted: bool = field(default=False, kw_only=True)

    def mark_deleted(self) -> None:
        self.deleted = True

    @property
    def full_name(self) -> str:
        return f"{self.name} {self.surname}"
