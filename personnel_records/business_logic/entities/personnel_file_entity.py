# personnel_records/business_logic/entities/personnel_file_entity.py
from dataclasses import dataclass, field
from typing import Optional
from datetime import date
from personnel_records.constants import ContractStatus


@dataclass
class PersonnelFileEntity:
    file_number: str
    status: ContractStatus  # Enum: ACTIVE, INACTIVE
    category: Optional[str] = field(default=None)
    opened_on: Optional[date] = field(default=None)
    notes: Optional[str] = field(default=None)
    employee_id: Optional[int] = field(default=None)  # Foreign Key to EmployeeEntity, fixed once created
    id: int = field(default=0, kw_only=True)
    deleted: bool = field(default=False, kw_only=True)

    def mark_deleted(self) -> None:
        # A deleted file no longer describes a working employee.
        self.deleted = True
        self.status = ContractStatus.INACTIVE
