# personnel_records/constants.py

from enum import Enum

# General
DATE_FORMAT = "%Y-%m-%d"

# Table names
EMPLOYEES_TABLE = "employees"
PERSONNEL_FILES_TABLE = "personnel_files"

# Personnel-file field limits
FILE_NUMBER_MAX_LENGTH = 20
CATEGORY_MAX_LENGTH = 30
NOTES_MAX_LENGTH = 255


class ContractStatus(Enum):
    """Contractual situation recorded on a personnel file."""
    ACTIVE = "ACTIVE"      # currently working
    INACTIVE = "INACTIVE"  # not working, whatever the reason
