# personnel_records/business_logic/personnel_file_manager.py

from typing import Optional, List, Union

from personnel_records.business_logic.entities.personnel_file_entity import PersonnelFileEntity
from personnel_records.data_access.personnel_files_repository import PersonnelFilesRepository
from personnel_records.data_access.transaction_manager import TransactionManager
from personnel_records.constants import (
    ContractStatus, FILE_NUMBER_MAX_LENGTH, CATEGORY_MAX_LENGTH, NOTES_MAX_LENGTH
)
from personnel_records.exceptions import (
    ValidationError, DuplicateKeyError, OperationNotSupportedError, NotFoundError
)
import logging

logger = logging.getLogger(__name__)


class PersonnelFileManager:
    """
    Business rules for personnel files.

    A personnel file only exists as part of an employee, so creation and
    deletion are reachable only through the *_tx methods that EmployeeManager
    calls inside its own transaction. This manager never opens a transaction.
    """

    def __init__(self, personnel_files_repository: PersonnelFilesRepository):
        if personnel_files_repository is None:
            raise ValueError("personnel_files_repository cannot be None")
        self.personnel_files_repository = personnel_files_repository

    # --- disabled standalone writes ---

    def add_personnel_file(self, personnel_file: Optional[PersonnelFileEntity]) -> None:
        raise OperationNotSupportedError(
            "A personnel file cannot be created on its own. "
            "Create the employee it belongs to and the file is created with it.")

    def delete_personnel_file(self, file_id: Optional[int]) -> None:
        raise OperationNotSupportedError(
            "A personnel file cannot be deleted on its own. "
            f"Delete the employee it belongs to instead (file ID: {file_id}).")

    # --- writes inside an employee transaction ---

    def add_personnel_file_tx(self,
                              personnel_file: PersonnelFileEntity,
                              employee_id: int,
                              tx: TransactionManager) -> PersonnelFileEntity:
        if not isinstance(employee_id, int) or employee_id <= 0:
            raise ValidationError("The owning employee ID must be greater than 0.")
        self.validate_personnel_file(personnel_file)
        self._validate_file_number_unique(personnel_file, tx)

        personnel_file.employee_id = employee_id
        created = self.personnel_files_repository.add_tx(personnel_file, tx)
        logger.info(f"Personnel file '{created.file_number}' (ID: {created.id}) staged for employee ID {employee_id}.")
        return created

    def update_personnel_file_tx(self, personnel_file: PersonnelFileEntity, tx: TransactionManager) -> PersonnelFileEntity:
        self._validate_for_update(personnel_file)
        self.validate_personnel_file(personnel_file)
        self._validate_file_number_unique(personnel_file, tx)
        return self.personnel_files_repository.update_tx(personnel_file, tx)

    def delete_personnel_file_tx(self, file_id: int, tx: TransactionManager) -> None:
        self._validate_id(file_id)
        self.personnel_files_repository.soft_delete_tx(file_id, tx)
        logger.info(f"Personnel file ID {file_id} staged for soft delete.")

    # --- standalone update ---

    def update_personnel_file(self, personnel_file: PersonnelFileEntity) -> PersonnelFileEntity:
        """For callers that only touch the file row, outside any employee transaction."""
        self._validate_for_update(personnel_file)
        self.validate_personnel_file(personnel_file)
        self._validate_file_number_unique(personnel_file)
        updated = self.personnel_files_repository.update(personnel_file)
        logger.info(f"Personnel file '{updated.file_number}' (ID: {updated.id}) updated successfully.")
        return updated

    # --- reads ---

    def get_personnel_file_by_id(self, file_id: int) -> PersonnelFileEntity:
        self._validate_id(file_id)
        personnel_file = self.personnel_files_repository.get_by_id(file_id)
        if personnel_file is None:
            logger.debug(f"Personnel file with ID {file_id} not found.")
            raise NotFoundError(f"Personnel file with ID {file_id} does not exist.")
        return personnel_file

    def get_personnel_file_by_number(self, file_number: str) -> PersonnelFileEntity:
        if not file_number or not file_number.strip():
            raise ValidationError("The file number cannot be empty.")
        personnel_file = self.personnel_files_repository.get_by_file_number(file_number)
        if personnel_file is None:
            raise NotFoundError(f"No personnel file with number '{file_number.strip()}'.")
        return personnel_file

    def get_all_personnel_files(self) -> List[PersonnelFileEntity]:
        logger.debug("Fetching all personnel files.")
        return self.personnel_files_repository.get_all()

    def get_personnel_files_by_status(self, status: Union[ContractStatus, str]) -> List[PersonnelFileEntity]:
        if isinstance(status, str):
            try:
                status = ContractStatus(status.strip().upper())
            except ValueError:
                raise ValidationError(f"Invalid contract status: {status}") from None
        if not isinstance(status, ContractStatus):
            raise ValidationError(f"Invalid contract status: {status}")
        logger.debug(f"Fetching personnel files with status: {status.value}")
        return self.personnel_files_repository.get_by_status(status)

    # --- validation ---

    def _validate_id(self, file_id: int) -> None:
        if not isinstance(file_id, int) or file_id <= 0:
            raise ValidationError("The ID must be greater than 0.")

    def _validate_for_update(self, personnel_file: Optional[PersonnelFileEntity]) -> None:
        if personnel_file is None or not personnel_file.id or personnel_file.id <= 0:
            raise ValidationError("The personnel file to update cannot be None and must have a valid ID.")

    def validate_personnel_file(self, personnel_file: Optional[PersonnelFileEntity]) -> None:
        if personnel_file is None:
            raise ValidationError("The personnel file cannot be None.")
        if not isinstance(personnel_file.file_number, str) or not personnel_file.file_number.strip():
            raise ValidationError("The file number cannot be empty.")
        if personnel_file.status is None:
            raise ValidationError("The personnel file status cannot be empty.")
        if not isinstance(personnel_file.status, ContractStatus):
            raise ValidationError(f"Invalid contract status: {personnel_file.status}")

        personnel_file.file_number = personnel_file.file_number.strip()
        if len(personnel_file.file_number) > FILE_NUMBER_MAX_LENGTH:
            raise ValidationError(f"The file number cannot exceed {FILE_NUMBER_MAX_LENGTH} characters.")
        if personnel_file.category is not None and len(personnel_file.category) > CATEGORY_MAX_LENGTH:
            raise ValidationError(f"The category cannot exceed {CATEGORY_MAX_LENGTH} characters.")
        if personnel_file.notes is not None and len(personnel_file.notes) > NOTES_MAX_LENGTH:
            raise ValidationError(f"The notes cannot exceed {NOTES_MAX_LENGTH} characters.")

    def _validate_file_number_unique(self,
                                     personnel_file: PersonnelFileEntity,
                                     tx: Optional[TransactionManager] = None) -> None:
        """On insert any match is a duplicate; on update a match on the file's own id is fine."""
        existing = self.personnel_files_repository.get_by_file_number(personnel_file.file_number, tx)
        if existing is not None and existing.id != personnel_file.id:
            logger.warning(f"File number '{personnel_file.file_number}' already used by personnel file ID {existing.id}.")
            raise DuplicateKeyError(f"The file number '{personnel_file.file_number}' already exists.")
