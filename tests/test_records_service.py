"""
Tests for records_service.py - the full flow through the wired service.
"""

from unittest.mock import MagicMock

import pytest

from personnel_records.business_logic.entities.employee_entity import EmployeeEntity
from personnel_records.business_logic.entities.personnel_file_entity import PersonnelFileEntity
from personnel_records.business_logic.records_service import RecordsService
from personnel_records.constants import ContractStatus
from personnel_records.exceptions import (
    NotFoundError, OperationNotSupportedError, DuplicateKeyError
)

from conftest import make_employee


class TestEmployeeLifecycle:
    """Create, read, update, delete and re-create Ana Gomez."""

    def test_full_lifecycle(self, service):
        created = service.create_employee(make_employee())
        assert created.id > 0

        found = service.find_employee_by_national_id("30111222")
        assert found.id == created.id
        assert found.personnel_file.file_number == "L-001"
        assert service.get_personnel_file(found.personnel_file.id).employee_id == created.id

        found.email = "ana.gomez@corp.example"
        found.personnel_file.status = ContractStatus.INACTIVE
        service.update_employee(found)
        assert service.get_employee(created.id).email == "ana.gomez@corp.example"
        assert [f.file_number for f in service.list_personnel_files_by_status("INACTIVE")] == ["L-001"]

        file_id = created.personnel_file.id
        service.delete_employee(created.id)
        with pytest.raises(NotFoundError):
            service.get_employee(created.id)
        with pytest.raises(NotFoundError):
            service.get_personnel_file(file_id)
        with pytest.raises(NotFoundError):
            service.find_personnel_file_by_number("L-001")
        assert service.list_employees() == []
        assert service.list_personnel_files() == []

        recreated = service.create_employee(make_employee())
        assert recreated.id != created.id
        assert service.find_employee_by_national_id("30111222").id == recreated.id

    def test_created_employee_reads_back_unchanged(self, service):
        created = service.create_employee(make_employee())

        assert service.get_employee(created.id) == created

    def test_minimal_employee_reads_back_unchanged(self, service):
        minimal = EmployeeEntity(
            name="Ana",
            surname="Gomez",
            national_id="30111222",
            personnel_file=PersonnelFileEntity("L-001", ContractStatus.ACTIVE),
        )

        created = service.create_employee(minimal)

        loaded = service.get_employee(created.id)
        assert loaded == created
        assert loaded.email is None
        assert loaded.hire_date is None
        assert loaded.personnel_file.opened_on is None
        assert loaded.personnel_file.notes is None

    def test_duplicate_through_service(self, service):
        service.create_employee(make_employee())
        with pytest.raises(DuplicateKeyError):
            service.create_employee(make_employee(file_number="L-002"))

    def test_search_and_list(self, service):
        service.create_employee(make_employee())
        service.create_employee(make_employee(national_id="28999000", file_number="L-002",
                                              name="Bruno", surname="Diaz"))

        assert len(service.list_employees()) == 2
        assert [e.name for e in service.search_employees_by_name("GOMEZ")] == ["Ana"]
        assert len(service.list_personnel_files_by_status(ContractStatus.ACTIVE)) == 2

    def test_update_personnel_file_alone(self, service):
        created = service.create_employee(make_employee())
        personnel_file = service.find_personnel_file_by_number("L-001")
        personnel_file.notes = "Renewed"

        service.update_personnel_file(personnel_file)

        assert service.get_employee(created.id).personnel_file.notes == "Renewed"


class TestDisabledFileOperations:

    def test_create_personnel_file(self, service):
        with pytest.raises(OperationNotSupportedError):
            service.create_personnel_file(PersonnelFileEntity("L-500", ContractStatus.ACTIVE))
        assert service.list_personnel_files() == []

    def test_delete_personnel_file(self, service):
        created = service.create_employee(make_employee())
        with pytest.raises(OperationNotSupportedError):
            service.delete_personnel_file(created.personnel_file.id)
        assert service.get_personnel_file(created.personnel_file.id).deleted is False


class TestDelegation:

    def test_requires_managers(self):
        with pytest.raises(ValueError):
            RecordsService(None, MagicMock())
        with pytest.raises(ValueError):
            RecordsService(MagicMock(), None)

    def test_employee_writes_go_through_employee_manager(self):
        employee_manager = MagicMock()
        personnel_file_manager = MagicMock()
        service = RecordsService(employee_manager, personnel_file_manager)
        employee = make_employee()

        service.create_employee(employee)
        service.delete_employee(7)

        employee_manager.add_employee.assert_called_once_with(employee)
        employee_manager.delete_employee.assert_called_once_with(7)
        personnel_file_manager.add_personnel_file_tx.assert_not_called()
