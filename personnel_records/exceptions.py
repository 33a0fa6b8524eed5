# personnel_records/exceptions.py
"""
Error taxonomy shared by the data-access and business-logic layers.

Validation and business-rule errors are raised before any storage access.
Storage errors come from the driver (translated at the repository or
transaction boundary). Anything raised inside a write scope reaches the
caller as a CoordinationError chained to the original cause.
"""


class PersonnelRecordsError(Exception):
    """Base exception for every error raised by this package"""
    pass


class ValidationError(PersonnelRecordsError, ValueError):
    """Bad input shape or content: blank required field, non-positive id, field too long"""
    pass


class BusinessRuleError(PersonnelRecordsError):
    """A business invariant would be broken by the requested operation"""
    pass


class DuplicateKeyError(BusinessRuleError):
    """A natural key (national id, file number) is already held by a non-deleted record"""
    pass


class OperationNotSupportedError(BusinessRuleError):
    """The operation is disabled by policy"""
    pass


class NotFoundError(PersonnelRecordsError):
    """A lookup by id or natural key matched no non-deleted row"""
    pass


class StorageError(PersonnelRecordsError):
    """The store rejected an operation or the connection is unusable"""
    pass


class RecordNotFoundError(StorageError):
    """An update or soft-delete affected zero rows"""
    pass


class TransactionStateError(StorageError):
    """A transaction operation was called in the wrong state"""
    pass


class DataIntegrityError(PersonnelRecordsError):
    """Stored data violates an invariant that should be unreachable"""
    pass


class CoordinationError(PersonnelRecordsError):
    """A multi-record write failed and was rolled back; __cause__ holds the original error"""
    pass
