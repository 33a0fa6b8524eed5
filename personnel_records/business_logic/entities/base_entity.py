# personnel_records/business_logic/entities/base_entity.py
from typing import Protocol


class PersistentEntity(Protocol):
    """
    Shape shared by every persisted entity.
    id is assigned by the store on insert (0 before that); deleted is the logical-deletion flag.
    """
    id: int
    deleted: bool

    def mark_deleted(self) -> None:
        ...
