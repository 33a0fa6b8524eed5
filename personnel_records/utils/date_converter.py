# personnel_records/utils/date_converter.py

from datetime import date, datetime
from typing import Optional, Union

from personnel_records.constants import DATE_FORMAT


def to_db_date(value: Optional[Union[date, datetime]]) -> Optional[str]:
    """A date object becomes ISO text for storage; None stays None (stored as NULL)."""
    if value is None:
        return None
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def from_db_date(value: Optional[Union[str, date]]) -> Optional[date]:
    """ISO text (or a timestamp with a time part) read from storage becomes a date."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).split(" ")[0].split("T")[0])


def to_display_str(value: Optional[date]) -> str:
    """Formats a date for log lines and messages."""
    if value is None:
        return "-"
    return value.strftime(DATE_FORMAT)
