from datetime import date
from typing import Optional


def check_date_range(start: Optional[date], end: Optional[date], label: str) -> None:
    if start and end and end < start:
        raise ValueError(f"{label} end_date must not be before start_date")


def reject_null(value, info):
    """Partial updates may omit a field but not clear a required one."""
    if value is None:
        raise ValueError(f"{info.field_name} cannot be null")
    return value
