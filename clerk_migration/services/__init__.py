"""Service layer for the migration application."""

from .merger import merge_phone_numbers
from .validator import RecordValidator

__all__ = [
    "merge_phone_numbers",
    "RecordValidator",
]
