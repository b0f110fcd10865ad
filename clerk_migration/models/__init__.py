"""Data models for the migration application."""

from .migration import (
    CleanupReport,
    MigrationReport,
    MigrationStatus,
    OutcomeKind,
    PasswordHasher,
    RecordOutcome,
)
from .record import (
    MigrationResult,
    PhoneRecord,
    UserRecord,
    ValidationError,
)

__all__ = [
    "CleanupReport",
    "MigrationReport",
    "MigrationStatus",
    "OutcomeKind",
    "PasswordHasher",
    "RecordOutcome",
    "MigrationResult",
    "PhoneRecord",
    "UserRecord",
    "ValidationError",
]
