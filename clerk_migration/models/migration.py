"""Migration execution models."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from enum import Enum
from datetime import datetime


class MigrationStatus(str, Enum):
    """Status of a migration or cleanup run."""
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class PasswordHasher(str, Enum):
    """Password hashing algorithms accepted for imported digests."""
    ARGON2I = "argon2i"
    ARGON2ID = "argon2id"
    BCRYPT = "bcrypt"
    MD5 = "md5"
    PBKDF2_SHA256 = "pbkdf2_sha256"
    PBKDF2_SHA256_DJANGO = "pbkdf2_sha256_django"
    PBKDF2_SHA1 = "pbkdf2_sha1"
    SCRYPT_FIREBASE = "scrypt_firebase"


class OutcomeKind(str, Enum):
    """Classification of a create attempt."""
    CREATED = "created"
    ALREADY_EXISTS = "already_exists"
    RATE_LIMITED = "rate_limited"  # never terminal, the driver retries
    FAILED = "failed"


@dataclass
class RecordOutcome:
    """Terminal outcome of one record."""
    user_id: Optional[str]
    kind: OutcomeKind
    attempts: int = 0
    error: Optional[Dict[str, Any]] = None


@dataclass
class MigrationReport:
    """Counters for one migration run."""
    total_records: int = 0
    offset: int = 0
    migrated: int = 0
    already_exists: int = 0
    failed: int = 0
    rate_limit_retries: int = 0
    status: MigrationStatus = MigrationStatus.PENDING
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @property
    def skipped_by_offset(self) -> int:
        return min(self.offset, self.total_records)

    @property
    def processed(self) -> int:
        return self.migrated + self.already_exists + self.failed

    @property
    def duration_seconds(self) -> Optional[float]:
        if self.started_at and self.completed_at:
            return (self.completed_at - self.started_at).total_seconds()
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_records": self.total_records,
            "offset": self.offset,
            "skipped_by_offset": self.skipped_by_offset,
            "processed": self.processed,
            "migrated": self.migrated,
            "already_exists": self.already_exists,
            "failed": self.failed,
            "rate_limit_retries": self.rate_limit_retries,
            "status": self.status.value,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "duration_seconds": self.duration_seconds,
        }


@dataclass
class CleanupReport:
    """Counters for one cleanup run."""
    found: int = 0
    deleted: int = 0
    status: MigrationStatus = MigrationStatus.PENDING
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @property
    def duration_seconds(self) -> Optional[float]:
        if self.started_at and self.completed_at:
            return (self.completed_at - self.started_at).total_seconds()
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "found": self.found,
            "deleted": self.deleted,
            "status": self.status.value,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "duration_seconds": self.duration_seconds,
        }
