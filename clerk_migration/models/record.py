"""Record models for migration data."""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+'-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")


@dataclass
class ValidationError:
    """A validation error on a record."""
    field: str
    message: str
    error_type: str = "validation"
    value: Optional[Any] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "field": self.field,
            "message": self.message,
            "error_type": self.error_type,
            "value": self.value,
        }


class UserRecord(BaseModel):
    """
    A user as exported from the legacy system.

    Field names follow the export format (``userId``, ``firstName``...)
    through aliases. Unknown keys in the export are dropped.
    """

    model_config = ConfigDict(extra="ignore")

    user_id: str = Field(alias="userId")
    email: str
    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    password: Optional[str] = None  # pre-hashed digest
    phone_number: Optional[List[str]] = Field(default=None, alias="phoneNumber")

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        if not EMAIL_PATTERN.match(value):
            raise ValueError("Invalid email format")
        return value

    @property
    def has_password(self) -> bool:
        # An empty digest is treated like a missing one
        return bool(self.password)


@dataclass
class PhoneRecord:
    """A row of the auxiliary phone-number export."""
    id: str
    phone: Any

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PhoneRecord":
        return cls(id=data.get("id"), phone=data.get("phone"))


@dataclass
class MigrationResult:
    """Result of a single call to the identity provider."""
    record_id: Optional[str]
    target_id: Optional[str] = None  # ID assigned by the provider
    success: bool = False
    status_code: Optional[int] = None
    error: Optional[str] = None
    errors: List[Dict[str, Any]] = field(default_factory=list)
    trace_id: Optional[str] = None
    retry_after: Optional[float] = None
    response_data: Optional[Dict[str, Any]] = None
    loaded_at: Optional[datetime] = None

    @property
    def is_conflict(self) -> bool:
        return self.status_code == 422

    @property
    def is_rate_limited(self) -> bool:
        return self.status_code == 429

    def to_log_dict(self) -> Dict[str, Any]:
        """Render the provider error for the audit log."""
        payload: Dict[str, Any] = {
            "status": self.status_code,
            "clerkTraceId": self.trace_id,
            "errors": self.errors,
            "message": self.error,
        }
        return {k: v for k, v in payload.items() if v is not None}
