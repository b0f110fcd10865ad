"""Validation service for user records."""

import logging
from typing import Any, List, Optional, Tuple

from pydantic import ValidationError as PydanticValidationError

from ..models.record import UserRecord, ValidationError

logger = logging.getLogger(__name__)


class RecordValidator:
    """
    Validator for merged user records before submission.

    Checks the record against the ``UserRecord`` schema:
    - ``userId`` is a required string
    - ``email`` is a required, well-formed address
    - ``firstName``, ``lastName`` and ``password`` are optional strings
    - ``phoneNumber`` is an optional list of strings

    Failures are returned, never raised, so the caller can treat them as
    an ordinary failed record.
    """

    def validate_record(
        self,
        data: Any
    ) -> Tuple[Optional[UserRecord], List[ValidationError]]:
        """
        Validate a single record.

        Args:
            data: The merged record, as read from the export

        Returns:
            ``(user, [])`` on success, ``(None, errors)`` otherwise
        """
        if not isinstance(data, dict):
            return None, [ValidationError(
                field="",
                message=f"Expected an object, got {type(data).__name__}",
                error_type="type",
                value=data,
            )]

        try:
            return UserRecord.model_validate(data), []
        except PydanticValidationError as e:
            errors = [self._convert_error(err) for err in e.errors()]
            logger.debug(f"Record {data.get('userId')!r} failed validation: {errors}")
            return None, errors

    def _convert_error(self, err: dict) -> ValidationError:
        """Convert a pydantic error entry."""
        location = ".".join(str(part) for part in err.get("loc", ()))
        value = err.get("input")
        if err.get("type") == "missing":
            value = None
        return ValidationError(
            field=location,
            message=err.get("msg", "Invalid value"),
            error_type=err.get("type", "validation"),
            value=value,
        )

    def is_valid(self, data: Any) -> bool:
        """Quick check if a record is valid."""
        user, _ = self.validate_record(data)
        return user is not None
