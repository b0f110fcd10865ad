"""Exceptions raised by the migration and cleanup tools.

Per-record problems (schema mismatches, duplicates, rate limits, provider
errors during migration) are reported as values, not exceptions. The classes
here cover the conditions that stop a run.
"""

from typing import Any, Dict, List, Optional


class MigrationError(Exception):
    """Base exception for the migration toolkit."""

    pass


class ConfigurationError(MigrationError):
    """
    Raised at startup when the environment is unusable.

    Covers a missing secret key, malformed numeric settings, an unknown
    password hasher and a credential of the wrong class for the selected
    mode (development key for migration, production key for cleanup).
    """

    pass


class ExtractionError(MigrationError):
    """Raised when an input file cannot be read or is not a JSON array."""

    def __init__(self, message: str, file_path: Optional[str] = None):
        super().__init__(message)
        self.file_path = file_path


class ProviderError(MigrationError):
    """
    Raised when the identity provider rejects a request that has no
    per-record recovery path (for example listing users).

    Attributes:
        status_code: HTTP status returned by the provider, if any
        errors: Structured error list from the response body
        trace_id: Provider trace identifier, useful for support requests
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
        trace_id: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.errors = errors or []
        self.trace_id = trace_id


class FatalDeletionError(MigrationError):
    """
    Raised by the cleanup driver on the first failed deletion.

    Deletion is destructive, so the whole run stops instead of skipping
    the user. The failed result is kept for reporting.
    """

    def __init__(self, user_id: str, result: Any):
        detail = getattr(result, "error", None) or "unknown error"
        super().__init__(f"Failed to delete user {user_id}: {detail}")
        self.user_id = user_id
        self.result = result
