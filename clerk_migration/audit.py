"""Append-only audit log shared by the migration and cleanup runs."""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"


class AuditLog:
    """
    One file per run, named ``<prefix>-<start timestamp>.json``.

    Each entry is written as a newline followed by pretty-printed JSON. The
    file is created on the first append and is never read back or rewritten.
    """

    def __init__(
        self,
        prefix: str,
        directory: Union[str, Path] = ".",
        started_at: Optional[datetime] = None
    ):
        self.started_at = started_at or datetime.now(timezone.utc)
        self.directory = Path(directory)
        self.path = self.directory / f"{prefix}-{self.started_at.strftime(TIMESTAMP_FORMAT)}.json"
        self.entries_written = 0

    @classmethod
    def for_migration(cls, directory: Union[str, Path] = ".") -> "AuditLog":
        return cls("migration-log", directory)

    @classmethod
    def for_cleanup(cls, directory: Union[str, Path] = ".") -> "AuditLog":
        return cls("cleanup-log", directory)

    def append(self, payload: Dict[str, Any]) -> None:
        """Append one entry."""
        self.directory.mkdir(parents=True, exist_ok=True)
        with open(self.path, "a", encoding="utf-8") as f:
            f.write("\n" + json.dumps(payload, indent=2, default=str))
        self.entries_written += 1

    def log_outcome(self, user_id: Optional[str], **details: Any) -> None:
        """Append ``{"userId": user_id, **details}``."""
        self.append({"userId": user_id, **details})
