"""Test doubles and helpers shared across the test modules."""

import json
from collections import defaultdict, deque
from typing import Any, Dict, List, Optional

from clerk_migration.audit import AuditLog
from clerk_migration.loaders.base import BaseLoader
from clerk_migration.models.migration import PasswordHasher
from clerk_migration.models.record import MigrationResult, UserRecord

LIVE_KEY = "sk_live_abc123"
TEST_KEY = "sk_test_abc123"


class FakeLoader(BaseLoader):
    """
    In-memory loader.

    Users are stored by external id, so creating the same user twice yields
    a 422 like the real provider. Specific responses can be queued per user
    with ``script`` and are consumed before the default behaviour applies.
    """

    def __init__(self, users: Optional[List[Dict[str, Any]]] = None):
        super().__init__("fake")
        self.created: Dict[str, UserRecord] = {}
        self.create_calls: List[UserRecord] = []
        self.hashers: List[PasswordHasher] = []
        self.delete_calls: List[str] = []
        self.remote_users = list(users or [])
        self.failing_deletes: Dict[str, MigrationResult] = {}
        self.retry_after: Optional[float] = None
        self._scripted = defaultdict(deque)

    def script(self, user_id: str, *status_codes: int) -> None:
        for status in status_codes:
            self._scripted[user_id].append(status)

    def create_user(self, user, password_hasher):
        self.create_calls.append(user)
        self.hashers.append(password_hasher)

        queue = self._scripted[user.user_id]
        status = queue.popleft() if queue else None

        if status is None:
            if user.user_id in self.created:
                status = 422
            else:
                status = 200

        if status < 300:
            self.created[user.user_id] = user
            return MigrationResult(record_id=user.user_id, target_id=f"user_{user.user_id}",
                                   success=True, status_code=status)

        return MigrationResult(
            record_id=user.user_id,
            success=False,
            status_code=status,
            error=f"error {status}",
            errors=[{"code": f"code_{status}", "message": f"error {status}"}],
            trace_id="trace-1",
            retry_after=self.retry_after if status == 429 else None,
        )

    def delete_user(self, user_id):
        self.delete_calls.append(user_id)
        if user_id in self.failing_deletes:
            return self.failing_deletes[user_id]
        return MigrationResult(record_id=user_id, target_id=user_id, success=True, status_code=200)

    def list_users(self):
        return list(self.remote_users)


class RecordingSleep:
    def __init__(self):
        self.calls: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


def make_user(user_id: str, **overrides) -> Dict[str, Any]:
    user = {
        "userId": user_id,
        "email": f"{user_id}@example.com",
        "firstName": "Ada",
        "lastName": "Lovelace",
    }
    user.update(overrides)
    return user


def read_audit_entries(audit_log: AuditLog) -> List[Dict[str, Any]]:
    """Parse the newline + pretty JSON stream back into entries."""
    if not audit_log.path.exists():
        return []

    decoder = json.JSONDecoder()
    text = audit_log.path.read_text(encoding="utf-8")
    entries, pos = [], 0
    while pos < len(text):
        if text[pos].isspace():
            pos += 1
            continue
        entry, pos = decoder.raw_decode(text, pos)
        entries.append(entry)
    return entries
