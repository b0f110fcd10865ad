"""
Shared pytest fixtures for the migration tests.

Provides:
- settings: production-key MigrationSettings with default delays
- loader: FakeLoader (see tests/fixtures.py)
- sleep: RecordingSleep capturing requested durations
- audit_log / driver: wired together on a temporary directory
"""

import pytest

from clerk_migration.audit import AuditLog
from clerk_migration.config import MigrationSettings
from clerk_migration.orchestrator import MigrationDriver

from tests.fixtures import LIVE_KEY, FakeLoader, RecordingSleep


@pytest.fixture
def settings():
    return MigrationSettings(
        secret_key=LIVE_KEY,
        delay_ms=1000,
        retry_delay_ms=10000,
    )


@pytest.fixture
def loader():
    return FakeLoader()


@pytest.fixture
def sleep():
    return RecordingSleep()


@pytest.fixture
def audit_log(tmp_path):
    return AuditLog.for_migration(tmp_path)


@pytest.fixture
def driver(loader, settings, audit_log, sleep):
    return MigrationDriver(loader, settings, audit_log, sleep=sleep)
