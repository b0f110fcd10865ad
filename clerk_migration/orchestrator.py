"""Migration driver - submits user records to the identity provider one by one."""

import logging
import time
from datetime import datetime, timezone
from typing import Any, Callable, Optional, Sequence

from .audit import AuditLog
from .config import MigrationSettings
from .loaders.base import BaseLoader
from .models.migration import (
    MigrationReport,
    MigrationStatus,
    OutcomeKind,
    RecordOutcome,
)
from .models.record import MigrationResult, UserRecord
from .services.validator import RecordValidator

logger = logging.getLogger(__name__)


class MigrationDriver:
    """
    Drives a migration run.

    Records are processed strictly in order, one request in flight at a
    time. Before every record the driver waits the pacing delay; a 429 from
    the provider triggers the cooldown and a resubmission of the same record
    without another pacing delay. Duplicates (422) and other failures are
    written to the audit log and the run continues.
    """

    def __init__(
        self,
        loader: BaseLoader,
        settings: MigrationSettings,
        audit_log: AuditLog,
        validator: Optional[RecordValidator] = None,
        sleep: Callable[[float], None] = time.sleep
    ):
        """
        Initialize the driver.

        Args:
            loader: Loader for the target identity provider
            settings: Pacing, cooldown, offset and hasher settings
            audit_log: Log receiving duplicate and failed outcomes
            validator: Record validator (a default one is created if omitted)
            sleep: Sleep function, in seconds
        """
        self.loader = loader
        self.settings = settings
        self.audit_log = audit_log
        self.validator = validator or RecordValidator()
        self._sleep = sleep
        self.report = MigrationReport()

    def run(self, records: Sequence[Any]) -> MigrationReport:
        """
        Migrate ``records[offset:]``.

        Returns:
            MigrationReport with the run's counters
        """
        offset = self.settings.offset
        self.report = MigrationReport(total_records=len(records), offset=offset)
        self.report.started_at = datetime.now(timezone.utc)
        self.report.status = MigrationStatus.RUNNING

        pending = records[offset:]
        logger.info(
            f"Attempting migration of {len(pending)} users with an offset of {offset}"
        )

        for index, data in enumerate(pending, 1):
            logger.debug(f"Waiting {self.settings.delay_ms} ms before user {index}/{len(pending)}")
            self._sleep(self.settings.delay_seconds)
            logger.info(f"Migrating user {index}/{len(pending)}")
            self.process_record(data)

        self.report.status = MigrationStatus.COMPLETED
        self.report.completed_at = datetime.now(timezone.utc)
        logger.info(
            f"Migration complete: {self.report.migrated} migrated, "
            f"{self.report.already_exists} already existed, {self.report.failed} failed"
        )
        logger.debug(f"Migration report: {self.report.to_dict()}")
        return self.report

    def process_record(self, data: Any) -> RecordOutcome:
        """Validate and submit one record. Does not apply the pacing delay."""
        user, errors = self.validator.validate_record(data)

        if user is None:
            user_id = data.get("userId") if isinstance(data, dict) else None
            error = {"errors": [e.to_dict() for e in errors]}
            self.audit_log.log_outcome(user_id, **error)
            self.report.failed += 1
            logger.warning(f"User {user_id} failed validation, skipping")
            return RecordOutcome(user_id=user_id, kind=OutcomeKind.FAILED, error=error)

        return self._submit(user)

    def _submit(self, user: UserRecord) -> RecordOutcome:
        attempts = 0

        while True:
            attempts += 1
            result = self.loader.create_user(user, self.settings.password_hasher)
            kind = self._classify(result)

            if kind != OutcomeKind.RATE_LIMITED:
                break

            self.report.rate_limit_retries += 1
            suggested = ""
            if result.retry_after is not None:
                suggested = f" (provider suggested {result.retry_after:g} s)"
            logger.warning(
                f"Rate limit reached for user {user.user_id} (attempt {attempts}), "
                f"waiting for {self.settings.retry_delay_ms} ms{suggested}"
            )
            self._sleep(self.settings.retry_delay_seconds)

        if kind == OutcomeKind.CREATED:
            self.report.migrated += 1
            return RecordOutcome(user_id=user.user_id, kind=kind, attempts=attempts)

        error = result.to_log_dict()
        self.audit_log.log_outcome(user.user_id, **error)

        if kind == OutcomeKind.ALREADY_EXISTS:
            self.report.already_exists += 1
            logger.info(f"User {user.user_id} already exists")
        else:
            self.report.failed += 1
            logger.error(f"Failed to migrate user {user.user_id}: {result.error}")

        return RecordOutcome(user_id=user.user_id, kind=kind, attempts=attempts, error=error)

    @staticmethod
    def _classify(result: MigrationResult) -> OutcomeKind:
        if result.success:
            return OutcomeKind.CREATED
        if result.is_conflict:
            return OutcomeKind.ALREADY_EXISTS
        if result.is_rate_limited:
            return OutcomeKind.RATE_LIMITED
        return OutcomeKind.FAILED
