"""Cleanup driver - deletes every user of a development instance."""

import logging
from datetime import datetime, timezone

from .audit import AuditLog
from .exceptions import FatalDeletionError
from .loaders.base import BaseLoader
from .models.migration import CleanupReport, MigrationStatus

logger = logging.getLogger(__name__)


class CleanupDriver:
    """
    Deletes all users sequentially.

    Every outcome is written to the audit log. Unlike the migration driver,
    the first failed deletion aborts the run with FatalDeletionError.
    """

    def __init__(self, loader: BaseLoader, audit_log: AuditLog):
        self.loader = loader
        self.audit_log = audit_log
        self.report = CleanupReport()

    def run(self) -> CleanupReport:
        self.report = CleanupReport(started_at=datetime.now(timezone.utc))
        self.report.status = MigrationStatus.RUNNING

        users = self.loader.list_users()
        self.report.found = len(users)
        logger.info(f"Found {len(users)} users to delete")

        for user in users:
            user_id = user.get("id")
            logger.info(f"Deleting user {user_id}")
            result = self.loader.delete_user(user_id)

            if not result.success:
                self.audit_log.log_outcome(user_id, deleted=False, **result.to_log_dict())
                self.report.status = MigrationStatus.FAILED
                self.report.completed_at = datetime.now(timezone.utc)
                raise FatalDeletionError(user_id, result)

            self.report.deleted += 1
            self.audit_log.log_outcome(user_id, deleted=True)

        self.report.status = MigrationStatus.COMPLETED
        self.report.completed_at = datetime.now(timezone.utc)
        logger.debug(f"Cleanup report: {self.report.to_dict()}")
        return self.report
