"""Command-line entry point for the Clerk user migration tools."""

import argparse
import logging
import sys

from .audit import AuditLog
from .cleanup import CleanupDriver
from .config import CleanupSettings, MigrationSettings
from .exceptions import MigrationError
from .extractors.json_extractor import JSONExtractor
from .loaders.clerk_loader import ClerkLoader
from .orchestrator import MigrationDriver
from .services.merger import merge_phone_numbers

logger = logging.getLogger(__name__)


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Clerk User Migration Utility - import users into Clerk"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Migrate users
    migrate_parser = subparsers.add_parser("migrate", help="Import users into Clerk")
    migrate_parser.add_argument(
        "users_file", nargs="?", default="users.json", help="JSON array of users"
    )
    migrate_parser.add_argument(
        "phones_file", nargs="?", default="users-phone-numbers.json",
        help="JSON array of {id, phone} rows"
    )
    migrate_parser.add_argument("--dry-run", action="store_true", help="Simulate without changes")
    migrate_parser.add_argument("--log-dir", default=".", help="Directory for the audit log")
    migrate_parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")

    # Delete every user of a development instance
    cleanup_parser = subparsers.add_parser("cleanup", help="Delete all users (development only)")
    cleanup_parser.add_argument("--log-dir", default=".", help="Directory for the audit log")
    cleanup_parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")

    args = parser.parse_args(argv)

    # Set up logging
    log_level = logging.DEBUG if getattr(args, "verbose", False) else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    try:
        if args.command == "migrate":
            run_migration(args)
        elif args.command == "cleanup":
            run_cleanup(args)
        else:
            parser.print_help()
    except MigrationError as e:
        logger.error(str(e))
        sys.exit(1)


def run_migration(args):
    """Run a migration from the export files."""
    settings = MigrationSettings.from_env()

    print("Clerk User Migration Utility")
    logger.info(f"Fetching users from {args.users_file}")

    users = JSONExtractor(args.users_file).extract().records
    phone_numbers = JSONExtractor(args.phones_file, required=False).extract().records
    records = merge_phone_numbers(users, phone_numbers)

    loader = ClerkLoader(settings.secret_key, settings.api_url, dry_run=args.dry_run)
    driver = MigrationDriver(loader, settings, AuditLog.for_migration(args.log_dir))
    report = driver.run(records)

    print("\n" + "=" * 60)
    print("MIGRATION COMPLETE")
    print("=" * 60)
    print(f"Total records: {report.total_records} (offset {report.offset})")
    print(f"{report.migrated} users migrated")
    print(f"{report.already_exists} users already existed")
    print(f"{report.failed} users failed to upload")
    if report.duration_seconds:
        print(f"Duration: {report.duration_seconds:.2f} seconds")
    if driver.audit_log.entries_written:
        print(f"Details written to {driver.audit_log.path}")


def run_cleanup(args):
    """Delete every user of the configured development instance."""
    settings = CleanupSettings.from_env()

    loader = ClerkLoader(settings.secret_key, settings.api_url)
    driver = CleanupDriver(loader, AuditLog.for_cleanup(args.log_dir))
    report = driver.run()

    print(f"{report.deleted} users deleted")


if __name__ == "__main__":
    main()
