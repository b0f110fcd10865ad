"""
Clerk User Migration

Bulk-imports users from a JSON export into Clerk and offers a companion
cleanup tool for development instances.

Supports:
- Joining a separate phone-number export onto the user records
- Schema validation before anything is sent
- Imported password digests for a fixed set of hashing algorithms
- Fixed pacing between requests with a cooldown-and-retry on rate limits
- Resuming an interrupted run from an offset
- Per-run append-only audit logs
"""

__version__ = "0.1.0"
