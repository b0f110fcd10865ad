"""Join the user export with the phone-number export."""

import logging
from typing import Any, Dict, List, Sequence

from ..models.record import PhoneRecord

logger = logging.getLogger(__name__)


def index_phone_records(phone_records: Sequence[Any]) -> Dict[str, PhoneRecord]:
    """Index phone rows by id. The first row for an id wins.

    Rows whose id is not a string can never match a valid user and are
    skipped.
    """
    index: Dict[str, PhoneRecord] = {}
    for row in phone_records:
        if not isinstance(row, dict):
            continue
        record = PhoneRecord.from_dict(row)
        if not isinstance(record.id, str):
            continue
        index.setdefault(record.id, record)
    return index


def merge_phone_numbers(
    users: Sequence[Any],
    phone_records: Sequence[Any]
) -> List[Any]:
    """
    Attach phone numbers to user records.

    Args:
        users: Raw user records, in export order
        phone_records: Raw ``{"id", "phone"}`` rows

    Returns:
        A list with the same length and order as ``users``. A user with a
        matching row and a truthy phone becomes a copy with
        ``phoneNumber = [str(phone)]``; every other user is returned as is.
    """
    index = index_phone_records(phone_records)
    merged = []
    matched = 0

    for user in users:
        user_id = user.get("userId") if isinstance(user, dict) else None
        if not isinstance(user_id, str):
            # left for the validator to reject
            merged.append(user)
            continue

        match = index.get(user_id)
        if match is None or not match.phone:
            merged.append(user)
            continue

        merged.append({**user, "phoneNumber": [str(match.phone)]})
        matched += 1

    logger.debug(f"Attached phone numbers to {matched}/{len(merged)} users")
    return merged
