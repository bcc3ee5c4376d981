"""
Expiry policy: pure classification of a record's accessibility.

Nothing here touches the store. Callers pass the reference time so the
same record can be judged consistently within one operation.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from quotalink_app.models import UrlRecord, UrlStatus


class InaccessibilityReason(str, Enum):
    """Why a record cannot be opened (structured, never free text)"""
    EXPIRED = "expired"
    LIMIT_EXCEEDED = "limit_exceeded"
    INACTIVE = "inactive"
    NOT_ACCESSIBLE = "not_accessible"


def is_expired(record: UrlRecord, now: datetime) -> bool:
    return now >= record.expires_at


def is_limit_reached(record: UrlRecord) -> bool:
    return record.click_count >= record.max_clicks


def is_accessible(record: UrlRecord, now: datetime) -> bool:
    return (
        record.status is UrlStatus.ACTIVE
        and not is_expired(record, now)
        and not is_limit_reached(record)
    )


def inaccessibility_reason(record: UrlRecord, now: datetime) -> Optional[InaccessibilityReason]:
    """
    First matching reason, in priority order:
    expired > limit exceeded > inactive > generic.

    Returns None when the record is accessible.
    """
    if is_accessible(record, now):
        return None
    if record.status is UrlStatus.EXPIRED or is_expired(record, now):
        return InaccessibilityReason.EXPIRED
    if record.status is UrlStatus.LIMIT_EXCEEDED or is_limit_reached(record):
        return InaccessibilityReason.LIMIT_EXCEEDED
    if record.status is UrlStatus.INACTIVE:
        return InaccessibilityReason.INACTIVE
    return InaccessibilityReason.NOT_ACCESSIBLE
