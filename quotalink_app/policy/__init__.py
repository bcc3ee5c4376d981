"""Expiry and quota policy for URL records."""

from .expiry import (
    InaccessibilityReason,
    inaccessibility_reason,
    is_accessible,
    is_expired,
    is_limit_reached,
)

__all__ = [
    "InaccessibilityReason",
    "inaccessibility_reason",
    "is_accessible",
    "is_expired",
    "is_limit_reached",
]
