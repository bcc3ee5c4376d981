"""
Data models for notification events.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from quotalink_app.clock import utcnow
from quotalink_app.policy.expiry import InaccessibilityReason


class NotificationType(str, Enum):
    """Kinds of record lifecycle events"""
    CREATED = "created"
    EXPIRED = "expired"
    LIMIT_REACHED = "limit_reached"
    INACCESSIBLE = "inaccessible"


class NotificationEvent(BaseModel):
    """
    Event emitted when a record is created, expires, hits its click
    limit, or is requested while inaccessible.

    Carries codes and ids only; turning it into a sentence is up to the sink.
    """

    type: NotificationType
    alias: str = Field(..., description="Short code of the record")
    original_url: str
    owner_id: UUID
    click_count: int = 0
    max_clicks: int = 0
    reason: Optional[InaccessibilityReason] = Field(None, description="Set for INACCESSIBLE events")
    timestamp: datetime = Field(default_factory=utcnow, description="When the event was emitted")

    model_config = {
        "json_schema_extra": {
            "example": {
                "type": "limit_reached",
                "alias": "aB3xY7z",
                "original_url": "https://example.com",
                "owner_id": "4f1d8b2e-3c5a-4e8b-9f0a-1b2c3d4e5f60",
                "click_count": 100,
                "max_clicks": 100,
                "reason": None,
                "timestamp": "2025-10-29T10:30:00Z"
            }
        }
    }
