from datetime import datetime
from typing import List
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from .status import UrlStatus


class UrlRecord(BaseModel):
    """
    A shortened URL with its quota and lifetime.

    Records are immutable snapshots. The store swaps whole snapshots,
    so a reader never sees a half-applied change. Only click_count and
    status ever differ between two snapshots of the same alias.
    """

    alias: str = Field(..., description="7-character Base62 short code")
    original_url: str = Field(..., description="Normalized target URL")
    owner_id: UUID = Field(..., description="Owner that created the record")
    created_at: datetime
    expires_at: datetime
    max_clicks: int = Field(..., gt=0)
    click_count: int = Field(default=0, ge=0)
    status: UrlStatus = UrlStatus.ACTIVE

    model_config = ConfigDict(frozen=True)

    def with_click(self) -> "UrlRecord":
        """Next snapshot after one successful access"""
        return self.model_copy(update={"click_count": self.click_count + 1})

    def with_status(self, status: UrlStatus) -> "UrlRecord":
        """Next snapshot in a new status; raises on a backwards move"""
        return self.model_copy(update={"status": self.status.transition_to(status)})


class Owner(BaseModel):
    """Owner id plus the aliases it created, in creation order"""

    id: UUID
    aliases: List[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)
