from pydantic import BaseModel, Field, computed_field, ConfigDict
from typing import List, Optional
from datetime import datetime
from uuid import UUID

from quotalink_app.config import settings
from quotalink_app.models import UrlStatus


class URLCreate(BaseModel):
    long_url: str = Field(..., description="URL to shorten; https:// is added when no scheme is given")
    owner_id: Optional[UUID] = Field(None, description="Existing owner id; a new owner is created when omitted")
    max_clicks: Optional[int] = Field(None, description="Click quota (default from settings)")
    expiration_hours: Optional[float] = Field(None, description="Lifetime in hours (default from settings)")


class URLResponse(BaseModel):
    """Response schema that serializes a UrlRecord

    - from_attributes=True reads straight from the record's attributes
    - @computed_field adds the full short URL
    """
    alias: str
    original_url: str
    owner_id: UUID
    created_at: datetime
    expires_at: datetime
    max_clicks: int
    click_count: int
    status: UrlStatus

    @computed_field
    @property
    def short_url(self) -> str:
        return f"{settings.base_url}/{self.alias}"

    model_config = ConfigDict(from_attributes=True)


class OwnerResponse(BaseModel):
    id: UUID
    aliases: List[str] = []

    model_config = ConfigDict(from_attributes=True)


class StatsResponse(BaseModel):
    total_urls: int
    total_owners: int
    active_count: int

    model_config = ConfigDict(from_attributes=True)


class SweepResponse(BaseModel):
    swept: int
