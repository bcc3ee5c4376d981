"""API request/response schemas."""

from .url import URLCreate, URLResponse, OwnerResponse, StatsResponse, SweepResponse

__all__ = ["URLCreate", "URLResponse", "OwnerResponse", "StatsResponse", "SweepResponse"]
