"""
Data models for the shortener core.

Records live only in process memory; there is no ORM layer.
"""

from .record import Owner, UrlRecord
from .status import UrlStatus

__all__ = ["Owner", "UrlRecord", "UrlStatus"]
