"""Input validators consumed by the service layer."""

from .url import UrlValidator, URL_PATTERN

__all__ = ["UrlValidator", "URL_PATTERN"]
