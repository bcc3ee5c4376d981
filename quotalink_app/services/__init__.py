"""Service layer: short code generation and the shortener engine."""

from .shortener_engine import AccessResult, AccessStatus, ShortenerEngine, ShortenerStats

__all__ = ["AccessResult", "AccessStatus", "ShortenerEngine", "ShortenerStats"]
