"""Background expiry sweeping."""

from .expiry_sweeper import ExpirySweeper

__all__ = ["ExpirySweeper"]
