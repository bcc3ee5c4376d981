"""
Record storage module for URL records and owner indices.

This module implements the Strategy Pattern for the record store so the
service layer never depends on a concrete backend.
"""

from .strategies import RecordStore, InMemoryRecordStore

__all__ = [
    "RecordStore",
    "InMemoryRecordStore",
]
