"""
Factory for creating notification sinks.
"""

from enum import Enum
from .strategies import (
    NotificationSink,
    LoggingNotificationSink,
    InMemoryNotificationSink,
    NullNotificationSink,
)
from quotalink_app.config import settings


class NotificationBackend(Enum):
    """Available notification backends"""
    LOGGING = "logging"
    MEMORY = "memory"
    NULL = "null"


class NotificationFactory:
    """
    Simple factory for creating notification sinks.

    Returns a fresh sink per call; the service that owns it decides its lifetime.
    """

    @classmethod
    def create(cls, backend: NotificationBackend = None) -> NotificationSink:
        """
        Create a notification sink.

        Args:
            backend: Type of sink (from enum). If None, uses settings.

        Returns:
            NotificationSink instance
        """
        if backend is None:
            backend = NotificationBackend(settings.notification_backend)

        if backend == NotificationBackend.LOGGING:
            return LoggingNotificationSink()
        elif backend == NotificationBackend.MEMORY:
            return InMemoryNotificationSink()
        elif backend == NotificationBackend.NULL:
            return NullNotificationSink()

        raise ValueError(f"Unknown notification backend: {backend}")
