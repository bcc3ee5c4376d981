"""
Notification module for URL record lifecycle events.
Implements Strategy Pattern for flexible notification sinks.
"""

from .strategies import (
    NotificationSink,
    LoggingNotificationSink,
    InMemoryNotificationSink,
    NullNotificationSink,
)
from .factory import NotificationFactory, NotificationBackend
from .models import NotificationEvent, NotificationType

__all__ = [
    "NotificationSink",
    "LoggingNotificationSink",
    "InMemoryNotificationSink",
    "NullNotificationSink",
    "NotificationFactory",
    "NotificationBackend",
    "NotificationEvent",
    "NotificationType",
]
