"""
Notification sinks using Strategy Pattern.
Allows switching between logging, in-memory capture, or no notifications.

Sinks are fire-and-forget: the service ignores return values and logs
(but never propagates) sink failures.
"""

import logging
import threading
from abc import ABC, abstractmethod
from collections import deque
from typing import Deque, List, Optional

from quotalink_app.models import UrlRecord
from quotalink_app.policy.expiry import InaccessibilityReason
from .models import NotificationEvent, NotificationType

logger = logging.getLogger(__name__)


class NotificationSink(ABC):
    """
    Abstract base class for notification sinks.

    Subclasses implement publish(); the on_* hooks build the event.
    """

    @abstractmethod
    def publish(self, event: NotificationEvent) -> None:
        """
        Deliver one event.

        Args:
            event: NotificationEvent to deliver
        """
        pass

    def on_created(self, record: UrlRecord) -> None:
        self.publish(self._event(NotificationType.CREATED, record))

    def on_expired(self, record: UrlRecord) -> None:
        self.publish(self._event(NotificationType.EXPIRED, record))

    def on_limit_reached(self, record: UrlRecord) -> None:
        self.publish(self._event(NotificationType.LIMIT_REACHED, record))

    def on_inaccessible(self, record: UrlRecord, reason: InaccessibilityReason) -> None:
        self.publish(self._event(NotificationType.INACCESSIBLE, record, reason))

    @staticmethod
    def _event(
        event_type: NotificationType,
        record: UrlRecord,
        reason: Optional[InaccessibilityReason] = None,
    ) -> NotificationEvent:
        return NotificationEvent(
            type=event_type,
            alias=record.alias,
            original_url=record.original_url,
            owner_id=record.owner_id,
            click_count=record.click_count,
            max_clicks=record.max_clicks,
            reason=reason,
        )


class LoggingNotificationSink(NotificationSink):
    """
    Writes each event as a log line.

    Default for development and single-process deployments.
    """

    def __init__(self, sink_logger: logging.Logger = None):
        self.logger = sink_logger or logger

    def publish(self, event: NotificationEvent) -> None:
        if event.reason is not None:
            self.logger.info(
                "Notification %s: %s (%s) reason=%s",
                event.type.value, event.alias, event.original_url, event.reason.value,
            )
        else:
            self.logger.info(
                "Notification %s: %s (%s) clicks=%d/%d",
                event.type.value, event.alias, event.original_url,
                event.click_count, event.max_clicks,
            )


class InMemoryNotificationSink(NotificationSink):
    """
    In-memory sink using a Python deque.

    Pros:
    - No external dependencies
    - Events can be inspected or drained (tests, polling UIs)

    Cons:
    - Lost on restart
    - Bounded by max_events; oldest events are dropped first
    """

    def __init__(self, max_events: int = 10000):
        self._events: Deque[NotificationEvent] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def publish(self, event: NotificationEvent) -> None:
        with self._lock:
            self._events.append(event)

    def events(self, event_type: Optional[NotificationType] = None) -> List[NotificationEvent]:
        """Snapshot of stored events, optionally filtered by type"""
        with self._lock:
            return [
                event for event in self._events
                if event_type is None or event.type == event_type
            ]

    def drain(self) -> List[NotificationEvent]:
        """Remove and return all stored events"""
        with self._lock:
            drained = list(self._events)
            self._events.clear()
            return drained


class NullNotificationSink(NotificationSink):
    """
    Null Object Pattern - sink that drops everything.

    Used when notifications are disabled.
    """

    def publish(self, event: NotificationEvent) -> None:
        """Drops the event"""
        pass
