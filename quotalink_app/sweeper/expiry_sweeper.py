"""
Expiry Sweeper

Periodically moves time-expired ACTIVE records to EXPIRED.

Architecture:
- One daemon thread, independent of request traffic
- Sleeps on a stop Event so shutdown interrupts the wait immediately
- Each run: list_expired() -> mark EXPIRED atomically -> notify
- Idempotent: list_expired() only returns ACTIVE records
"""

import logging
import threading
from typing import Optional

from quotalink_app.clock import Clock, utcnow
from quotalink_app.config import settings
from quotalink_app.models import UrlRecord, UrlStatus
from quotalink_app.notifications.strategies import NotificationSink, NullNotificationSink
from quotalink_app.policy.expiry import is_expired
from quotalink_app.storage.strategies import RecordStore

logger = logging.getLogger(__name__)


class ExpirySweeper:
    """
    Background sweeper for expired records.

    Features:
    - run_once() usable synchronously (tests, manual maintenance)
    - start()/stop() manage the periodic thread
    - stop() lets an in-flight sweep finish, then joins with a bounded wait
    """

    def __init__(
        self,
        store: RecordStore,
        notifier: Optional[NotificationSink] = None,
        clock: Clock = utcnow,
        interval: float = None,
        shutdown_timeout: float = None,
    ):
        """
        Initialize sweeper with dependencies.

        Args:
            store: Record store to sweep
            notifier: Sink for EXPIRED notifications
            clock: Source of the current time
            interval: Seconds between runs (default from settings)
            shutdown_timeout: Max seconds stop() waits for the thread
        """
        self.store = store
        self.notifier = notifier or NullNotificationSink()
        self.clock = clock
        self.interval = interval if interval is not None else settings.sweep_interval_seconds
        self.shutdown_timeout = (
            shutdown_timeout if shutdown_timeout is not None
            else settings.sweep_shutdown_timeout_seconds
        )

        self.swept_total = 0
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._run_lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def run_once(self) -> int:
        """
        Sweep once.

        Returns:
            Number of records moved to EXPIRED by this run
        """
        # Overlapping manual and scheduled runs would only race on no-ops
        with self._run_lock:
            now = self.clock()
            swept = []

            for candidate in self.store.list_expired(now):
                record, changed = self.store.apply(
                    candidate.alias,
                    lambda current: self._expire(current, now),
                )
                if changed:
                    swept.append(record)

            for record in swept:
                try:
                    self.notifier.on_expired(record)
                except Exception:
                    logger.exception("Expired notification failed for %s", record.alias)

            if swept:
                logger.info("Cleaned up %d expired URLs", len(swept))

            self.swept_total += len(swept)
            return len(swept)

    @staticmethod
    def _expire(current: UrlRecord, now):
        # An access may have moved it to LIMIT_EXCEEDED since list_expired()
        if current.status is not UrlStatus.ACTIVE or not is_expired(current, now):
            return current, False
        return current.with_status(UrlStatus.EXPIRED), True

    def start(self) -> None:
        """Start the periodic thread (no-op if already running)"""
        if self.running:
            return

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._loop,
            name="expiry-sweeper",
            daemon=True,
        )
        self._thread.start()
        logger.info("Expiry sweeper started (interval %ss)", self.interval)

    def stop(self, timeout: float = None) -> bool:
        """
        Stop scheduling further runs and wait for the thread.

        Args:
            timeout: Max seconds to wait (default: shutdown_timeout)

        Returns:
            True if the thread has exited
        """
        if self._thread is None:
            return True

        self._stop_event.set()
        self._thread.join(timeout if timeout is not None else self.shutdown_timeout)

        if self._thread.is_alive():
            # Daemon thread: it cannot keep the process alive
            logger.warning("Expiry sweeper did not stop within the timeout")
            return False

        self._thread = None
        logger.info("Expiry sweeper stopped")
        return True

    def _loop(self) -> None:
        while not self._stop_event.wait(self.interval):
            try:
                self.run_once()
            except Exception:
                logger.exception("Expiry sweep failed")
