import logging
import math
from datetime import timedelta
from enum import Enum
from typing import List, Optional, Tuple
from uuid import UUID

from pydantic import BaseModel

from quotalink_app.clock import Clock, utcnow
from quotalink_app.config import settings
from quotalink_app.exceptions import (
    DuplicateAliasError,
    InvalidAliasError,
    InvalidArgumentError,
)
from quotalink_app.models import Owner, UrlRecord, UrlStatus
from quotalink_app.notifications.strategies import NotificationSink, NullNotificationSink
from quotalink_app.policy.expiry import (
    InaccessibilityReason,
    inaccessibility_reason,
    is_limit_reached,
)
from quotalink_app.services.short_code_factory import ShortCodeFactory
from quotalink_app.services.short_code_strategies import ShortCodeStrategy, is_valid_alias
from quotalink_app.storage.strategies import RecordStore
from quotalink_app.sweeper.expiry_sweeper import ExpirySweeper
from quotalink_app.validators.url import UrlValidator

logger = logging.getLogger(__name__)


class AccessStatus(str, Enum):
    """Outcome of an access attempt"""
    OPENED = "opened"
    NOT_FOUND = "not_found"
    INACCESSIBLE = "inaccessible"


class AccessResult(BaseModel):
    """
    Result of ShortenerEngine.access().

    NOT_FOUND and INACCESSIBLE are ordinary results, not errors.
    Opening original_url is left to the caller.
    """
    status: AccessStatus
    record: Optional[UrlRecord] = None
    reason: Optional[InaccessibilityReason] = None
    limit_just_reached: bool = False

    @property
    def opened(self) -> bool:
        return self.status is AccessStatus.OPENED

    @property
    def original_url(self) -> Optional[str]:
        return self.record.original_url if self.record else None


class ShortenerStats(BaseModel):
    total_urls: int
    total_owners: int
    active_count: int


class ShortenerEngine:
    """
    Shortener service with dependency injection.

    Orchestrates code generation, the record store and the expiry policy:
    - Store, strategy, notifier and validator are injected (not global)
    - Each engine owns its sweeper, so test instances are fully isolated
    """

    def __init__(
        self,
        store: RecordStore,
        code_strategy: Optional[ShortCodeStrategy] = None,
        notifier: Optional[NotificationSink] = None,
        validator: Optional[UrlValidator] = None,
        clock: Clock = utcnow,
        default_max_clicks: int = None,
        default_expiration_hours: float = None,
        sweep_interval: float = None,
    ):
        """
        Initialize the engine with dependencies.

        Args:
            store: Record store
            code_strategy: Short code strategy (default from settings)
            notifier: Notification sink (optional)
            validator: URL validator/normalizer
            clock: Source of the current time
            default_max_clicks: Used when create() gets no max_clicks
            default_expiration_hours: Used when create() gets no expiration_hours
            sweep_interval: Seconds between background sweeps
        """
        self.store = store
        self.code_strategy = code_strategy or ShortCodeFactory.create_strategy()
        self.notifier = notifier or NullNotificationSink()
        self.validator = validator or UrlValidator()
        self.clock = clock
        self.default_max_clicks = (
            default_max_clicks if default_max_clicks is not None
            else settings.default_max_clicks
        )
        self.default_expiration_hours = (
            default_expiration_hours if default_expiration_hours is not None
            else settings.default_expiration_hours
        )
        self.sweeper = ExpirySweeper(
            store=store,
            notifier=self.notifier,
            clock=clock,
            interval=sweep_interval,
        )

    def create_owner(self) -> UUID:
        return self.store.create_owner()

    def get_owner(self, owner_id: UUID) -> Optional[Owner]:
        return self.store.get_owner(owner_id)

    def create(
        self,
        url: str,
        owner_id: UUID,
        max_clicks: int = None,
        expiration_hours: float = None,
    ) -> UrlRecord:
        """Create a new short URL

        Note: Always creates a new record even if the owner already
        shortened the same URL; each gets its own quota and lifetime.

        Raises:
            InvalidArgumentError: Bad URL, max_clicks or expiration_hours
            DuplicateAliasError: A concurrent creator won the alias race
        """
        if max_clicks is None:
            max_clicks = self.default_max_clicks
        if expiration_hours is None:
            expiration_hours = self.default_expiration_hours

        if not self.validator.validate(url):
            raise InvalidArgumentError(f"Invalid URL format: {url}")
        if isinstance(max_clicks, bool) or not isinstance(max_clicks, int) or max_clicks <= 0:
            raise InvalidArgumentError("Max clicks must be a positive integer")
        if (
            isinstance(expiration_hours, bool)
            or not math.isfinite(expiration_hours)
            or expiration_hours <= 0
        ):
            raise InvalidArgumentError("Expiration hours must be a positive finite number")

        now = self.clock()
        try:
            expires_at = now + timedelta(hours=expiration_hours)
        except (OverflowError, ValueError) as e:
            raise InvalidArgumentError("Expiration hours out of range") from e

        normalized_url = self.validator.normalize(url)
        alias = self.code_strategy.generate(normalized_url, owner_id, self.store)

        record = UrlRecord(
            alias=alias,
            original_url=normalized_url,
            owner_id=owner_id,
            created_at=now,
            expires_at=expires_at,
            max_clicks=max_clicks,
        )

        try:
            self.store.save(record)
        except DuplicateAliasError:
            logger.error("Generated alias %s was already taken at insert time", alias)
            raise

        logger.info("Created %s -> %s for owner %s", alias, normalized_url, owner_id)
        self._notify("on_created", record)
        return record

    def access(self, alias: str) -> AccessResult:
        """
        Follow a short code.

        Flow:
        1. Reject malformed codes without touching the store
        2. Unknown code -> NOT_FOUND
        3. Under the alias lock: check policy, then count the click
           (and move to LIMIT_EXCEEDED on the click that hits the quota)
        4. Notify outside the lock

        Raises:
            InvalidAliasError: Malformed short code
        """
        self._require_valid_alias(alias)

        if self.store.get(alias) is None:
            return AccessResult(status=AccessStatus.NOT_FOUND)

        record, (reason, just_reached) = self.store.apply(alias, self._count_click)

        if reason is not None:
            self._notify("on_inaccessible", record, reason)
            return AccessResult(
                status=AccessStatus.INACCESSIBLE,
                record=record,
                reason=reason,
            )

        if just_reached:
            self._notify("on_limit_reached", record)

        logger.debug(
            "Opened %s (%d/%d clicks)", alias, record.click_count, record.max_clicks
        )
        return AccessResult(
            status=AccessStatus.OPENED,
            record=record,
            limit_just_reached=just_reached,
        )

    def _count_click(
        self, current: UrlRecord
    ) -> Tuple[UrlRecord, Tuple[Optional[InaccessibilityReason], bool]]:
        reason = inaccessibility_reason(current, self.clock())
        if reason is not None:
            return current, (reason, False)

        clicked = current.with_click()
        just_reached = is_limit_reached(clicked)
        if just_reached:
            clicked = clicked.with_status(UrlStatus.LIMIT_EXCEEDED)
        return clicked, (None, just_reached)

    def list_for_owner(self, owner_id: UUID) -> List[UrlRecord]:
        return self.store.list_by_owner(owner_id)

    def info(self, alias: str) -> Optional[UrlRecord]:
        """Record for a short code, or None; never counts a click"""
        self._require_valid_alias(alias)
        return self.store.get(alias)

    def sweep(self) -> int:
        """Run one expiry sweep synchronously; returns the swept count"""
        return self.sweeper.run_once()

    def stats(self) -> ShortenerStats:
        records = self.store.list_all()
        return ShortenerStats(
            total_urls=self.store.count_urls(),
            total_owners=self.store.count_owners(),
            active_count=sum(1 for r in records if r.status is UrlStatus.ACTIVE),
        )

    def start(self) -> None:
        """Start the periodic expiry sweep"""
        self.sweeper.start()

    def shutdown(self, timeout: float = None) -> bool:
        """Stop the periodic sweep with a bounded wait"""
        return self.sweeper.stop(timeout)

    @staticmethod
    def _require_valid_alias(alias: str) -> None:
        if not is_valid_alias(alias):
            raise InvalidAliasError(alias)

    def _notify(self, hook: str, *args) -> None:
        try:
            getattr(self.notifier, hook)(*args)
        except Exception:
            logger.exception("Notification %s failed", hook)
