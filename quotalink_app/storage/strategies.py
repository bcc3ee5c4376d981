"""
Record storage strategies using Strategy Pattern.

The service layer talks to the RecordStore interface only, so a store is
built once at startup and injected (no process-wide instance). The only
implementation keeps everything in process memory; persistence across
restarts is deliberately not offered.
"""

import threading
import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable, Dict, List, Optional, Tuple, TypeVar
from uuid import UUID

from quotalink_app.clock import Clock, utcnow
from quotalink_app.exceptions import (
    DuplicateAliasError,
    InvalidStatusTransitionError,
    RecordNotFoundError,
)
from quotalink_app.models import Owner, UrlRecord, UrlStatus

T = TypeVar("T")

# fn(current) -> (next snapshot, value handed back to the caller)
Mutation = Callable[[UrlRecord], Tuple[UrlRecord, T]]

IMMUTABLE_FIELDS = (
    "alias",
    "original_url",
    "owner_id",
    "created_at",
    "expires_at",
    "max_clicks",
)


class RecordStore(ABC):
    """
    Abstract base class for record stores.

    All operations must be safe under concurrent invocation. Mutations of
    one alias are linearizable; different aliases may proceed in parallel.
    """

    @abstractmethod
    def create_owner(self) -> UUID:
        """Allocate and register a new owner id"""
        pass

    @abstractmethod
    def get_owner(self, owner_id: UUID) -> Optional[Owner]:
        """Owner snapshot with its aliases, or None if unknown"""
        pass

    @abstractmethod
    def exists(self, alias: str) -> bool:
        pass

    @abstractmethod
    def insert_if_absent(self, record: UrlRecord) -> bool:
        """
        Atomically insert a record unless its alias is taken.

        Returns:
            True if inserted, False if the alias was already present
        """
        pass

    def save(self, record: UrlRecord) -> UrlRecord:
        """
        Insert a new record.

        Raises:
            DuplicateAliasError: If the alias is already stored
        """
        if not self.insert_if_absent(record):
            raise DuplicateAliasError(record.alias)
        return record

    @abstractmethod
    def get(self, alias: str) -> Optional[UrlRecord]:
        pass

    @abstractmethod
    def update(self, record: UrlRecord) -> UrlRecord:
        """
        Replace the stored snapshot for record.alias.

        Raises:
            RecordNotFoundError: If the alias is absent
            ValueError: If an identity field changes or click_count drops
            InvalidStatusTransitionError: If the status would move backwards
        """
        pass

    @abstractmethod
    def apply(self, alias: str, mutation: "Mutation[T]") -> Tuple[UrlRecord, T]:
        """
        Atomic read-modify-write of one alias.

        The mutation runs while the alias is locked and its returned
        snapshot is committed before the lock is released.

        Returns:
            (committed snapshot, value returned by the mutation)

        Raises:
            RecordNotFoundError: If the alias is absent
        """
        pass

    @abstractmethod
    def list_by_owner(self, owner_id: UUID) -> List[UrlRecord]:
        """Records of one owner in insertion order"""
        pass

    @abstractmethod
    def list_all(self) -> List[UrlRecord]:
        pass

    @abstractmethod
    def list_expired(self, now: Optional[datetime] = None) -> List[UrlRecord]:
        """ACTIVE records whose expires_at is at or before now (not yet swept)"""
        pass

    @abstractmethod
    def count_urls(self) -> int:
        pass

    @abstractmethod
    def count_owners(self) -> int:
        pass


class InMemoryRecordStore(RecordStore):
    """
    In-memory record store using Python dicts.

    Locking:
    - _index_lock guards the dicts themselves and is held only for
      short lookups and assignments.
    - Each alias gets its own lock, held for the whole read-modify-write
      in update()/apply(), so concurrent clicks on one alias serialize
      while other aliases are untouched.

    Records are immutable snapshots, so anything returned to a caller
    stays consistent after the lock is dropped.
    """

    def __init__(self, clock: Clock = utcnow):
        self._clock = clock
        self._index_lock = threading.Lock()
        self._records: Dict[str, UrlRecord] = {}
        self._alias_locks: Dict[str, threading.Lock] = {}
        self._owners: Dict[UUID, List[str]] = {}

    def create_owner(self) -> UUID:
        owner_id = uuid.uuid4()
        with self._index_lock:
            self._owners.setdefault(owner_id, [])
        return owner_id

    def get_owner(self, owner_id: UUID) -> Optional[Owner]:
        with self._index_lock:
            aliases = self._owners.get(owner_id)
            if aliases is None:
                return None
            return Owner(id=owner_id, aliases=list(aliases))

    def exists(self, alias: str) -> bool:
        with self._index_lock:
            return alias in self._records

    def insert_if_absent(self, record: UrlRecord) -> bool:
        with self._index_lock:
            if record.alias in self._records:
                return False
            self._records[record.alias] = record
            self._alias_locks[record.alias] = threading.Lock()
            # Owners are generated on demand; saving registers unknown ones
            self._owners.setdefault(record.owner_id, []).append(record.alias)
            return True

    def get(self, alias: str) -> Optional[UrlRecord]:
        with self._index_lock:
            return self._records.get(alias)

    def update(self, record: UrlRecord) -> UrlRecord:
        committed, _ = self.apply(record.alias, lambda current: (record, None))
        return committed

    def apply(self, alias: str, mutation: "Mutation[T]") -> Tuple[UrlRecord, T]:
        alias_lock = self._lock_for(alias)

        with alias_lock:
            with self._index_lock:
                current = self._records[alias]

            new_record, result = mutation(current)
            self._check_replacement(current, new_record)

            if new_record is not current:
                with self._index_lock:
                    self._records[alias] = new_record

        return new_record, result

    def list_by_owner(self, owner_id: UUID) -> List[UrlRecord]:
        with self._index_lock:
            aliases = self._owners.get(owner_id, [])
            return [self._records[alias] for alias in aliases]

    def list_all(self) -> List[UrlRecord]:
        with self._index_lock:
            return list(self._records.values())

    def list_expired(self, now: Optional[datetime] = None) -> List[UrlRecord]:
        now = now or self._clock()
        return [
            record for record in self.list_all()
            if record.status is UrlStatus.ACTIVE and now >= record.expires_at
        ]

    def count_urls(self) -> int:
        with self._index_lock:
            return len(self._records)

    def count_owners(self) -> int:
        with self._index_lock:
            return len(self._owners)

    def _lock_for(self, alias: str) -> threading.Lock:
        with self._index_lock:
            alias_lock = self._alias_locks.get(alias)
        if alias_lock is None:
            raise RecordNotFoundError(alias)
        return alias_lock

    @staticmethod
    def _check_replacement(current: UrlRecord, new_record: UrlRecord) -> None:
        """Identity fields never change, clicks never decrease, status only moves forward"""
        for field in IMMUTABLE_FIELDS:
            if getattr(new_record, field) != getattr(current, field):
                raise ValueError(f"Field {field} of {current.alias} is immutable")
        if new_record.click_count < current.click_count:
            raise ValueError(
                f"Click count of {current.alias} cannot drop from "
                f"{current.click_count} to {new_record.click_count}"
            )
        if not current.status.can_transition_to(new_record.status):
            raise InvalidStatusTransitionError(current.status, new_record.status)
