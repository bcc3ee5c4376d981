"""
Short code generation strategies for URL shortener.
Uses Strategy Pattern to allow different generation algorithms.
"""

import hashlib
import logging
import secrets
import string
import time
from abc import ABC, abstractmethod
from typing import Callable
from uuid import UUID

from quotalink_app.exceptions import HashBackendUnavailableError
from quotalink_app.storage.strategies import RecordStore

logger = logging.getLogger(__name__)

# Alphabet order matters: index 0 ('a') is also the padding character
BASE62_CHARS = string.ascii_lowercase + string.ascii_uppercase + string.digits
_BASE62_SET = frozenset(BASE62_CHARS)

# 15 hex digits = 60 bits, the widest prefix that fits an unsigned 64-bit long
HEX_PREFIX_LENGTH = 15


def is_valid_alias(code: str) -> bool:
    """True iff code is non-empty and every character is Base62"""
    if not code:
        return False
    return all(ch in _BASE62_SET for ch in code)


def base62_encode(number: int) -> str:
    """
    Convert a non-negative integer to a Base62 string.

    Most significant digit first, alphabet a-z, A-Z, 0-9.
    """
    if number == 0:
        return BASE62_CHARS[0]

    result = ""
    while number > 0:
        result = BASE62_CHARS[number % 62] + result
        number //= 62

    return result


def random_code(length: int) -> str:
    """Uniformly random Base62 string"""
    return ''.join(secrets.choice(BASE62_CHARS) for _ in range(length))


class ShortCodeStrategy(ABC):
    """Abstract base class for short code generation strategies"""

    @abstractmethod
    def generate(self, url: str, owner_id: UUID, store: RecordStore) -> str:
        """
        Generate a short code.

        Args:
            url: Normalized original URL
            owner_id: Owner creating the record
            store: Record store used for collision checks

        Returns:
            A short code absent from the store at the moment of return
        """
        pass


class RandomShortCodeStrategy(ShortCodeStrategy):
    """
    Pure random generation strategy.
    Draws random Base62 strings until one is not in the store.

    Pros: Simple, unpredictable
    Cons: Ignores the URL and owner entirely
    """

    def __init__(self, length: int = 7):
        self.length = length

    def generate(self, url: str, owner_id: UUID, store: RecordStore) -> str:
        """Generate random short code with collision checking"""
        while True:
            short_code = random_code(self.length)
            if not store.exists(short_code):
                return short_code


class HashShortCodeStrategy(ShortCodeStrategy):
    """
    Digest-based strategy with seeded retries and a random fallback.

    Process:
    1. Seed = owner id + normalized URL + epoch milliseconds
    2. Hex digest of the seed, first 15 hex digits as an integer
    3. Base62-encode, keep the first `length` chars (right-pad with 'a')
    4. On collision append the attempt number to the seed and retry,
       at most `max_attempts` times
    5. Then draw random codes until one is free (62^7 ≈ 3.5e12, so
       this effectively never loops)

    Pros: Spreads codes evenly, different owners never share a seed
    Cons: Needs an existence check per candidate
    """

    def __init__(
        self,
        length: int = 7,
        max_attempts: int = 10,
        algorithm: str = "md5",
        millis: Callable[[], int] = None,
    ):
        """
        Args:
            length: Short code length
            max_attempts: Seeded retries before the random fallback
            algorithm: hashlib algorithm name
            millis: Source of the time salt (epoch milliseconds)

        Raises:
            HashBackendUnavailableError: If hashlib lacks the algorithm
        """
        self.length = length
        self.max_attempts = max_attempts
        self.algorithm = algorithm
        self.millis = millis or (lambda: time.time_ns() // 1_000_000)

        # Fail at startup, not on the first request
        try:
            self._new_digest()
        except ValueError as e:
            raise HashBackendUnavailableError(
                f"Hash algorithm '{algorithm}' not available"
            ) from e

    def generate(self, url: str, owner_id: UUID, store: RecordStore) -> str:
        seed = f"{owner_id}{url}{self.millis()}"
        short_code = self.code_for_seed(seed)

        attempts = 0
        while store.exists(short_code) and attempts < self.max_attempts:
            seed += str(attempts)
            short_code = self.code_for_seed(seed)
            attempts += 1

        if attempts >= self.max_attempts and store.exists(short_code):
            logger.warning(
                "Hash collisions persisted after %d attempts, using random code",
                self.max_attempts,
            )
            short_code = random_code(self.length)
            while store.exists(short_code):
                short_code = random_code(self.length)

        return short_code

    def code_for_seed(self, seed: str) -> str:
        """Deterministic short code for a seed string"""
        digest = self._new_digest()
        digest.update(seed.encode("utf-8"))
        hex_digest = digest.hexdigest()

        number = int(hex_digest[:HEX_PREFIX_LENGTH], 16)
        encoded = base62_encode(number)

        return encoded[:self.length].ljust(self.length, BASE62_CHARS[0])

    def _new_digest(self):
        return hashlib.new(self.algorithm, usedforsecurity=False)
