"""
Tests for short code generation strategies.
"""
import uuid

import pytest

from quotalink_app.exceptions import HashBackendUnavailableError
from quotalink_app.services import short_code_strategies
from quotalink_app.services.short_code_strategies import (
    BASE62_CHARS,
    HashShortCodeStrategy,
    RandomShortCodeStrategy,
    base62_encode,
    is_valid_alias,
)
from quotalink_app.services.short_code_factory import (
    ShortCodeFactory,
    ShortCodeStrategyType
)
from quotalink_app.storage.strategies import InMemoryRecordStore

FROZEN_MILLIS = 1_700_000_000_000
URL = "https://example.com"


class TakenCodesStore:
    """Minimal store stand-in: only exists() is used by strategies"""

    def __init__(self, taken):
        self.taken = set(taken)
        self.checks = 0

    def exists(self, alias):
        self.checks += 1
        return alias in self.taken


def hash_candidates(strategy, owner_id, url, millis, count):
    """Codes the hash strategy tries, in order, for one seed"""
    seed = f"{owner_id}{url}{millis}"
    codes = [strategy.code_for_seed(seed)]
    for attempt in range(count - 1):
        seed += str(attempt)
        codes.append(strategy.code_for_seed(seed))
    return codes


class TestBase62:
    """Test Base62 helpers"""

    def test_alphabet_order(self):
        assert BASE62_CHARS[0] == "a"
        assert BASE62_CHARS[26] == "A"
        assert BASE62_CHARS[52] == "0"
        assert len(BASE62_CHARS) == 62

    def test_encode_small_numbers(self):
        assert base62_encode(0) == "a"
        assert base62_encode(61) == "9"
        assert base62_encode(62) == "ba"

    def test_valid_alias(self):
        assert is_valid_alias("aB3xY7z")
        assert not is_valid_alias("abc 123")
        assert not is_valid_alias("")
        assert not is_valid_alias("abc-123")
        assert not is_valid_alias("ab_c")


class TestHashStrategy:
    """Test digest-based strategy"""

    def test_generates_correct_length(self):
        strategy = HashShortCodeStrategy(millis=lambda: FROZEN_MILLIS)

        code = strategy.generate(URL, uuid.uuid4(), InMemoryRecordStore())

        assert len(code) == 7
        assert is_valid_alias(code)

    def test_same_seed_same_code(self):
        """Same owner, URL and time salt give the same code (deterministic)"""
        strategy = HashShortCodeStrategy(millis=lambda: FROZEN_MILLIS)
        owner_id = uuid.uuid4()

        code1 = strategy.generate(URL, owner_id, InMemoryRecordStore())
        code2 = strategy.generate(URL, owner_id, InMemoryRecordStore())

        assert code1 == code2

    def test_different_owner_different_code(self):
        strategy = HashShortCodeStrategy(millis=lambda: FROZEN_MILLIS)
        store = InMemoryRecordStore()

        code1 = strategy.generate(URL, uuid.uuid4(), store)
        code2 = strategy.generate(URL, uuid.uuid4(), store)

        assert code1 != code2

    def test_short_encoding_is_right_padded(self, monkeypatch):
        strategy = HashShortCodeStrategy()
        monkeypatch.setattr(short_code_strategies, "base62_encode", lambda number: "abc")

        assert strategy.code_for_seed("anything") == "abcaaaa"

    def test_collision_retries_with_attempt_counter(self):
        """First candidate taken -> second seeded candidate is returned"""
        strategy = HashShortCodeStrategy(millis=lambda: FROZEN_MILLIS)
        owner_id = uuid.uuid4()
        candidates = hash_candidates(strategy, owner_id, URL, FROZEN_MILLIS, 2)
        store = TakenCodesStore(taken=[candidates[0]])

        code = strategy.generate(URL, owner_id, store)

        assert code == candidates[1]

    def test_falls_back_to_random_after_max_attempts(self):
        """All 11 seeded candidates taken -> random code outside that set"""
        strategy = HashShortCodeStrategy(max_attempts=10, millis=lambda: FROZEN_MILLIS)
        owner_id = uuid.uuid4()
        candidates = hash_candidates(strategy, owner_id, URL, FROZEN_MILLIS, 11)
        store = TakenCodesStore(taken=candidates)

        code = strategy.generate(URL, owner_id, store)

        assert code not in candidates
        assert len(code) == 7
        assert is_valid_alias(code)

    def test_missing_hash_backend_fails_at_construction(self):
        with pytest.raises(HashBackendUnavailableError):
            HashShortCodeStrategy(algorithm="no-such-digest")


class TestRandomStrategy:
    """Test random strategy"""

    def test_generates_valid_codes(self):
        strategy = RandomShortCodeStrategy(length=7)
        store = InMemoryRecordStore()

        for _ in range(100):
            code = strategy.generate(URL, uuid.uuid4(), store)
            assert len(code) == 7
            assert is_valid_alias(code)

    def test_skips_taken_codes(self, monkeypatch):
        drawn = iter(["aaaaaaa", "aaaaaaa", "bbbbbbb"])
        monkeypatch.setattr(short_code_strategies, "random_code", lambda length: next(drawn))
        store = TakenCodesStore(taken=["aaaaaaa"])

        code = RandomShortCodeStrategy().generate(URL, uuid.uuid4(), store)

        assert code == "bbbbbbb"
        assert store.checks == 3


class TestShortCodeFactory:
    """Test strategy factory"""

    def setup_method(self):
        ShortCodeFactory.clear_instances()

    def test_creates_random_strategy(self):
        strategy = ShortCodeFactory.create_strategy(ShortCodeStrategyType.RANDOM)
        assert isinstance(strategy, RandomShortCodeStrategy)

    def test_creates_hash_strategy(self):
        strategy = ShortCodeFactory.create_strategy(ShortCodeStrategyType.HASH)
        assert isinstance(strategy, HashShortCodeStrategy)
        assert strategy.length == 7
        assert strategy.max_attempts == 10

    def test_creates_default_from_settings(self):
        """Default setting is the hash strategy"""
        strategy = ShortCodeFactory.create_strategy()
        assert isinstance(strategy, HashShortCodeStrategy)

    def test_instances_are_cached(self):
        first = ShortCodeFactory.create_strategy(ShortCodeStrategyType.HASH)
        second = ShortCodeFactory.create_strategy(ShortCodeStrategyType.HASH)
        assert first is second
