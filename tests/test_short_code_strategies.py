"""
Tests for short code generation strategies and the allocator.
"""
import random
import string

import pytest

from linktracker_app.exceptions import ShortCodeAllocationError
from linktracker_app.services.allocator import ShortcodeAllocator
from linktracker_app.services.short_code_strategies import (
    RandomShortCodeStrategy,
    Base62ShortCodeStrategy
)
from linktracker_app.config import Settings
from linktracker_app.services.short_code_factory import (
    build_strategy,
    ShortCodeStrategyType
)


class TestRandomStrategy:
    """Test random generation strategy"""

    def test_generates_six_alphanumeric_characters(self):
        """Default codes are 6 letters/digits"""
        strategy = RandomShortCodeStrategy()

        code = strategy.generate(set())

        assert len(code) == 6
        assert code.isalnum()
        assert code.isascii()

    def test_never_returns_existing_code(self):
        """Codes added back to the existing set are never repeated"""
        strategy = RandomShortCodeStrategy(length=2, max_retries=500, rng=random.Random(7))
        existing = set()

        for _ in range(200):
            code = strategy.generate(existing)
            assert code not in existing
            existing.add(code)

        assert len(existing) == 200

    def test_retries_past_collisions(self):
        """A colliding first draw is retried"""
        first = RandomShortCodeStrategy(length=6, rng=random.Random(42)).generate(set())
        strategy = RandomShortCodeStrategy(length=6, rng=random.Random(42))

        code = strategy.generate({first})

        assert code != first

    def test_exhausted_code_space_raises(self):
        """A full code space ends with an allocation error, not a loop"""
        strategy = RandomShortCodeStrategy(length=1, max_retries=5)
        everything = set(string.ascii_letters + string.digits)

        with pytest.raises(ShortCodeAllocationError):
            strategy.generate(everything)


class TestBase62Strategy:
    """Test Base62 counter strategy"""

    def test_first_code_is_padded_salt(self):
        strategy = Base62ShortCodeStrategy(salt=0, length=6)

        assert strategy.generate(set()) == "000000"

    def test_same_store_size_same_code(self):
        """Deterministic for the same number of existing codes"""
        strategy = Base62ShortCodeStrategy(salt=1000, length=6)

        assert strategy.generate({"a", "b"}) == strategy.generate({"c", "d"})

    def test_skips_taken_codes(self):
        strategy = Base62ShortCodeStrategy(salt=0, length=6)

        code = strategy.generate({"000002", "zzzzzz"})

        assert code == "000003"

    def test_salt_changes_output(self):
        strategy_no_salt = Base62ShortCodeStrategy(salt=0, length=6)
        strategy_with_salt = Base62ShortCodeStrategy(salt=1256, length=6)

        assert strategy_no_salt.generate(set()) != strategy_with_salt.generate(set())

    def test_overflowing_length_raises(self):
        """Truncating would create duplicates, so it fails instead"""
        strategy = Base62ShortCodeStrategy(salt=62 ** 2, length=2)

        with pytest.raises(ShortCodeAllocationError):
            strategy.generate(set())

    def test_base62_encode(self):
        strategy = Base62ShortCodeStrategy()

        assert strategy._base62_encode(0) == "0"
        assert strategy._base62_encode(61) == "Z"
        assert strategy._base62_encode(62) == "10"


class TestShortcodeAllocator:

    def test_requested_code_returned_as_is(self):
        allocator = ShortcodeAllocator()

        assert allocator.allocate("my-link", {"my-link"}) == "my-link"

    def test_empty_request_generates_unique_code(self):
        allocator = ShortcodeAllocator(Base62ShortCodeStrategy(salt=0))

        assert allocator.allocate("", {"000001"}) == "000002"
        assert allocator.allocate(None, set()) == "000000"


class TestBuildStrategy:
    """Test strategy construction from settings"""

    def test_creates_random_strategy(self):
        strategy = build_strategy(Settings(), ShortCodeStrategyType.RANDOM)
        assert isinstance(strategy, RandomShortCodeStrategy)

    def test_creates_base62_strategy(self):
        strategy = build_strategy(Settings(), "base62")
        assert isinstance(strategy, Base62ShortCodeStrategy)

    def test_creates_default_from_settings(self):
        """Random is the configured default"""
        strategy = build_strategy(Settings())
        assert isinstance(strategy, RandomShortCodeStrategy)
        assert strategy.length == 6

    def test_uses_the_given_settings(self):
        config = Settings(
            short_code_strategy="base62",
            short_code_length=8,
            max_retries=3,
            short_code_salt=7,
        )

        strategy = build_strategy(config)

        assert isinstance(strategy, Base62ShortCodeStrategy)
        assert (strategy.length, strategy.max_retries, strategy.salt) == (8, 3, 7)

    def test_each_call_builds_a_new_strategy(self):
        config = Settings()
        assert build_strategy(config) is not build_strategy(config)

    def test_unknown_strategy_raises(self):
        with pytest.raises(ValueError):
            build_strategy(Settings(short_code_strategy="sequential"))
