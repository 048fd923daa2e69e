"""
Short code generation strategies.
Uses Strategy Pattern to allow different generation algorithms.
"""

import random
import string
from abc import ABC, abstractmethod
from typing import AbstractSet, Optional

from linktracker_app.exceptions import ShortCodeAllocationError


class ShortCodeStrategy(ABC):
    """Abstract base class for short code generation strategies"""

    @abstractmethod
    def generate(self, existing_codes: AbstractSet[str]) -> str:
        """
        Generate a short code.

        Args:
            existing_codes: Codes already in use; the result must not be one of them

        Returns:
            A unique short code string

        Raises:
            ShortCodeAllocationError: If no unique code was found in the retry budget
        """
        pass


class RandomShortCodeStrategy(ShortCodeStrategy):
    """
    Random fixed-length alphanumeric codes with collision checking.

    Pros: Simple, unpredictable
    Cons: Collision risk grows with the number of stored links
    """

    def __init__(
        self,
        length: int = 6,
        max_retries: int = 10,
        rng: Optional[random.Random] = None
    ):
        self.length = length
        self.max_retries = max_retries
        self.characters = string.ascii_letters + string.digits
        self.rng = rng or random.Random()

    def generate(self, existing_codes: AbstractSet[str]) -> str:
        """Generate random short code with collision checking"""
        for attempt in range(self.max_retries):
            short_code = self._generate_random_string()

            if short_code not in existing_codes:
                return short_code

        # If all retries failed
        raise ShortCodeAllocationError(
            f"Could not generate unique short code after {self.max_retries} attempts"
        )

    def _generate_random_string(self) -> str:
        """Generate a random string of specified length"""
        return ''.join(self.rng.choice(self.characters) for _ in range(self.length))


class Base62ShortCodeStrategy(ShortCodeStrategy):
    """
    Base62 encoding of a salted counter.

    The counter starts at the number of existing codes, so a fresh store yields
    the same sequence every time. Codes are left-padded to a fixed length.

    Pros: No randomness, short codes stay compact
    Cons: Predictable if salt is known
    """

    BASE62_CHARS = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"

    def __init__(self, salt: int = 1256, length: int = 6, max_retries: int = 10):
        self.salt = salt
        self.length = length
        self.max_retries = max_retries

    def generate(self, existing_codes: AbstractSet[str]) -> str:
        """
        Encode ``len(existing_codes) + salt``; on collision move to the next number.

        Raises ShortCodeAllocationError if the encoding no longer fits in
        ``length`` characters (truncating would produce duplicates).
        """
        counter = len(existing_codes) + self.salt

        for attempt in range(self.max_retries):
            encoded = self._base62_encode(counter + attempt)

            if len(encoded) > self.length:
                raise ShortCodeAllocationError(
                    f"Generated code '{encoded}' exceeds length {self.length}. "
                    f"Consider increasing short_code_length."
                )

            short_code = encoded.rjust(self.length, self.BASE62_CHARS[0])
            if short_code not in existing_codes:
                return short_code

        raise ShortCodeAllocationError(
            f"Could not generate unique short code after {self.max_retries} attempts"
        )

    def _base62_encode(self, number: int) -> str:
        """
        Convert integer to Base62 string.

        Base62 uses: 0-9 (10) + a-z (26) + A-Z (26) = 62 characters
        """
        if number == 0:
            return self.BASE62_CHARS[0]

        result = ""
        while number > 0:
            result = self.BASE62_CHARS[number % 62] + result
            number //= 62

        return result
