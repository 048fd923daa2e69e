from typing import AbstractSet, Optional

from linktracker_app.services.short_code_strategies import (
    RandomShortCodeStrategy,
    ShortCodeStrategy,
)


class ShortcodeAllocator:
    """
    Picks the short code for a new record.

    A requested (custom) code is returned untouched; rejecting a taken custom
    code is the record store's job. Otherwise the strategy generates a code
    that is not in ``existing_codes``.
    """

    def __init__(self, strategy: Optional[ShortCodeStrategy] = None):
        self.strategy = strategy or RandomShortCodeStrategy()

    def allocate(self, requested: Optional[str], existing_codes: AbstractSet[str]) -> str:
        if requested:
            return requested
        return self.strategy.generate(existing_codes)
