"""
Builds the short code strategy named in the settings.

Strategies are registered by type; ``build_strategy`` reads length, retry
bound and salt from the ``Settings`` it is handed, so tests and
``dependencies.py`` each pass their own configuration.
"""

from enum import Enum
from typing import Callable, Dict, Optional, Union

from linktracker_app.config import Settings
from linktracker_app.services.short_code_strategies import (
    Base62ShortCodeStrategy,
    RandomShortCodeStrategy,
    ShortCodeStrategy,
)


class ShortCodeStrategyType(Enum):
    """Values accepted by ``Settings.short_code_strategy``"""
    RANDOM = "random"
    BASE62 = "base62"


def _random(config: Settings) -> ShortCodeStrategy:
    return RandomShortCodeStrategy(
        length=config.short_code_length,
        max_retries=config.max_retries,
    )


def _base62(config: Settings) -> ShortCodeStrategy:
    return Base62ShortCodeStrategy(
        salt=config.short_code_salt,
        length=config.short_code_length,
        max_retries=config.max_retries,
    )


STRATEGY_BUILDERS: Dict[ShortCodeStrategyType, Callable[[Settings], ShortCodeStrategy]] = {
    ShortCodeStrategyType.RANDOM: _random,
    ShortCodeStrategyType.BASE62: _base62,
}


def build_strategy(
    config: Settings,
    strategy_type: Optional[Union[ShortCodeStrategyType, str]] = None,
) -> ShortCodeStrategy:
    """
    Build a short code strategy.

    Args:
        config: Settings supplying length, max_retries and salt
        strategy_type: Overrides ``config.short_code_strategy`` when given

    Returns:
        A new ShortCodeStrategy

    Raises:
        ValueError: If the strategy name is unknown
    """
    if strategy_type is None:
        strategy_type = config.short_code_strategy
    # Enum lookup raises ValueError for unknown names
    return STRATEGY_BUILDERS[ShortCodeStrategyType(strategy_type)](config)
