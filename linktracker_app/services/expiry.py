from datetime import datetime, timedelta
from typing import Optional, Union

DEFAULT_VALIDITY_MINUTES = 30
MAX_VALIDITY_MINUTES = 100 * 365 * 24 * 60  # one hundred years


def parse_validity(
    validity_minutes: Optional[Union[int, str]],
    default: int = DEFAULT_VALIDITY_MINUTES,
) -> int:
    """Minutes from an int, a digit string, or empty (-> ``default``)"""
    if validity_minutes is None or validity_minutes == "":
        return default

    if isinstance(validity_minutes, bool):
        raise ValueError(f"Invalid validity: {validity_minutes!r}")

    minutes = int(validity_minutes)
    if minutes <= 0:
        raise ValueError(f"Validity must be positive, got {minutes}")
    if minutes > MAX_VALIDITY_MINUTES:
        raise ValueError(f"Validity must be at most {MAX_VALIDITY_MINUTES} minutes, got {minutes}")
    return minutes


def compute_expiry(
    created_at: datetime,
    validity_minutes: Optional[Union[int, str]] = None,
    default: int = DEFAULT_VALIDITY_MINUTES,
) -> datetime:
    """
    Absolute expiry timestamp for a link created at ``created_at``.

    Empty validity falls back to ``default`` (30 minutes). Inputs are expected to
    have passed ``validate_validity`` already; anything else, including a value
    above ``MAX_VALIDITY_MINUTES``, raises ValueError.
    """
    return created_at + timedelta(minutes=parse_validity(validity_minutes, default))
