"""
Exception hierarchy for the link tracker core.

Validation and lookup problems are reported to the caller as feedback;
persistence problems never leave the adapter boundary (see persistence.strategies).
"""

from typing import Dict


class LinkTrackerError(Exception):
    """Base class for every error raised by the core"""


class SubmissionValidationError(LinkTrackerError):
    """A submission has malformed fields. ``errors`` maps field name to reason."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        super().__init__("; ".join(f"{field}: {reason}" for field, reason in self.errors.items()))


class ShortCodeAllocationError(LinkTrackerError):
    """No unique short code could be generated within the retry budget"""


class ShortCodeConflictError(LinkTrackerError):
    """A custom short code is already taken"""

    def __init__(self, shortcode: str):
        self.shortcode = shortcode
        super().__init__(f"Shortcode '{shortcode}' is already in use")


class BatchTooLargeError(LinkTrackerError):
    """More submissions than the form allows"""

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(f"At most {limit} URLs can be shortened at once (got {size})")


class PersistenceError(LinkTrackerError):
    """Raised by persistence backends; caught and logged by the adapter"""
