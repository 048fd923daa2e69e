"""Validation utilities for shortening submissions.

Each check returns ``(is_valid, reason)`` and never raises. Empty fields are
"not submitted" and are skipped by ``validate_submission``.
"""

import re
from typing import Dict, Tuple
from urllib.parse import urlsplit

from linktracker_app.schemas.api import UrlSubmission
from linktracker_app.services.expiry import MAX_VALIDITY_MINUTES

INVALID_URL = "Invalid URL format"
INVALID_VALIDITY = "Validity must be a positive integer"
INVALID_SHORTCODE = "Shortcode may only contain letters, digits, hyphens and underscores"

SHORTCODE_MAX_LENGTH = 32

_SCHEME_RE = re.compile(r"[A-Za-z][A-Za-z0-9+.\-]*")
_DIGITS_RE = re.compile(r"[0-9]+")
_SHORTCODE_RE = re.compile(r"[A-Za-z0-9_-]+")


def validate_url(candidate: str) -> Tuple[bool, str]:
    """Validate an absolute URL (scheme and host at minimum).

    Args:
        candidate: The URL to validate

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not isinstance(candidate, str) or not candidate:
        return False, INVALID_URL

    if any(ch.isspace() for ch in candidate):
        return False, INVALID_URL

    try:
        parts = urlsplit(candidate)
        # Accessing port validates it ("http://host:abc" raises here)
        parts.port
    except ValueError:
        return False, INVALID_URL

    if not parts.scheme or not _SCHEME_RE.fullmatch(parts.scheme):
        return False, INVALID_URL

    if not parts.netloc or not parts.hostname:
        return False, INVALID_URL

    return True, ""


def validate_validity(candidate: str) -> Tuple[bool, str]:
    """Validate a validity duration in minutes.

    Empty is valid (the default applies later). Otherwise only ASCII digits are
    accepted and the value must lie between 1 and ``MAX_VALIDITY_MINUTES``.
    """
    if candidate is None or candidate == "":
        return True, ""

    if not isinstance(candidate, str) or not _DIGITS_RE.fullmatch(candidate):
        return False, INVALID_VALIDITY

    # Compare lengths first so huge digit strings never reach int()
    if len(candidate.lstrip("0")) > len(str(MAX_VALIDITY_MINUTES)):
        return False, INVALID_VALIDITY

    if not 0 < int(candidate) <= MAX_VALIDITY_MINUTES:
        return False, INVALID_VALIDITY

    return True, ""


def validate_shortcode(candidate: str) -> Tuple[bool, str]:
    """Validate a custom short code. Empty means "generate one"."""
    if candidate is None or candidate == "":
        return True, ""

    if not isinstance(candidate, str) or len(candidate) > SHORTCODE_MAX_LENGTH:
        return False, INVALID_SHORTCODE

    if not _SHORTCODE_RE.fullmatch(candidate):
        return False, INVALID_SHORTCODE

    return True, ""


def validate_submission(submission: UrlSubmission) -> Dict[str, str]:
    """Field-level errors for one form row, keyed by the wire field name."""
    errors: Dict[str, str] = {}

    if submission.original_url:
        ok, reason = validate_url(submission.original_url)
        if not ok:
            errors["originalUrl"] = reason

    ok, reason = validate_validity(submission.validity)
    if not ok:
        errors["validity"] = reason

    ok, reason = validate_shortcode(submission.shortcode)
    if not ok:
        errors["shortcode"] = reason

    return errors
