from .url import (
    BatchResult,
    ClickEvent,
    ClickLedgerEntry,
    CreationFailure,
    NewRecord,
    UrlRecord,
)
from .api import (
    LinkStats,
    LinkSummary,
    ShortenRequest,
    ShortenResponse,
    SubmissionResult,
    UrlSubmission,
)

__all__ = [
    "BatchResult",
    "ClickEvent",
    "ClickLedgerEntry",
    "CreationFailure",
    "NewRecord",
    "UrlRecord",
    "LinkStats",
    "LinkSummary",
    "ShortenRequest",
    "ShortenResponse",
    "SubmissionResult",
    "UrlSubmission",
]
