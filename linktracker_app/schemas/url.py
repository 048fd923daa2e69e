"""
Snapshots stored by the record store and the click ledger.

All models are frozen: a mutation builds a new snapshot with ``model_copy``.
Field names are snake_case in Python and camelCase on the wire, which is the
layout persisted under the ``shortenedUrls`` and ``shortcodeClicks`` keys.
"""

from datetime import datetime, timezone
from typing import Annotated, List, Optional, Tuple

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

UI_CLICK_SOURCE = "UI Click"
REDIRECT_SOURCE = "Redirect"
UNKNOWN_LOCATION = "Unknown"


def _assume_utc(value: datetime) -> datetime:
    # Naive timestamps in stored data are treated as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


UtcDatetime = Annotated[datetime, AfterValidator(_assume_utc)]


class SnapshotModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_json(self) -> dict:
        """JSON-compatible dict using the persisted (camelCase) keys"""
        return self.model_dump(mode="json", by_alias=True)


class ClickEvent(SnapshotModel):
    """One access of a short link."""

    timestamp: UtcDatetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    source: str = Field(UI_CLICK_SOURCE, description="Where the click came from")
    location: str = Field(UNKNOWN_LOCATION, description="Best-effort location")


class UrlRecord(SnapshotModel):
    """
    Mapping from a short code to its original URL.

    ``clicks`` is append-only; ``record_with_click`` returns the next snapshot.
    """

    original_url: str
    shortcode: str
    shortened_link: str
    creation_date: UtcDatetime
    expiry_date: UtcDatetime
    clicks: Tuple[ClickEvent, ...] = ()

    def record_with_click(self, event: ClickEvent) -> "UrlRecord":
        return self.model_copy(update={"clicks": self.clicks + (event,)})

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """Informational only, expired links keep working"""
        now = now or datetime.now(timezone.utc)
        return now >= self.expiry_date


class ClickLedgerEntry(SnapshotModel):
    """Aggregate of clicks for one short code. ``count`` always equals ``len(detailed)``."""

    count: int = Field(0, ge=0)
    detailed: Tuple[ClickEvent, ...] = ()

    @model_validator(mode="after")
    def _count_matches_events(self) -> "ClickLedgerEntry":
        if self.count != len(self.detailed):
            raise ValueError(
                f"count {self.count} does not match {len(self.detailed)} detailed events"
            )
        return self

    @classmethod
    def from_events(cls, events) -> "ClickLedgerEntry":
        events = tuple(events)
        return cls(count=len(events), detailed=events)

    def with_click(self, event: ClickEvent) -> "ClickLedgerEntry":
        return ClickLedgerEntry.from_events(self.detailed + (event,))


class NewRecord(BaseModel):
    """A pre-validated candidate for ``RecordStore.create_many``."""

    original_url: str
    validity: Optional[str] = None
    shortcode: Optional[str] = None


class CreationFailure(BaseModel):
    """A candidate that passed validation but could not be stored."""

    position: int
    shortcode: Optional[str] = None
    field: str = "shortcode"  # wire name of the form field the failure belongs to
    reason: str


class BatchResult(BaseModel):
    """Outcome of ``RecordStore.create_many``. ``records`` keeps input order."""

    records: List[UrlRecord] = []
    failures: List[CreationFailure] = []
