from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .url import ClickEvent, UrlRecord


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UrlSubmission(CamelModel):
    """One row of the shortening form. Empty strings mean "not submitted"."""

    original_url: str = Field("", description="The long URL to shorten")
    validity: str = Field("", description="Lifetime in minutes, defaults to 30")
    shortcode: str = Field("", description="Optional custom short code")

    @field_validator("original_url", "validity", "shortcode", mode="before")
    @classmethod
    def _as_text(cls, value):
        if value is None:
            return ""
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class ShortenRequest(CamelModel):
    submissions: List[UrlSubmission]


class SubmissionResult(CamelModel):
    """Per-row outcome of a shortening batch, in input order."""

    position: int
    original_url: str = ""
    record: Optional[UrlRecord] = None
    errors: Dict[str, str] = Field(default_factory=dict)

    @property
    def created(self) -> bool:
        return self.record is not None


class ShortenResponse(CamelModel):
    results: List[SubmissionResult]


class LinkSummary(CamelModel):
    original_url: str
    shortcode: str
    shortened_link: str
    creation_date: datetime
    expiry_date: datetime
    total_clicks: int


class LinkStats(LinkSummary):
    """Statistics view: totals come from the click ledger"""

    expired: bool
    clicks: List[ClickEvent]
