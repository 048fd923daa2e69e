import logging
from typing import Dict, List, Optional, Sequence

from linktracker_app.exceptions import BatchTooLargeError
from linktracker_app.logging_config import get_logger
from linktracker_app.schemas.api import LinkStats, LinkSummary, SubmissionResult, UrlSubmission
from linktracker_app.schemas.url import (
    UI_CLICK_SOURCE,
    UNKNOWN_LOCATION,
    ClickEvent,
    NewRecord,
    UrlRecord,
)
from linktracker_app.services.click_ledger import ClickLedger
from linktracker_app.services.record_store import RecordStore
from linktracker_app.services.validators import validate_submission

DEFAULT_MAX_BATCH_SIZE = 5


class LinkService:
    """
    Link service with dependency injection for the record store and click ledger.

    This is the seam the presentation layer talks to:
    - shortening batches are validated here, row by row
    - every click goes to both the record store and the ledger

    On construction both structures are loaded and the ledger is reconciled
    against the records, so a ledger that missed a write is repaired.
    """

    def __init__(
        self,
        store: RecordStore,
        ledger: ClickLedger,
        max_batch_size: int = DEFAULT_MAX_BATCH_SIZE,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize link service with dependencies.

        Args:
            store: Record store (full records with click history)
            ledger: Click ledger (count + events per short code)
            max_batch_size: Most submissions accepted in one batch
            logger: Logging side channel
        """
        self.store = store
        self.ledger = ledger
        self.max_batch_size = max_batch_size
        self.logger = logger or get_logger("service")
        self.ledger.reconcile(self.store.load_all())

    def shorten_batch(self, submissions: Sequence[UrlSubmission]) -> List[SubmissionResult]:
        """
        Shorten every submitted row of the form.

        Process:
        1. Validate each row; an invalid row gets field errors, the others go on
        2. Skip rows without a URL (not submitted)
        3. Create records for the valid rows in one store write
        4. Seed a ledger entry per new record, then persist the ledger once

        Returns one result per submission, in input order.

        Raises:
            BatchTooLargeError: More than ``max_batch_size`` submissions
        """
        if len(submissions) > self.max_batch_size:
            raise BatchTooLargeError(len(submissions), self.max_batch_size)

        self.logger.info("Shorten requested for %d submissions", len(submissions))

        errors: Dict[int, Dict[str, str]] = {}
        pending: List[int] = []
        candidates: List[NewRecord] = []

        for position, submission in enumerate(submissions):
            row_errors = validate_submission(submission)
            if row_errors:
                errors[position] = row_errors
                self.logger.error("Validation failed for URL #%d: %s", position + 1, row_errors)
            elif submission.original_url:
                pending.append(position)
                candidates.append(NewRecord(
                    original_url=submission.original_url,
                    validity=submission.validity or None,
                    shortcode=submission.shortcode or None,
                ))

        batch = self.store.create_many(candidates)

        # create_many keeps input order and skips failed candidates
        failures = {failure.position: failure for failure in batch.failures}
        created = iter(batch.records)
        records: Dict[int, UrlRecord] = {}
        for candidate_position, position in enumerate(pending):
            failure = failures.get(candidate_position)
            if failure is not None:
                errors[position] = {failure.field: failure.reason}
            else:
                records[position] = next(created)

        for record in records.values():
            self.ledger.init_entry(record.shortcode, persist=False)
        if records:
            self.ledger.persist()

        return [
            SubmissionResult(
                position=position,
                original_url=submission.original_url,
                record=records.get(position),
                errors=errors.get(position, {}),
            )
            for position, submission in enumerate(submissions)
        ]

    def record_click(
        self,
        shortcode: str,
        source: str = UI_CLICK_SOURCE,
        location: str = UNKNOWN_LOCATION
    ) -> Optional[ClickEvent]:
        """
        Record one click against both the record store and the ledger.

        Both structures are updated in memory first and only then written, so
        the in-memory state always agrees. The two writes are separate: if the
        record write lands and the ledger write fails, durable state disagrees
        until the next start, where ``ClickLedger.reconcile`` rebuilds the
        ledger from the records' click histories.
        An unknown short code returns None and changes nothing.
        """
        self.logger.info("Shortlink %s clicked", shortcode)

        if self.store.get(shortcode) is None:
            self.logger.warning("Shortlink %s not found, click not recorded", shortcode)
            return None

        event = ClickEvent(timestamp=self.store.clock(), source=source, location=location)
        self.store.record_click(shortcode, event, persist=False)
        self.ledger.record_click(shortcode, event, persist=False)

        self.store.persist()
        self.ledger.persist()
        return event

    def get_link(self, shortcode: str) -> Optional[UrlRecord]:
        return self.store.get(shortcode)

    def list_links(self) -> List[LinkSummary]:
        """All links in creation order, with ledger click totals"""
        return [self._summary(record) for record in self.store.load_all()]

    def get_stats(self, shortcode: str) -> Optional[LinkStats]:
        record = self.store.get(shortcode)
        if record is None:
            return None

        entry = self.ledger.get(shortcode)
        clicks = list(entry.detailed) if entry else []
        return LinkStats(
            **self._summary(record).model_dump(),
            expired=record.is_expired(self.store.clock()),
            clicks=clicks,
        )

    def _summary(self, record: UrlRecord) -> LinkSummary:
        entry = self.ledger.get(record.shortcode)
        return LinkSummary(
            original_url=record.original_url,
            shortcode=record.shortcode,
            shortened_link=record.shortened_link,
            creation_date=record.creation_date,
            expiry_date=record.expiry_date,
            total_clicks=entry.count if entry else 0,
        )
