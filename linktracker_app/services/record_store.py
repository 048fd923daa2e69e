import logging
from datetime import datetime, timezone
from typing import Callable, Iterable, List, Optional, Set

from pydantic import ValidationError

from linktracker_app.exceptions import ShortCodeAllocationError, ShortCodeConflictError
from linktracker_app.logging_config import get_logger, log_success
from linktracker_app.persistence.strategies import PersistenceAdapter
from linktracker_app.schemas.url import (
    BatchResult,
    ClickEvent,
    CreationFailure,
    NewRecord,
    UrlRecord,
)
from linktracker_app.services.allocator import ShortcodeAllocator
from linktracker_app.services.expiry import DEFAULT_VALIDITY_MINUTES, compute_expiry

RECORDS_KEY = "shortenedUrls"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RecordStore:
    """
    The collection of shortened-URL records, keyed by short code.

    The whole collection lives under one persistence key and is rewritten on
    every mutation (O(n) per write, fine for a single-user local store).
    Records are frozen snapshots, so lists handed out by ``load_all`` never
    change underneath the caller.

    Dependencies are injected:
    - persistence: where the collection is stored
    - allocator: picks short codes for new records
    - logger / clock: side channel and time source (swappable in tests)
    """

    def __init__(
        self,
        persistence: PersistenceAdapter,
        base_url: str,
        allocator: Optional[ShortcodeAllocator] = None,
        default_validity_minutes: int = DEFAULT_VALIDITY_MINUTES,
        clock: Callable[[], datetime] = utc_now,
        logger: Optional[logging.Logger] = None,
    ):
        self.persistence = persistence
        self.base_url = base_url.rstrip("/")
        self.allocator = allocator or ShortcodeAllocator()
        self.default_validity_minutes = default_validity_minutes
        self.clock = clock
        self.logger = logger or get_logger("records")
        self._records: Optional[List[UrlRecord]] = None

    # Queries

    def load_all(self) -> List[UrlRecord]:
        """
        All records in creation order.

        The durable collection is read on first use; absent or corrupt data
        yields an empty store.
        """
        return list(self._ensure_loaded())

    def reload(self) -> List[UrlRecord]:
        """Drop the in-memory copy and read the durable collection again"""
        self._records = None
        return self.load_all()

    def get(self, shortcode: str) -> Optional[UrlRecord]:
        for record in self._ensure_loaded():
            if record.shortcode == shortcode:
                return record
        return None

    def codes(self) -> Set[str]:
        return {record.shortcode for record in self._ensure_loaded()}

    def shortened_link(self, shortcode: str) -> str:
        return f"{self.base_url}/{shortcode}"

    # Commands

    def create_many(self, candidates: Iterable[NewRecord]) -> BatchResult:
        """
        Build and append a record for each candidate with a non-empty URL.

        Candidates are expected to be validated already. A custom code that is
        taken (by a stored record or an earlier candidate) or a generated code
        that cannot be allocated fails that candidate only, as does a validity
        the expiry cannot be computed for; the failure is reported with the
        candidate's position. The collection is written once.
        """
        records = self._ensure_loaded()
        taken = self.codes()
        result = BatchResult()

        for position, candidate in enumerate(candidates):
            if not candidate.original_url:
                continue

            try:
                record = self._build_record(candidate, taken)
            except (ShortCodeConflictError, ShortCodeAllocationError) as e:
                self._fail(result, position, candidate, "shortcode", str(e))
                continue
            except (ValueError, OverflowError) as e:
                self._fail(result, position, candidate, "validity", str(e))
                continue

            taken.add(record.shortcode)
            records.append(record)
            result.records.append(record)
            log_success(self.logger, "Shortened URL created for %s", record.original_url)

        if result.records:
            self.persist()
        return result

    def record_click(self, shortcode: str, event: ClickEvent, persist: bool = True) -> bool:
        """
        Append ``event`` to the record's click history.

        Returns False (and changes nothing) when the short code is unknown.
        """
        records = self._ensure_loaded()
        for index, record in enumerate(records):
            if record.shortcode == shortcode:
                records[index] = record.record_with_click(event)
                break
        else:
            self.logger.warning("Click for unknown shortcode %s ignored", shortcode)
            return False

        if persist:
            self.persist()
        return True

    def persist(self) -> bool:
        """Write the whole collection. A failed write is logged and the store stays in memory."""
        payload = [record.to_json() for record in self._ensure_loaded()]
        return self.persistence.set(RECORDS_KEY, payload)

    # Internals

    def _fail(self, result: BatchResult, position: int, candidate: NewRecord, field: str, reason: str) -> None:
        self.logger.error("Could not shorten %s: %s", candidate.original_url, reason)
        result.failures.append(CreationFailure(
            position=position,
            shortcode=candidate.shortcode or None,
            field=field,
            reason=reason,
        ))

    def _build_record(self, candidate: NewRecord, taken: Set[str]) -> UrlRecord:
        if candidate.shortcode and candidate.shortcode in taken:
            raise ShortCodeConflictError(candidate.shortcode)

        shortcode = self.allocator.allocate(candidate.shortcode, taken)
        created_at = self.clock()
        return UrlRecord(
            original_url=candidate.original_url,
            shortcode=shortcode,
            shortened_link=self.shortened_link(shortcode),
            creation_date=created_at,
            expiry_date=compute_expiry(
                created_at, candidate.validity, default=self.default_validity_minutes
            ),
        )

    def _ensure_loaded(self) -> List[UrlRecord]:
        if self._records is None:
            self._records = self._read()
        return self._records

    def _read(self) -> List[UrlRecord]:
        data = self.persistence.get(RECORDS_KEY)
        if data is None:
            return []

        if not isinstance(data, list):
            self.logger.error("Stored %s is not a list, starting empty", RECORDS_KEY)
            return []

        records: List[UrlRecord] = []
        seen: Set[str] = set()
        for position, item in enumerate(data):
            try:
                record = UrlRecord.model_validate(item)
            except ValidationError as e:
                self.logger.error("Skipping malformed record #%d: %s", position, e)
                continue
            if record.shortcode in seen:
                self.logger.error("Skipping duplicate shortcode %s in stored records", record.shortcode)
                continue
            seen.add(record.shortcode)
            records.append(record)
        return records
