import logging
from typing import Dict, Iterable, Optional

from pydantic import ValidationError

from linktracker_app.logging_config import get_logger
from linktracker_app.persistence.strategies import PersistenceAdapter
from linktracker_app.schemas.url import ClickEvent, ClickLedgerEntry, UrlRecord

LEDGER_KEY = "shortcodeClicks"


class ClickLedger:
    """
    Lightweight click aggregate (count + detailed events) per short code.

    Mirrors ``UrlRecord.clicks`` but is stored independently under its own key,
    so statistics can be read without loading every record. The caller keeps
    both structures in step (see LinkService.record_click).
    """

    def __init__(self, persistence: PersistenceAdapter, logger: Optional[logging.Logger] = None):
        self.persistence = persistence
        self.logger = logger or get_logger("ledger")
        self._entries: Optional[Dict[str, ClickLedgerEntry]] = None

    def load_all(self) -> Dict[str, ClickLedgerEntry]:
        return dict(self._ensure_loaded())

    def reload(self) -> Dict[str, ClickLedgerEntry]:
        self._entries = None
        return self.load_all()

    def get(self, shortcode: str) -> Optional[ClickLedgerEntry]:
        return self._ensure_loaded().get(shortcode)

    def init_entry(self, shortcode: str, persist: bool = True) -> ClickLedgerEntry:
        """Seed an empty entry for a new record. An existing entry is kept as is."""
        entries = self._ensure_loaded()
        if shortcode in entries:
            self.logger.warning("Ledger entry for %s already exists, keeping it", shortcode)
        else:
            entries[shortcode] = ClickLedgerEntry()

        if persist:
            self.persist()
        return entries[shortcode]

    def record_click(self, shortcode: str, event: ClickEvent, persist: bool = True) -> ClickLedgerEntry:
        """Count ``event`` against ``shortcode``, creating the entry if it is missing."""
        entries = self._ensure_loaded()
        entry = entries.get(shortcode) or ClickLedgerEntry()
        entries[shortcode] = entry.with_click(event)

        if persist:
            self.persist()
        return entries[shortcode]

    def reconcile(self, records: Iterable[UrlRecord], persist: bool = True) -> int:
        """
        Make every record's entry match its click history.

        Records are authoritative: a missing or diverging entry is rebuilt from
        ``record.clicks``. Returns the number of entries rebuilt.
        """
        entries = self._ensure_loaded()
        rebuilt = 0
        for record in records:
            entry = entries.get(record.shortcode)
            if entry is not None and entry.detailed == record.clicks:
                continue
            entries[record.shortcode] = ClickLedgerEntry.from_events(record.clicks)
            rebuilt += 1

        if rebuilt:
            self.logger.info("Rebuilt %d click ledger entries from records", rebuilt)
            if persist:
                self.persist()
        return rebuilt

    def persist(self) -> bool:
        payload = {code: entry.to_json() for code, entry in self._ensure_loaded().items()}
        return self.persistence.set(LEDGER_KEY, payload)

    def _ensure_loaded(self) -> Dict[str, ClickLedgerEntry]:
        if self._entries is None:
            self._entries = self._read()
        return self._entries

    def _read(self) -> Dict[str, ClickLedgerEntry]:
        data = self.persistence.get(LEDGER_KEY)
        if data is None:
            return {}

        if not isinstance(data, dict):
            self.logger.error("Stored %s is not an object, starting empty", LEDGER_KEY)
            return {}

        entries: Dict[str, ClickLedgerEntry] = {}
        for shortcode, item in data.items():
            try:
                entries[shortcode] = ClickLedgerEntry.model_validate(item)
            except ValidationError as e:
                self.logger.error("Skipping malformed ledger entry %s: %s", shortcode, e)
        return entries
