"""
FastAPI dependencies for dependency injection.

This module owns the process-wide persistence adapter and link service. The
core classes never reach for these singletons themselves; they receive their
collaborators through their constructors.

Tests replace ``get_link_service`` through ``app.dependency_overrides``.
"""

from functools import lru_cache

from linktracker_app.config import settings
from linktracker_app.persistence.factory import PersistenceBackend, PersistenceFactory
from linktracker_app.persistence.strategies import PersistenceAdapter
from linktracker_app.services.allocator import ShortcodeAllocator
from linktracker_app.services.click_ledger import ClickLedger
from linktracker_app.services.link_service import LinkService
from linktracker_app.services.record_store import RecordStore
from linktracker_app.services.short_code_factory import build_strategy


@lru_cache()
def get_persistence() -> PersistenceAdapter:
    """
    Get persistence instance (singleton).

    Factory gets config from settings internally.
    @lru_cache ensures this is called only once.
    """
    backend = PersistenceBackend(settings.persistence_backend)
    return PersistenceFactory.create(backend)


@lru_cache()
def get_link_service() -> LinkService:
    """
    Get LinkService with all dependencies injected (singleton).

    The service keeps records and the ledger in memory for the life of the
    process, so one instance is shared across requests.
    """
    persistence = get_persistence()
    store = RecordStore(
        persistence=persistence,
        base_url=settings.base_url,
        allocator=ShortcodeAllocator(build_strategy(settings)),
        default_validity_minutes=settings.default_validity_minutes,
    )
    ledger = ClickLedger(persistence)
    return LinkService(store=store, ledger=ledger, max_batch_size=settings.max_batch_size)
