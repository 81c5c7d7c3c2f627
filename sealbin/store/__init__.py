"""Persistence collaborators behind the PasteStore protocol."""

from __future__ import annotations

from sealbin.store.base import PasteRecord, PasteStore
from sealbin.store.memory import InMemoryPasteStore

__all__ = ["InMemoryPasteStore", "PasteRecord", "PasteStore", "get_store"]

_store: PasteStore | None = None


def get_store() -> PasteStore:
    """Return the process-wide store selected by ``STORE_BACKEND``."""
    global _store
    if _store is None:
        from sealbin.config.settings import settings

        if settings.STORE_BACKEND == "sql":
            from sealbin.db import async_session
            from sealbin.store.sql import SQLPasteStore

            _store = SQLPasteStore(async_session)
        else:
            _store = InMemoryPasteStore()
    return _store
