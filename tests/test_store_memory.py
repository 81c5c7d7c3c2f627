"""Tests for sealbin.store.memory.InMemoryPasteStore."""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from sealbin.errors import Conflict, NotFound
from sealbin.store.base import PasteStore
from sealbin.store.memory import InMemoryPasteStore

ENVELOPE = "aXY=:Y3Q="


class TestInMemoryPasteStore:
    def test_satisfies_protocol(self):
        assert isinstance(InMemoryPasteStore(), PasteStore)

    @pytest.mark.asyncio
    async def test_create_and_get(self):
        store = InMemoryPasteStore()
        created = await store.create("ABCDEFGHIJ", ENVELOPE, "json", None)
        fetched = await store.get("ABCDEFGHIJ")
        assert fetched == created
        assert fetched.language == "json"
        assert fetched.created_at.tzinfo is not None

    @pytest.mark.asyncio
    async def test_duplicate_id_conflicts(self):
        store = InMemoryPasteStore()
        await store.create("ABCDEFGHIJ", ENVELOPE, "json", None)
        with pytest.raises(Conflict):
            await store.create("ABCDEFGHIJ", "other:envelope", "json", None)
        assert (await store.get("ABCDEFGHIJ")).envelope == ENVELOPE

    @pytest.mark.asyncio
    async def test_concurrent_creates_one_winner(self):
        store = InMemoryPasteStore()
        results = await asyncio.gather(
            *(store.create("ABCDEFGHIJ", ENVELOPE, "plaintext", None) for _ in range(10)),
            return_exceptions=True,
        )
        assert sum(not isinstance(r, Exception) for r in results) == 1
        assert sum(isinstance(r, Conflict) for r in results) == 9

    @pytest.mark.asyncio
    async def test_get_missing(self):
        with pytest.raises(NotFound):
            await InMemoryPasteStore().get("ZZZZZZZZZZ")

    @pytest.mark.asyncio
    async def test_delete_is_idempotent(self):
        store = InMemoryPasteStore()
        await store.create("ABCDEFGHIJ", ENVELOPE, "plaintext", None)
        await store.delete("ABCDEFGHIJ")
        await store.delete("ABCDEFGHIJ")
        assert "ABCDEFGHIJ" not in store

    @pytest.mark.asyncio
    async def test_purge_expired(self):
        store = InMemoryPasteStore()
        now = datetime.now(timezone.utc)
        await store.create("A000000000", ENVELOPE, "plaintext", now - timedelta(seconds=1))
        await store.create("B000000000", ENVELOPE, "plaintext", now + timedelta(seconds=60))
        await store.create("C000000000", ENVELOPE, "plaintext", None)
        assert await store.purge_expired(now) == 1
        assert len(store) == 2
        assert await store.purge_expired(now) == 0
