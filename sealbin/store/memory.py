"""In-memory PasteStore for tests, the CLI and single-process dev servers."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone

from sealbin.errors import Conflict, NotFound
from sealbin.store.base import PasteRecord


class InMemoryPasteStore:
    """Dict-backed store guarded by an asyncio lock."""

    def __init__(self) -> None:
        self._records: dict[str, PasteRecord] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, paste_id: object) -> bool:
        return paste_id in self._records

    async def create(
        self,
        paste_id: str,
        envelope: str,
        language: str,
        expires_at: datetime | None,
    ) -> PasteRecord:
        async with self._lock:
            if paste_id in self._records:
                raise Conflict(paste_id)
            record = PasteRecord(
                id=paste_id,
                envelope=envelope,
                language=language,
                created_at=datetime.now(timezone.utc),
                expires_at=expires_at,
            )
            self._records[paste_id] = record
            return record

    async def get(self, paste_id: str) -> PasteRecord:
        record = self._records.get(paste_id)
        if record is None:
            raise NotFound(paste_id)
        return record

    async def delete(self, paste_id: str) -> None:
        async with self._lock:
            self._records.pop(paste_id, None)

    async def purge_expired(self, now: datetime) -> int:
        async with self._lock:
            stale = [
                pid for pid, rec in self._records.items()
                if rec.expires_at is not None and rec.expires_at < now
            ]
            for pid in stale:
                del self._records[pid]
            return len(stale)
