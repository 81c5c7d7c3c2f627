"""PasteStore contract.

The core only ever talks to persistence through this Protocol.  Stores are
assumed to provide atomic per-key create/get/delete and nothing more; the
core never coordinates several store calls transactionally.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Protocol, runtime_checkable


@dataclass(frozen=True)
class PasteRecord:
    """A stored paste.  Never carries the decryption key."""

    id: str
    envelope: str
    language: str
    created_at: datetime
    expires_at: Optional[datetime] = None


@runtime_checkable
class PasteStore(Protocol):
    async def create(
        self,
        paste_id: str,
        envelope: str,
        language: str,
        expires_at: Optional[datetime],
    ) -> PasteRecord:
        """Insert a record.  Raises Conflict or StoreError."""
        ...

    async def get(self, paste_id: str) -> PasteRecord:
        """Fetch a record.  Raises NotFound or StoreError."""
        ...

    async def delete(self, paste_id: str) -> None:
        """Remove a record; absent ids are not an error."""
        ...

    async def purge_expired(self, now: datetime) -> int:
        """Remove every record whose expiry is before *now*."""
        ...
