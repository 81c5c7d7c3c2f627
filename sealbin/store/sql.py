"""PasteStore backed by SQLAlchemy async sessions."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from sealbin.errors import Conflict, NotFound, StoreError
from sealbin.models.paste import Paste
from sealbin.store.base import PasteRecord

logger = logging.getLogger(__name__)


def _to_record(row: Paste) -> PasteRecord:
    return PasteRecord(
        id=row.id,
        envelope=row.envelope,
        language=row.language,
        created_at=row.created_at,
        expires_at=row.expires_at,
    )


class SQLPasteStore:
    """One short-lived session per operation."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def create(
        self,
        paste_id: str,
        envelope: str,
        language: str,
        expires_at: Optional[datetime],
    ) -> PasteRecord:
        async with self._session_factory() as session:
            row = Paste(id=paste_id, envelope=envelope, language=language, expires_at=expires_at)
            session.add(row)
            try:
                await session.commit()
                await session.refresh(row)
            except IntegrityError:
                await session.rollback()
                raise Conflict(paste_id) from None
            except SQLAlchemyError as exc:
                await session.rollback()
                logger.error("Paste insert failed: %s", type(exc).__name__)
                raise StoreError("Failed to create paste") from exc
            return _to_record(row)

    async def get(self, paste_id: str) -> PasteRecord:
        async with self._session_factory() as session:
            try:
                row = (
                    await session.execute(select(Paste).where(Paste.id == paste_id))
                ).scalar_one_or_none()
            except SQLAlchemyError as exc:
                logger.error("Paste lookup failed: %s", type(exc).__name__)
                raise StoreError("Failed to retrieve paste") from exc
            if row is None:
                raise NotFound(paste_id)
            return _to_record(row)

    async def delete(self, paste_id: str) -> None:
        async with self._session_factory() as session:
            try:
                await session.execute(delete(Paste).where(Paste.id == paste_id))
                await session.commit()
            except SQLAlchemyError as exc:
                await session.rollback()
                raise StoreError("Failed to delete paste") from exc

    async def purge_expired(self, now: datetime) -> int:
        async with self._session_factory() as session:
            try:
                result = await session.execute(
                    delete(Paste).where(Paste.expires_at.is_not(None), Paste.expires_at < now)
                )
                await session.commit()
            except SQLAlchemyError as exc:
                await session.rollback()
                raise StoreError("Failed to purge expired pastes") from exc
            return result.rowcount or 0
