"""SQLAlchemy model for stored pastes."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Index, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from sealbin.db import Base


class Paste(Base):
    __tablename__ = "pastes"
    __table_args__ = (
        Index("ix_pastes_expires_at", "expires_at"),
    )

    id: Mapped[str] = mapped_column(String(10), primary_key=True)
    envelope: Mapped[str] = mapped_column(Text, nullable=False)
    language: Mapped[str] = mapped_column(String(32), nullable=False, default="plaintext")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    expires_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
