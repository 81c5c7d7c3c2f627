"""Paste create and fetch endpoints.

The server only ever handles sealed envelopes.  Keys stay in the share
link's fragment on the client side and never reach these routes.  There is
no public delete: the id is part of every share link, so removal happens
only through expiry.
"""

from __future__ import annotations

import logging
from datetime import datetime
from functools import partial
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from sealbin.config.settings import settings
from sealbin.errors import SealbinError
from sealbin.paste import identifiers
from sealbin.paste.classifier import Language
from sealbin.paste.expiration import calculate_expiration_date, format_expiration_time
from sealbin.paste.identifiers import is_valid_id
from sealbin.paste.service import OutcomeStatus, PasteOutcome, PasteService
from sealbin.store import get_store
from sealbin.store.base import PasteRecord

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/pastes", tags=["pastes"])


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class PasteCreateRequest(BaseModel):
    envelope: str = Field(..., description="'<b64 iv>:<b64 ciphertext>'")
    language: Language = Language.PLAINTEXT
    expiration: str = Field("never", description="1h, 1d, 1w, 1m, never or custom")
    expires_at: Optional[datetime] = Field(None, description="Required when expiration is 'custom'")


class PasteCreateResponse(BaseModel):
    id: str
    expires_at: Optional[datetime]


class PasteResponse(BaseModel):
    id: str
    envelope: str
    language: str
    created_at: datetime
    expires_at: Optional[datetime]
    expires_label: str


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

_STATUS_CODES = {
    OutcomeStatus.VALIDATION_ERROR: 400,
    OutcomeStatus.MALFORMED_ENVELOPE: 400,
    OutcomeStatus.NOT_FOUND: 404,
    OutcomeStatus.EXPIRED: 410,
    OutcomeStatus.CONFLICT: 409,
    OutcomeStatus.STORE_ERROR: 503,
}


def get_service() -> PasteService:
    return PasteService(
        get_store(),
        base_url=settings.PUBLIC_BASE_URL,
        max_envelope_bytes=settings.MAX_ENVELOPE_BYTES,
        max_attempts=settings.ID_MAX_ATTEMPTS,
        id_factory=partial(identifiers.generate, unbiased=settings.ID_UNBIASED),
    )


def _raise_for(outcome: PasteOutcome) -> None:
    if outcome.ok:
        return
    status_code = _STATUS_CODES.get(outcome.status, 500)
    raise HTTPException(status_code=status_code, detail=outcome.message or outcome.status.value)


def _check_id(paste_id: str) -> None:
    if not is_valid_id(paste_id):
        raise HTTPException(status_code=400, detail=f"Invalid paste id: {paste_id!r}")


# ---------------------------------------------------------------------------
# POST /api/pastes
# ---------------------------------------------------------------------------

@router.post("", status_code=201)
async def create_paste(
    body: PasteCreateRequest,
    service: PasteService = Depends(get_service),
) -> PasteCreateResponse:
    if len(body.envelope.encode("utf-8")) > service.max_envelope_bytes:
        raise HTTPException(status_code=413, detail="Content exceeds maximum size")

    try:
        expires_at = calculate_expiration_date(body.expiration, body.expires_at)
    except SealbinError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    outcome = await service.submit(body.envelope, body.language.value, expires_at)
    _raise_for(outcome)
    record: PasteRecord = outcome.value
    return PasteCreateResponse(id=record.id, expires_at=record.expires_at)


# ---------------------------------------------------------------------------
# GET /api/pastes/{paste_id}
# ---------------------------------------------------------------------------

@router.get("/{paste_id}")
async def get_paste(
    paste_id: str,
    service: PasteService = Depends(get_service),
) -> PasteResponse:
    _check_id(paste_id)
    outcome = await service.fetch(paste_id)
    _raise_for(outcome)
    record: PasteRecord = outcome.value
    return PasteResponse(
        id=record.id,
        envelope=record.envelope,
        language=record.language,
        created_at=record.created_at,
        expires_at=record.expires_at,
        expires_label=format_expiration_time(record.expires_at),
    )

