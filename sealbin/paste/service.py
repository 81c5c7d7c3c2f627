"""Paste orchestration: the create and read flows.

Create: content -> classifier -> fresh key -> seal -> store.create under a
generated id.  The exported key is handed back to the caller and never to
the store.  Id collisions are retried up to ``max_attempts`` times.

Read: store.get -> expiry check (expired => delete, then Expired) ->
split -> import key -> decrypt.

Every public coroutine returns a :class:`PasteOutcome`; no exception from
the layers below escapes this module.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Optional

from sealbin.crypto import envelope as cipher
from sealbin.crypto.keys import export_key, generate, import_key
from sealbin.errors import (
    Conflict,
    Expired,
    SealbinError,
    StoreError,
    ValidationError,
)
from sealbin.paste import identifiers
from sealbin.paste.classifier import Language, detect_language
from sealbin.paste.expiration import as_utc, calculate_expiration_date, is_expired
from sealbin.paste.links import build_share_url, parse_share_url
from sealbin.store.base import PasteRecord, PasteStore

logger = logging.getLogger(__name__)

MAX_ENVELOPE_BYTES = 1024 * 1024


def _coerce_language(value: str) -> str:
    try:
        return Language(value).value
    except ValueError:
        raise ValidationError(f"Unknown language: {value!r}") from None


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------

class OutcomeStatus(str, enum.Enum):
    OK = "ok"
    VALIDATION_ERROR = "validation_error"
    INVALID_KEY_FORMAT = "invalid_key_format"
    DECRYPTION_FAILURE = "decryption_failure"
    MALFORMED_ENVELOPE = "malformed_envelope"
    MISSING_KEY_FRAGMENT = "missing_key_fragment"
    NOT_FOUND = "not_found"
    EXPIRED = "expired"
    CONFLICT = "conflict"
    STORE_ERROR = "store_error"


@dataclass(frozen=True)
class PasteOutcome:
    """Discriminated result of a service call."""

    status: OutcomeStatus
    value: Any = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status is OutcomeStatus.OK

    @classmethod
    def success(cls, value: Any) -> "PasteOutcome":
        return cls(OutcomeStatus.OK, value)

    @classmethod
    def failure(cls, exc: SealbinError) -> "PasteOutcome":
        return cls(OutcomeStatus(exc.code), None, str(exc))


@dataclass(frozen=True)
class CreatedPaste:
    """What the submitter gets back.  ``key`` is the exported key."""

    id: str
    key: str
    url: str
    language: str
    expires_at: Optional[datetime]


@dataclass(frozen=True)
class OpenedPaste:
    record: PasteRecord
    content: str


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class PasteService:
    """Coordinates the cipher, classifier, expiry policy and a PasteStore.

    Args:
        store: Persistence collaborator.
        base_url: Origin used when building share links.
        max_envelope_bytes: Upper bound on the serialised envelope.
        max_attempts: Id generation attempts before giving up on conflicts.
        id_factory: Zero-argument callable returning a new id.
    """

    def __init__(
        self,
        store: PasteStore,
        base_url: str = "http://localhost:8000",
        max_envelope_bytes: int = MAX_ENVELOPE_BYTES,
        max_attempts: int = 5,
        id_factory: Optional[Callable[[], str]] = None,
    ) -> None:
        self.store = store
        self.base_url = base_url
        self.max_envelope_bytes = max_envelope_bytes
        self.max_attempts = max(1, max_attempts)
        self._new_id = id_factory or identifiers.generate

    # -- validation -------------------------------------------------------

    def validate_envelope(self, envelope: str) -> None:
        if not envelope:
            raise ValidationError("Content must not be empty")
        if len(envelope.encode("utf-8")) > self.max_envelope_bytes:
            raise ValidationError(
                f"Content exceeds maximum size of {self.max_envelope_bytes} bytes"
            )
        cipher.split(envelope)

    # -- create -----------------------------------------------------------

    async def submit(
        self,
        envelope: str,
        language: str,
        expires_at: Optional[datetime],
    ) -> PasteOutcome:
        """Store an already-sealed envelope under a fresh id."""
        try:
            self.validate_envelope(envelope)
            language = _coerce_language(language)
            if expires_at is not None:
                expires_at = as_utc(expires_at)
            record = await self._insert(envelope, language, expires_at)
        except SealbinError as exc:
            return PasteOutcome.failure(exc)
        return PasteOutcome.success(record)

    async def _insert(
        self,
        envelope: str,
        language: str,
        expires_at: Optional[datetime],
    ) -> PasteRecord:
        for attempt in range(1, self.max_attempts + 1):
            paste_id = self._new_id()
            try:
                record = await self.store.create(paste_id, envelope, language, expires_at)
            except Conflict:
                logger.warning(
                    "Paste id collision on attempt %d/%d", attempt, self.max_attempts
                )
                continue
            logger.info("Created paste id=%s language=%s", record.id, language)
            return record
        raise StoreError(f"Could not allocate a unique paste id after {self.max_attempts} attempts")

    async def create(
        self,
        content: str,
        expiration: str = "never",
        custom_date: Optional[datetime] = None,
        language: Optional[str] = None,
    ) -> PasteOutcome:
        """Classify, encrypt and store *content*.

        Returns a :class:`CreatedPaste` carrying the id, the exported key
        and the share link.
        """
        try:
            if not content or not content.strip():
                raise ValidationError("Content must not be empty")
            label = _coerce_language(language) if language else detect_language(content).value
            expires_at = calculate_expiration_date(expiration, custom_date)
            key = generate()
            sealed = cipher.seal(content, key)
            self.validate_envelope(sealed)
            record = await self._insert(sealed, label, expires_at)
        except SealbinError as exc:
            return PasteOutcome.failure(exc)

        exported = export_key(key)
        return PasteOutcome.success(
            CreatedPaste(
                id=record.id,
                key=exported,
                url=build_share_url(self.base_url, record.id, exported),
                language=label,
                expires_at=record.expires_at,
            )
        )

    # -- read -------------------------------------------------------------

    async def fetch(self, paste_id: str) -> PasteOutcome:
        """Get a record, lazily deleting it if it has expired."""
        try:
            record = await self.store.get(paste_id)
            if is_expired(record.expires_at):
                await self._delete_expired(paste_id)
                raise Expired(paste_id)
        except SealbinError as exc:
            return PasteOutcome.failure(exc)
        return PasteOutcome.success(record)

    async def _delete_expired(self, paste_id: str) -> None:
        try:
            await self.store.delete(paste_id)
        except StoreError:
            # Not retried; the stale record resurfaces as Expired on a later read.
            logger.warning("Failed to delete expired paste id=%s", paste_id)
        else:
            logger.info("Deleted expired paste id=%s", paste_id)

    async def read(self, paste_id: str, exported_key: str) -> PasteOutcome:
        """Fetch and decrypt a paste with a caller-supplied key."""
        fetched = await self.fetch(paste_id)
        if not fetched.ok:
            return fetched
        record: PasteRecord = fetched.value
        try:
            iv, ciphertext = cipher.split(record.envelope)
            key = import_key(exported_key)
            content = cipher.decrypt(ciphertext, iv, key)
        except SealbinError as exc:
            return PasteOutcome.failure(exc)
        return PasteOutcome.success(OpenedPaste(record=record, content=content))

    async def open_link(self, url: str) -> PasteOutcome:
        """Resolve a share link end to end."""
        try:
            paste_id, exported_key = parse_share_url(url)
        except SealbinError as exc:
            return PasteOutcome.failure(exc)
        return await self.read(paste_id, exported_key)

