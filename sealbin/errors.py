"""Error taxonomy shared by every sealbin component.

Primitive components (crypto, expiration, store) raise these exceptions.
The orchestration layer in :mod:`sealbin.paste.service` converts them into
explicit :class:`~sealbin.paste.service.PasteOutcome` results, so nothing
below escapes across the service boundary.
"""

from __future__ import annotations

from typing import Any


class SealbinError(Exception):
    """Base class for all sealbin failures.

    Attributes:
        code: Stable machine-readable identifier for the failure kind.
    """

    code: str = "error"

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.code, "message": str(self)}


class ValidationError(SealbinError):
    """Content is empty, oversized, or an option is not recognised."""

    code = "validation_error"


class InvalidKeyFormat(SealbinError):
    """An exported key did not decode to exactly 32 bytes."""

    code = "invalid_key_format"


class DecryptionFailure(SealbinError):
    """Authentication failed.

    Deliberately undifferentiated: a wrong key and tampered ciphertext
    produce the same error and the same message.
    """

    code = "decryption_failure"

    def __init__(self, message: str = "Failed to decrypt content. Invalid key or corrupted data.") -> None:
        super().__init__(message)


class MalformedEnvelope(SealbinError):
    """The wire-format envelope could not be parsed."""

    code = "malformed_envelope"


class NotFound(SealbinError):
    """No paste exists under the requested id."""

    code = "not_found"

    def __init__(self, paste_id: str) -> None:
        self.paste_id = paste_id
        super().__init__(f"Paste {paste_id!r} not found")


class Expired(SealbinError):
    """The paste existed but is past its expiry."""

    code = "expired"

    def __init__(self, paste_id: str) -> None:
        self.paste_id = paste_id
        super().__init__("This paste has expired")


class Conflict(SealbinError):
    """An insert collided with an existing id."""

    code = "conflict"

    def __init__(self, paste_id: str) -> None:
        self.paste_id = paste_id
        super().__init__(f"Paste id {paste_id!r} already exists")


class StoreError(SealbinError):
    """Opaque persistence backend failure."""

    code = "store_error"


class MissingKeyFragment(SealbinError):
    """A share link carried no key fragment."""

    code = "missing_key_fragment"

    def __init__(self, message: str = "Encryption key is missing from URL") -> None:
        super().__init__(message)


class RateLimited(SealbinError):
    """A client exceeded its request allowance."""

    code = "rate_limited"

    def __init__(self, identifier: str, limit: int, window_ms: int) -> None:
        self.identifier = identifier
        self.limit = limit
        self.window_ms = window_ms
        super().__init__(f"Rate limit exceeded ({limit} requests per {window_ms} ms)")
