"""Symmetric key lifecycle: generation, export, import.

Keys are 256-bit AES-GCM keys, generated fresh per paste.  The exported
form is standard base64 of the raw bytes and is what travels in the share
link's URL fragment.
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass

from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from sealbin.errors import InvalidKeyFormat

KEY_SIZE = 32  # 256 bits


@dataclass(frozen=True)
class Key:
    """Immutable wrapper around raw key bytes."""

    raw: bytes

    def __post_init__(self) -> None:
        if len(self.raw) != KEY_SIZE:
            raise InvalidKeyFormat(f"Key must be exactly {KEY_SIZE} bytes")

    def __repr__(self) -> str:
        return "Key(<redacted>)"


def generate() -> Key:
    """Generate a fresh random 256-bit key."""
    return Key(AESGCM.generate_key(bit_length=256))


def export_key(key: Key) -> str:
    """Encode *key* as base64 for embedding in a URL fragment."""
    return base64.b64encode(key.raw).decode("ascii")


def import_key(encoded: str) -> Key:
    """Decode a key previously produced by :func:`export_key`.

    Any 32-byte value is accepted; no strength checks are made.

    Raises:
        InvalidKeyFormat: if *encoded* is not base64 or does not decode
            to exactly 32 bytes.
    """
    try:
        raw = base64.b64decode(encoded.strip(), validate=True)
    except (binascii.Error, ValueError, AttributeError):
        raise InvalidKeyFormat("Key is not valid base64") from None
    if len(raw) != KEY_SIZE:
        raise InvalidKeyFormat(f"Decoded key is {len(raw)} bytes, expected {KEY_SIZE}")
    return Key(raw)
