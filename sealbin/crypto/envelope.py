"""AES-256-GCM encryption and the ``iv:ciphertext`` wire format.

Every call to :func:`encrypt` draws a new 12-byte IV from the OS CSPRNG;
an IV is never reused under the same key.  Decryption fails closed with a
single :class:`~sealbin.errors.DecryptionFailure` regardless of cause.
"""

from __future__ import annotations

import base64
import binascii
import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from sealbin.crypto.keys import Key
from sealbin.errors import DecryptionFailure, MalformedEnvelope

NONCE_SIZE = 12  # AES-GCM standard
TAG_SIZE = 16
SEPARATOR = ":"


# ---------------------------------------------------------------------------
# AEAD
# ---------------------------------------------------------------------------

def encrypt(plaintext: str | bytes, key: Key) -> tuple[bytes, bytes]:
    """Encrypt *plaintext* under *key*.

    Returns:
        ``(ciphertext, iv)`` where ciphertext carries the 16-byte tag.
    """
    data = plaintext.encode("utf-8") if isinstance(plaintext, str) else plaintext
    iv = os.urandom(NONCE_SIZE)
    ciphertext = AESGCM(key.raw).encrypt(iv, data, None)
    return ciphertext, iv


def decrypt_bytes(ciphertext: bytes, iv: bytes, key: Key) -> bytes:
    """Authenticate and decrypt, returning raw bytes."""
    if len(iv) != NONCE_SIZE or len(ciphertext) < TAG_SIZE:
        raise DecryptionFailure()
    try:
        return AESGCM(key.raw).decrypt(iv, ciphertext, None)
    except InvalidTag:
        raise DecryptionFailure() from None


def decrypt(ciphertext: bytes, iv: bytes, key: Key) -> str:
    """Authenticate and decrypt UTF-8 text.

    Raises:
        DecryptionFailure: on any authentication or decoding failure.
    """
    data = decrypt_bytes(ciphertext, iv, key)
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        raise DecryptionFailure() from None


# ---------------------------------------------------------------------------
# Wire format
# ---------------------------------------------------------------------------

def combine(iv: bytes, ciphertext: bytes) -> str:
    """Produce ``"<b64 iv>:<b64 ciphertext>"``."""
    return (
        base64.b64encode(iv).decode("ascii")
        + SEPARATOR
        + base64.b64encode(ciphertext).decode("ascii")
    )


def split(envelope: str) -> tuple[bytes, bytes]:
    """Inverse of :func:`combine`.

    Raises:
        MalformedEnvelope: separator absent, repeated, a side empty, or a
            side not valid base64.
    """
    if not isinstance(envelope, str) or envelope.count(SEPARATOR) != 1:
        raise MalformedEnvelope("Invalid encrypted data format")
    iv_b64, ct_b64 = envelope.split(SEPARATOR)
    if not iv_b64 or not ct_b64:
        raise MalformedEnvelope("Invalid encrypted data format")
    try:
        iv = base64.b64decode(iv_b64, validate=True)
        ciphertext = base64.b64decode(ct_b64, validate=True)
    except (binascii.Error, ValueError):
        raise MalformedEnvelope("Envelope fields are not valid base64") from None
    return iv, ciphertext


def seal(plaintext: str | bytes, key: Key) -> str:
    """Encrypt and wire-encode in one step."""
    ciphertext, iv = encrypt(plaintext, key)
    return combine(iv, ciphertext)


def open_envelope(envelope: str, key: Key) -> str:
    """Split and decrypt a wire envelope."""
    iv, ciphertext = split(envelope)
    return decrypt(ciphertext, iv, key)
