"""Client-side envelope cryptography."""

from sealbin.crypto.envelope import (
    NONCE_SIZE,
    TAG_SIZE,
    combine,
    decrypt,
    decrypt_bytes,
    encrypt,
    open_envelope,
    seal,
    split,
)
from sealbin.crypto.keys import KEY_SIZE, Key, export_key, generate, import_key

__all__ = [
    "KEY_SIZE",
    "NONCE_SIZE",
    "TAG_SIZE",
    "Key",
    "combine",
    "decrypt",
    "decrypt_bytes",
    "encrypt",
    "export_key",
    "generate",
    "import_key",
    "open_envelope",
    "seal",
    "split",
]
