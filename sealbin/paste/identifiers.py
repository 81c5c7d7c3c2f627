"""Opaque base62 paste identifiers.

10 symbols from ``A-Z a-z 0-9`` gives 62**10 (about 8.4e17) ids.  The
default mapping is ``byte % 62``, which slightly favours the first
``256 % 62 == 8`` symbols.  Pass ``unbiased=True`` for rejection sampling.
Uniqueness is not guaranteed here; callers retry on store conflicts.
"""

from __future__ import annotations

import os
import re
import string

ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits
ID_LENGTH = 10

# Largest multiple of 62 that fits in a byte.
_REJECT_AT = 256 - (256 % len(ALPHABET))

_ID_RE = re.compile(rf"[A-Za-z0-9]{{{ID_LENGTH}}}")


def generate(unbiased: bool = False) -> str:
    """Return a fresh random identifier."""
    if not unbiased:
        return "".join(ALPHABET[b % len(ALPHABET)] for b in os.urandom(ID_LENGTH))

    chars: list[str] = []
    while len(chars) < ID_LENGTH:
        for b in os.urandom(ID_LENGTH - len(chars)):
            if b < _REJECT_AT:
                chars.append(ALPHABET[b % len(ALPHABET)])
    return "".join(chars)


def is_valid_id(value: str) -> bool:
    """True if *value* has the shape of a generated identifier."""
    return bool(_ID_RE.fullmatch(value or ""))
