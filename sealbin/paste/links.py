"""Share-link contract.

The path carries the paste id; the fragment carries the base64 key.  The
fragment is never sent to a server, so the key stays with whoever holds
the link.
"""

from __future__ import annotations

from urllib.parse import urlsplit

from sealbin.errors import MissingKeyFragment, ValidationError

PASTE_PATH_PREFIX = "/paste/"


def build_share_url(base_url: str, paste_id: str, exported_key: str) -> str:
    """Return ``<base>/paste/<id>#<key>``."""
    return f"{base_url.rstrip('/')}{PASTE_PATH_PREFIX}{paste_id}#{exported_key}"


def parse_share_url(url: str) -> tuple[str, str]:
    """Extract ``(paste_id, exported_key)`` from a share link.

    Raises:
        MissingKeyFragment: the link has no (or an empty) fragment.
        ValidationError: the path does not point at a paste.
    """
    parts = urlsplit(url)
    path = parts.path
    idx = path.find(PASTE_PATH_PREFIX)
    paste_id = path[idx + len(PASTE_PATH_PREFIX):].strip("/") if idx >= 0 else ""
    if not paste_id or "/" in paste_id:
        raise ValidationError(f"Not a paste link: {url!r}")
    if not parts.fragment:
        raise MissingKeyFragment()
    return paste_id, parts.fragment
