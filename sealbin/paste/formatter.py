"""Basic indentation-only code formatter.

JSON is re-serialised with two-space indentation.  Everything else gets a
bracket-depth re-indent: lines opening with a closing bracket dedent, lines
ending with an opening bracket indent the following lines.  Formatting never
fails; on error the content is returned unchanged.
"""

from __future__ import annotations

import json
import logging

from sealbin.paste.classifier import Language

logger = logging.getLogger(__name__)

INDENT_SIZE = 2
_OPENERS = ("{", "[", "(")
_CLOSERS = ("}", "]", ")")


def format_code(content: str, language: Language | str) -> str:
    if not content.strip():
        return content

    if language == Language.JSON:
        try:
            return json.dumps(json.loads(content), indent=INDENT_SIZE, ensure_ascii=False)
        except ValueError:
            logger.debug("JSON formatting failed; returning content unchanged")
            return content

    depth = 0
    out: list[str] = []
    for line in content.split("\n"):
        stripped = line.strip()
        if stripped.startswith(_CLOSERS):
            depth = max(0, depth - 1)
        out.append(" " * (depth * INDENT_SIZE) + stripped)
        if stripped.endswith(_OPENERS):
            depth += 1
    return "\n".join(out)
