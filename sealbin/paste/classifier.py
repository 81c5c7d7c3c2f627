"""Heuristic content-language classifier.

A strictly ordered cascade of rules over the raw paste content.  The first
rule that matches decides the label; nothing matching yields ``plaintext``.
Order is load-bearing: ``{"a": 1}`` also looks like a CSS block, and is
``json`` only because the JSON rule runs first.

The cascade is data (:data:`RULES`) rather than control flow so each rule
can be inspected and tested on its own.
"""

from __future__ import annotations

import enum
import json
import re
from dataclasses import dataclass
from typing import Callable


class Language(str, enum.Enum):
    PLAINTEXT = "plaintext"
    JSON = "json"
    MARKDOWN = "markdown"
    YAML = "yaml"
    DOCKERFILE = "dockerfile"
    BASH = "bash"
    POWERSHELL = "powershell"
    PYTHON = "python"
    TSX = "tsx"
    TYPESCRIPT = "typescript"
    JSX = "jsx"
    JAVASCRIPT = "javascript"
    SQL = "sql"
    HTML = "html"
    XML = "xml"
    JAVA = "java"
    CSHARP = "csharp"
    GO = "go"
    RUST = "rust"
    RUBY = "ruby"
    PHP = "php"
    SWIFT = "swift"
    KOTLIN = "kotlin"
    C = "c"
    CPP = "cpp"
    CSS = "css"
    SCSS = "scss"


def _re(pattern: str, flags: int = 0) -> re.Pattern[str]:
    return re.compile(pattern, flags | re.ASCII)


# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------
# Anchored patterns without re.M run against the start of the *trimmed*
# content; the rest run against the raw content.

_MD_HEADING = _re(r"^#{1,6}\s")
_MD_LINK = _re(r"\[.+\]\(.+\)")
_MARKUP_TAG = _re(r"<\w+")
_MD_BULLET = _re(r"^[-*+]\s")
_MD_NUMBERED = _re(r"^\d+\.\s")

_YAML_LINE = _re(r"^---\s*$|^[\w-]+:\s*.+$", re.M)

_DOCKER_FROM = _re(r"^FROM\s+\w+", re.I | re.M)
_DOCKER_VERB = _re(r"^RUN\s+|^CMD\s+|^COPY\s+|^ADD\s+", re.I | re.M)

_SHELL_SHEBANG = _re(r"^#!/bin/(bash|sh)")
_SHELL_KEYWORDS = _re(r"\b(echo|export|source|alias)\b")
_JS_DECLARATION = _re(r"\bconst\b|\blet\b|\bvar\b")
_PS_SYNTAX = _re(r"\$(env:|PSModulePath)|\[cmdletbinding\(\)\]", re.I)
_PS_STANDALONE = _re(r"\$(env:|PSModulePath)|\[cmdletbinding\(\)\]|Param\s*\(", re.I)

_PY_KEYWORDS = _re(r"\b(def|class|import|from|if __name__|print|lambda|yield|async def)\b")
_C_FAMILY_DECLARATION = _re(r"\bfunction\b|\bconst\b|\blet\b|\bvar\b")

_JSX_ELEMENT = (
    _re(r"<[A-Z]\w*"),
    _re(r"return\s*\(?\s*<"),
    _re(r"</\w+>"),
)
_TS_SYNTAX = (
    _re(r"\b(interface|type|enum)\s+\w+"),
    _re(r":\s*(string|number|boolean|any|void|unknown|React\.|JSX\.)"),
    _re(r"<.*>\s*\("),
    _re(r"as\s+(const|string|number|any)"),
)
_JSX_IDIOM = _re(r"""\b(import.*from ['"]react|export (default )?function|const \w+ = \(\)?\s*=>)""")

_JS_KEYWORDS = _re(r"\b(function|const|let|var|=>|import|export|require)\b")
_JS_CONSOLE = _re(r"console\.(log|error|warn)")

_SQL_KEYWORDS = _re(r"\b(SELECT|INSERT|UPDATE|DELETE|CREATE|DROP|ALTER|FROM|WHERE|JOIN)\b", re.I)

_HTML_TAGS = _re(r"<html|<!DOCTYPE html|<head|<body", re.I)
_XML_PROLOG = _re(r"^<\?xml")

_JAVA_KEYWORDS = _re(r"\b(public|private|protected|class|interface|extends|implements)\b")
_JAVA_CLASS = _re(r"\bclass\s+\w+")

_CSHARP_KEYWORDS = _re(r"\b(namespace|using|public|private|class|interface)\b")
_CSHARP_USING_SYSTEM = _re(r"using\s+System")

_GO_PACKAGE = _re(r"^package\s+\w+")
_GO_FUNC = _re(r"\bfunc\s+\w+\s*\(")
_GO_IMPORT_BLOCK = _re(r"import\s*\([\s\S]*\)")

_RUST_KEYWORDS = _re(r"\b(fn|let|mut|impl|trait|struct|enum|pub|use)\b")
_RUST_FN = _re(r"fn\s+\w+")

_RUBY_KEYWORDS = _re(r"\b(def|end|class|module|require|puts|attr_accessor)\b")
_ANY_SHEBANG = _re(r"^#!")
_RUBY_WORD = _re(r"ruby")

_PHP_OPEN = _re(r"^<\?php|<\?=")
_PHP_ASSIGN = _re(r"\$\w+\s*=")

_SWIFT_KEYWORDS = _re(r"\b(func|var|let|class|struct|enum|import|protocol)\b")
_SWIFT_IMPORT = _re(r"import\s+Foundation|import\s+UIKit")

_KOTLIN_KEYWORDS = _re(r"\b(fun|val|var|class|object|interface|package)\b")
_KOTLIN_FUN = _re(r"fun\s+\w+")

_C_KEYWORDS = _re(r"\b(int|char|float|double|void|struct|printf|scanf|#include)\b")
_C_INCLUDE = _re(r"#include\s*<[\w.]+>")

_CPP_KEYWORDS = _re(r"\b(class|namespace|template|std::|cout|cin|#include)\b")
_CPP_IOSTREAM = _re(r"#include\s*<iostream>")

_CSS_BLOCK = _re(r"[\w-]+\s*\{[\s\S]*\}")
_CSS_DECLARATION = _re(r":\s*[^;]+;")
_SCSS_SIGILS = _re(r"\$[\w-]+:|@mixin|@include|@extend")


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------
# Each matcher receives (content, trimmed) and returns a label or None.

Matcher = Callable[[str, str], Language | None]


def _reject_constant(value: str) -> None:
    raise ValueError(f"non-standard JSON constant {value}")


def _match_json(content: str, trimmed: str) -> Language | None:
    if trimmed[:1] not in ("{", "[") or trimmed[-1:] not in ("}", "]"):
        return None
    try:
        json.loads(trimmed, parse_constant=_reject_constant)
    except ValueError:
        return None
    return Language.JSON


def _match_markdown(content: str, trimmed: str) -> Language | None:
    if (
        _MD_HEADING.search(trimmed)
        or (_MD_LINK.search(content) and not _MARKUP_TAG.search(content))
        or _MD_BULLET.search(trimmed)
        or _MD_NUMBERED.search(trimmed)
    ):
        return Language.MARKDOWN
    return None


def _match_yaml(content: str, trimmed: str) -> Language | None:
    if _YAML_LINE.search(content) and "{" not in content and ";" not in content:
        return Language.YAML
    return None


def _match_dockerfile(content: str, trimmed: str) -> Language | None:
    if _DOCKER_FROM.search(content) or _DOCKER_VERB.search(content):
        return Language.DOCKERFILE
    return None


def _match_shell(content: str, trimmed: str) -> Language | None:
    if _SHELL_SHEBANG.search(trimmed) or (
        _SHELL_KEYWORDS.search(content) and not _JS_DECLARATION.search(content)
    ):
        if _PS_SYNTAX.search(content):
            return Language.POWERSHELL
        return Language.BASH
    return None


def _match_powershell(content: str, trimmed: str) -> Language | None:
    if _PS_STANDALONE.search(content):
        return Language.POWERSHELL
    return None


def _match_python(content: str, trimmed: str) -> Language | None:
    if _PY_KEYWORDS.search(content) and not _C_FAMILY_DECLARATION.search(content):
        return Language.PYTHON
    return None


def _has_jsx_elements(content: str) -> bool:
    return any(p.search(content) for p in _JSX_ELEMENT)


def _has_typescript(content: str) -> bool:
    return any(p.search(content) for p in _TS_SYNTAX)


def _match_typescript(content: str, trimmed: str) -> Language | None:
    if not _has_typescript(content):
        return None
    if _has_jsx_elements(content):
        return Language.TSX
    return Language.TYPESCRIPT


def _match_jsx(content: str, trimmed: str) -> Language | None:
    if _has_jsx_elements(content) and _JSX_IDIOM.search(content):
        return Language.JSX
    return None


def _match_javascript(content: str, trimmed: str) -> Language | None:
    if _JS_KEYWORDS.search(content) or _JS_CONSOLE.search(content):
        return Language.JAVASCRIPT
    return None


def _all_of(label: Language, *patterns: re.Pattern[str]) -> Matcher:
    def matcher(content: str, trimmed: str) -> Language | None:
        return label if all(p.search(content) for p in patterns) else None
    return matcher


def _any_of(label: Language, *patterns: re.Pattern[str], on_trimmed: bool = False) -> Matcher:
    def matcher(content: str, trimmed: str) -> Language | None:
        text = trimmed if on_trimmed else content
        return label if any(p.search(text) for p in patterns) else None
    return matcher


def _match_go(content: str, trimmed: str) -> Language | None:
    if (
        _GO_PACKAGE.search(trimmed)
        or _GO_FUNC.search(content)
        or _GO_IMPORT_BLOCK.search(content)
    ):
        return Language.GO
    return None


def _match_ruby(content: str, trimmed: str) -> Language | None:
    if _RUBY_KEYWORDS.search(content) or (
        _ANY_SHEBANG.search(trimmed) and _RUBY_WORD.search(trimmed)
    ):
        return Language.RUBY
    return None


def _match_php(content: str, trimmed: str) -> Language | None:
    if _PHP_OPEN.search(trimmed) or _PHP_ASSIGN.search(content):
        return Language.PHP
    return None


def _match_cpp(content: str, trimmed: str) -> Language | None:
    if _CPP_KEYWORDS.search(content) or _CPP_IOSTREAM.search(content):
        return Language.CPP
    return None


def _match_css(content: str, trimmed: str) -> Language | None:
    if _CSS_BLOCK.search(content) and _CSS_DECLARATION.search(content):
        if _SCSS_SIGILS.search(content):
            return Language.SCSS
        return Language.CSS
    return None


@dataclass(frozen=True)
class Rule:
    """One step of the cascade."""

    name: str
    labels: tuple[Language, ...]
    match: Matcher


RULES: list[Rule] = [
    Rule("json", (Language.JSON,), _match_json),
    Rule("markdown", (Language.MARKDOWN,), _match_markdown),
    Rule("yaml", (Language.YAML,), _match_yaml),
    Rule("dockerfile", (Language.DOCKERFILE,), _match_dockerfile),
    Rule("shell", (Language.BASH, Language.POWERSHELL), _match_shell),
    Rule("powershell", (Language.POWERSHELL,), _match_powershell),
    Rule("python", (Language.PYTHON,), _match_python),
    Rule("typescript", (Language.TSX, Language.TYPESCRIPT), _match_typescript),
    Rule("jsx", (Language.JSX,), _match_jsx),
    Rule("javascript", (Language.JAVASCRIPT,), _match_javascript),
    Rule("sql", (Language.SQL,), _any_of(Language.SQL, _SQL_KEYWORDS)),
    Rule("html", (Language.HTML,), _any_of(Language.HTML, _HTML_TAGS)),
    Rule("xml", (Language.XML,), _any_of(Language.XML, _XML_PROLOG, on_trimmed=True)),
    Rule("java", (Language.JAVA,), _all_of(Language.JAVA, _JAVA_KEYWORDS, _JAVA_CLASS)),
    Rule("csharp", (Language.CSHARP,), _all_of(Language.CSHARP, _CSHARP_KEYWORDS, _CSHARP_USING_SYSTEM)),
    Rule("go", (Language.GO,), _match_go),
    Rule("rust", (Language.RUST,), _all_of(Language.RUST, _RUST_KEYWORDS, _RUST_FN)),
    Rule("ruby", (Language.RUBY,), _match_ruby),
    Rule("php", (Language.PHP,), _match_php),
    Rule("swift", (Language.SWIFT,), _all_of(Language.SWIFT, _SWIFT_KEYWORDS, _SWIFT_IMPORT)),
    Rule("kotlin", (Language.KOTLIN,), _all_of(Language.KOTLIN, _KOTLIN_KEYWORDS, _KOTLIN_FUN)),
    Rule("c", (Language.C,), _all_of(Language.C, _C_KEYWORDS, _C_INCLUDE)),
    Rule("cpp", (Language.CPP,), _match_cpp),
    Rule("css", (Language.CSS, Language.SCSS), _match_css),
]


def detect_language(content: str) -> Language:
    """Classify *content*; deterministic for identical input."""
    trimmed = content.strip()
    if not trimmed:
        return Language.PLAINTEXT
    for rule in RULES:
        label = rule.match(content, trimmed)
        if label is not None:
            return label
    return Language.PLAINTEXT


def explain(content: str) -> str | None:
    """Name of the rule that decided *content*, or None for the fallback."""
    trimmed = content.strip()
    if not trimmed:
        return None
    for rule in RULES:
        if rule.match(content, trimmed) is not None:
            return rule.name
    return None
