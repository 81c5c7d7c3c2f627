"""Paste lifecycle: identifiers, expiry, classification, orchestration."""

from sealbin.paste.classifier import RULES, Language, Rule, detect_language
from sealbin.paste.expiration import (
    EXPIRATION_OPTIONS,
    ExpirationState,
    calculate_custom_expiration,
    calculate_expiration_date,
    expiration_state,
    format_expiration_time,
    is_expired,
)
from sealbin.paste.formatter import format_code
from sealbin.paste.identifiers import generate as generate_id
from sealbin.paste.identifiers import is_valid_id
from sealbin.paste.links import build_share_url, parse_share_url
from sealbin.paste.reaper import ExpiredPasteReaper
from sealbin.paste.service import (
    CreatedPaste,
    OpenedPaste,
    OutcomeStatus,
    PasteOutcome,
    PasteService,
)

__all__ = [
    # classifier
    "Language",
    "RULES",
    "Rule",
    "detect_language",
    # expiration
    "EXPIRATION_OPTIONS",
    "ExpirationState",
    "calculate_custom_expiration",
    "calculate_expiration_date",
    "expiration_state",
    "format_expiration_time",
    "is_expired",
    # formatting / ids / links
    "format_code",
    "generate_id",
    "is_valid_id",
    "build_share_url",
    "parse_share_url",
    # orchestration
    "CreatedPaste",
    "ExpiredPasteReaper",
    "OpenedPaste",
    "OutcomeStatus",
    "PasteOutcome",
    "PasteService",
]
