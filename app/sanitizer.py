from __future__ import annotations

import re
from typing import Any

# Secrets are passed through untouched.
RAW_KEYS = frozenset({"secret", "password"})

_SCRIPT_BLOCK_RE = re.compile(r"<(script|style)\b[^>]*>.*?</\1\s*>", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"<[^>]*>")
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b-\x1f\x7f]")


def sanitize_text(text: str, max_length: int | None = None) -> str:
    """Strip markup and control characters and trim.

    ``max_length`` caps the result only when given. Payloads headed for
    validation are never capped, so over-long values still fail their
    field's length rule instead of being cut silently.
    """
    cleaned = text
    # Removing one tag can join the halves of another, so repeat until stable.
    while True:
        stripped = _TAG_RE.sub("", _SCRIPT_BLOCK_RE.sub("", cleaned))
        if stripped == cleaned:
            break
        cleaned = stripped
    cleaned = _CONTROL_RE.sub("", cleaned).strip()
    if max_length is not None:
        cleaned = cleaned[:max_length].rstrip()
    return cleaned


def sanitize_payload(value: Any) -> Any:
    if isinstance(value, str):
        return sanitize_text(value)
    if isinstance(value, dict):
        return {key: item if key in RAW_KEYS else sanitize_payload(item) for key, item in value.items()}
    if isinstance(value, list):
        return [sanitize_payload(item) for item in value]
    if isinstance(value, tuple):
        return tuple(sanitize_payload(item) for item in value)
    return value
