"""Redaction of credentials before entries leave the process through a sink."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

REDACTED = "[REDACTED]"

_SENSITIVE_KEY_RE = re.compile(
    r"(authorization|token|secret|password|passwd|signature|private[_-]?key|"
    r"bearer|api[_-]?key|webhook)",
    re.IGNORECASE,
)
_BEARER_INLINE_RE = re.compile(r"(?i)\b(bearer)\s+[A-Za-z0-9\-._~+/]+=*")
_KEY_VALUE_SECRET_RE = re.compile(
    r"""(?ix)
    \b
    (authorization|token|secret|password|signature|private[_-]?key|api[_-]?key)
    \s*[:=]\s*
    ([^\s,;]+)
    """
)
_WEBHOOK_URL_RE = re.compile(r"https://hooks\.slack\.com/services/[A-Za-z0-9/_-]+")


def sanitize_text(text: str) -> str:
    """Redact credentials embedded in free text."""
    sanitized = _WEBHOOK_URL_RE.sub("https://hooks.slack.com/services/" + REDACTED, text)
    sanitized = _BEARER_INLINE_RE.sub(r"\1 " + REDACTED, sanitized)
    return _KEY_VALUE_SECRET_RE.sub(lambda m: f"{m.group(1)}={REDACTED}", sanitized)


def sanitize_metadata(value: Any) -> Any:
    """Recursively redact sensitive keys and inline secrets in metadata."""
    if isinstance(value, Mapping):
        return {
            key: REDACTED if _SENSITIVE_KEY_RE.search(str(key)) else sanitize_metadata(child)
            for key, child in value.items()
        }
    if isinstance(value, list):
        return [sanitize_metadata(item) for item in value]
    if isinstance(value, tuple):
        return tuple(sanitize_metadata(item) for item in value)
    if isinstance(value, str):
        return sanitize_text(value)
    return value
