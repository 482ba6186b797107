"""Stateless value-to-string helpers shared by the logger and the renderers."""

from __future__ import annotations

import math
import re
from datetime import UTC, datetime
from typing import Literal

from rich.cells import set_cell_size

from .colors import strip, visible_width

Align = Literal["left", "center", "right"]

ELLIPSIS = "…"

_CURRENCY_SYMBOLS = {"USD": "$", "MXN": "$", "CAD": "$", "EUR": "€", "GBP": "£", "JPY": "¥"}
_TIMESTAMP_TOKEN_RE = re.compile(r"YYYY|SSS|MM|DD|HH|mm|ss")
_BYTE_UNITS = ("B", "KB", "MB", "GB", "TB", "PB")


def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative values (``round`` is banker's)."""
    return math.floor(value + 0.5)


def currency(amount: float, code: str = "USD", decimals: int | None = None) -> str:
    """Format an amount as ``$1,234.56`` style money."""
    symbol = _CURRENCY_SYMBOLS.get(code.upper(), f"{code.upper()} ")
    places = decimals if decimals is not None else (0 if code.upper() == "JPY" else 2)
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.{places}f}"


def number(value: float, decimals: int | None = None) -> str:
    """Thousands-separated number; floats default to two decimals."""
    if decimals is None:
        if isinstance(value, int) or float(value).is_integer():
            return f"{int(value):,}"
        decimals = 2
    return f"{value:,.{decimals}f}"


def percentage(ratio: float, decimals: int = 1) -> str:
    """Format a 0..1 ratio as a percentage string."""
    return f"{ratio * 100:.{decimals}f}%"


def duration(milliseconds: float) -> str:
    """Human duration from milliseconds: ``850ms``, ``12.3s``, ``2m 5s``, ``1h 4m``."""
    ms = max(0.0, float(milliseconds))
    if ms < 1000:
        return f"{int(ms)}ms"
    seconds = ms / 1000
    if seconds < 60:
        return f"{seconds:.1f}s"
    total = int(seconds)
    days, rem = divmod(total, 86_400)
    hours, rem = divmod(rem, 3_600)
    minutes, secs = divmod(rem, 60)
    if days:
        return f"{days}d {hours}h"
    if hours:
        return f"{hours}h {minutes}m"
    return f"{minutes}m {secs}s"


def byte_size(size: float) -> str:
    """Binary byte size: ``512 B``, ``2.4 GB``."""
    value = float(size)
    for unit in _BYTE_UNITS:
        if abs(value) < 1024 or unit == _BYTE_UNITS[-1]:
            if unit == "B":
                return f"{int(value)} B"
            return f"{value:.1f} {unit}"
        value /= 1024
    raise AssertionError("unreachable")


def timestamp(value: datetime | None = None, pattern: str = "HH:mm:ss") -> str:
    """Render a datetime with ``YYYY MM DD HH mm ss SSS`` tokens or ``"iso"``."""
    moment = value or datetime.now(UTC)
    if pattern == "iso":
        return moment.isoformat()
    tokens = {
        "YYYY": f"{moment.year:04d}",
        "MM": f"{moment.month:02d}",
        "DD": f"{moment.day:02d}",
        "HH": f"{moment.hour:02d}",
        "mm": f"{moment.minute:02d}",
        "ss": f"{moment.second:02d}",
        "SSS": f"{moment.microsecond // 1000:03d}",
    }
    return _TIMESTAMP_TOKEN_RE.sub(lambda match: tokens[match.group(0)], pattern)


def relative_time(value: datetime, now: datetime | None = None) -> str:
    """Describe a moment relative to now: ``just now``, ``5m ago``, ``in 2h``."""
    reference = now or datetime.now(UTC)
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    if reference.tzinfo is None:
        reference = reference.replace(tzinfo=UTC)
    delta = (reference - value).total_seconds()
    magnitude = abs(delta)
    if magnitude < 5:
        return "just now"
    for limit, divisor, suffix in (
        (60, 1, "s"),
        (3_600, 60, "m"),
        (86_400, 3_600, "h"),
        (float("inf"), 86_400, "d"),
    ):
        if magnitude < limit:
            amount = int(magnitude // divisor)
            break
    return f"{amount}{suffix} ago" if delta > 0 else f"in {amount}{suffix}"


def truncate(text: str, width: int, marker: str = ELLIPSIS) -> str:
    """Cut text to ``width`` visible columns, ending with ``marker`` when cut.

    Text that already fits is returned untouched, color codes included; text
    that must be cut loses its color codes.
    """
    if width <= 0:
        return ""
    if visible_width(text) <= width:
        return text
    marker_width = visible_width(marker)
    if width <= marker_width:
        return set_cell_size(marker, width)
    return set_cell_size(strip(text), width - marker_width) + marker


def pad(text: str, width: int, align: Align = "left") -> str:
    """Pad to ``width`` visible columns without truncating."""
    gap = width - visible_width(text)
    if gap <= 0:
        return text
    if align == "right":
        return " " * gap + text
    if align == "center":
        left = gap // 2
        return " " * left + text + " " * (gap - left)
    return text + " " * gap


def fit(text: str, width: int, align: Align = "left") -> str:
    """Truncate then pad, so the result is exactly ``width`` columns wide."""
    return pad(truncate(text, width), width, align)


def wrap(text: str, width: int) -> list[str]:
    """Greedy word wrap on visible width; over-long words are split."""
    width = max(1, width)
    lines: list[str] = []
    for paragraph in strip(text).split("\n"):
        current = ""
        for word in paragraph.split():
            while visible_width(word) > width:
                if current:
                    lines.append(current)
                    current = ""
                head = set_cell_size(word, width)
                lines.append(head)
                word = word[len(head):]
            if not word:
                continue
            candidate = f"{current} {word}" if current else word
            if visible_width(candidate) <= width:
                current = candidate
            else:
                lines.append(current)
                current = word
        lines.append(current)
    return lines
