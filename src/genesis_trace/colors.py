"""ANSI color registry and width helpers.

Every layout routine measures text through :func:`visible_width`, which strips
escape sequences first so colored text never shifts column alignment.
"""

from __future__ import annotations

import re

from rich.cells import cell_len

# =============================================================================
# ANSI escape codes (direct terminal output)
# =============================================================================

RESET = "\x1b[0m"

CODES: dict[str, str] = {
    "reset": RESET,
    "bright": "\x1b[1m",
    "dim": "\x1b[2m",
    "underscore": "\x1b[4m",
    "blink": "\x1b[5m",
    "reverse": "\x1b[7m",
    "hidden": "\x1b[8m",
    "strikethrough": "\x1b[9m",
    # standard foreground
    "black": "\x1b[30m",
    "red": "\x1b[31m",
    "green": "\x1b[32m",
    "yellow": "\x1b[33m",
    "blue": "\x1b[34m",
    "magenta": "\x1b[35m",
    "cyan": "\x1b[36m",
    "white": "\x1b[37m",
    "gray": "\x1b[90m",
    # bright foreground
    "bright_red": "\x1b[91m",
    "bright_green": "\x1b[92m",
    "bright_yellow": "\x1b[93m",
    "bright_blue": "\x1b[94m",
    "bright_magenta": "\x1b[95m",
    "bright_cyan": "\x1b[96m",
    "bright_white": "\x1b[97m",
    # background
    "bg_black": "\x1b[40m",
    "bg_red": "\x1b[41m",
    "bg_green": "\x1b[42m",
    "bg_yellow": "\x1b[43m",
    "bg_blue": "\x1b[44m",
    "bg_magenta": "\x1b[45m",
    "bg_cyan": "\x1b[46m",
    "bg_white": "\x1b[47m",
}

_ANSI_RE = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")
_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})$")


def code(name: str) -> str:
    """Look up a named code, accepting raw escape sequences unchanged."""
    if name.startswith("\x1b"):
        return name
    try:
        return CODES[name]
    except KeyError:
        raise KeyError(f"Unknown color name: {name!r}") from None


def colorize(text: str, color: str | None, enabled: bool = True) -> str:
    """Wrap text with a color code and a trailing reset."""
    if not enabled or not color or not text:
        return text
    return f"{code(color)}{text}{RESET}"


def strip(text: str) -> str:
    """Remove ANSI escape sequences."""
    return _ANSI_RE.sub("", text)


def visible_width(text: str) -> int:
    """Terminal column count of text once escape codes are removed."""
    return cell_len(strip(text))


def color256(index: int) -> str:
    return f"\x1b[38;5;{index}m"


def rgb(r: int, g: int, b: int) -> str:
    """24-bit foreground code."""
    return f"\x1b[38;2;{r};{g};{b}m"


def hex_color(value: str) -> str:
    """24-bit foreground code from ``#rrggbb``; empty string when malformed."""
    match = _HEX_RE.match(value)
    if not match:
        return ""
    r, g, b = (int(part, 16) for part in match.groups())
    return rgb(r, g, b)


def gradient(
    text: str,
    start: tuple[int, int, int],
    end: tuple[int, int, int],
) -> str:
    """Color each character along a linear RGB ramp."""
    if not text:
        return text
    steps = max(len(text) - 1, 1)
    parts: list[str] = []
    for index, char in enumerate(text):
        ratio = index / steps
        channel = [round(s + (e - s) * ratio) for s, e in zip(start, end)]
        parts.append(rgb(*channel) + char)
    return "".join(parts) + RESET
