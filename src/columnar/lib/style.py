"""Style appliers: turn a (text, style token) pair into displayable text."""

from __future__ import annotations

import re
from typing import Protocol

_SGR: dict[str, str] = {
    "reset": "\x1b[0m",
    # attributes
    "bold": "\x1b[1m",
    "dim": "\x1b[2m",
    "italic": "\x1b[3m",
    "underline": "\x1b[4m",
    "reverse": "\x1b[7m",
    "strike": "\x1b[9m",
    # foreground
    "black": "\x1b[30m",
    "red": "\x1b[31m",
    "green": "\x1b[32m",
    "yellow": "\x1b[33m",
    "blue": "\x1b[34m",
    "magenta": "\x1b[35m",
    "cyan": "\x1b[36m",
    "white": "\x1b[37m",
    "bright_black": "\x1b[90m",
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

# Aliases for face-like names commonly used in completion UIs.
_ALIASES: dict[str, str] = {
    "comment": "bright_black",
    "warning": "yellow",
    "error": "red",
    "success": "green",
    "keyword": "magenta",
    "constant": "cyan",
}

_SGR_RE = re.compile(r"\x1b\[[0-9;]*m")
_TOKEN_SPLIT_RE = re.compile(r"[\s+,]+")


class StyleApplier(Protocol):
    """Capability that attaches a style token to already-padded text."""

    def __call__(self, text: str, style: str) -> str: ...


def plain_style(text: str, style: str) -> str:
    """Ignore the style and return the text unchanged."""

    del style
    return text


def style_names(style: str) -> list[str]:
    """Split a style token like ``"red+bold"`` into known SGR names."""

    names: list[str] = []
    for raw in _TOKEN_SPLIT_RE.split(style.strip().lower()):
        if not raw:
            continue
        name = _ALIASES.get(raw, raw.replace("-", "_"))
        if name in _SGR and name != "reset":
            names.append(name)
    return names


def ansi_style(text: str, style: str) -> str:
    """Wrap text in ANSI SGR sequences; unknown style names are ignored."""

    sequence = "".join(_SGR[name] for name in style_names(style))
    if not sequence:
        return text
    return f"{sequence}{text}{_SGR['reset']}"


def strip_ansi(text: str) -> str:
    """Remove SGR escape sequences from text."""

    return _SGR_RE.sub("", text)


def known_styles() -> list[str]:
    return sorted(name for name in (*_SGR, *_ALIASES) if name != "reset")
