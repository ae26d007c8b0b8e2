"""Render a PlaybackRecord as indented JSON, colorized on color terminals.

Colors are applied while walking the value tree, so every token is wrapped
exactly once and removing the escape codes gives back the plain output.
"""
import json
import os
import re
import sys
from typing import Any, Callable, List, Mapping, Optional, TextIO

from spotifyquery.models.playback import PlaybackRecord

# ANSI color codes for JSON syntax highlighting
RESET = "\x1b[0m"
KEY = "\x1b[94m"  # bright blue, readable on dark terminals
STRING = "\x1b[32m"
NUMBER = "\x1b[36m"
BOOL = "\x1b[33m"
NULL = "\x1b[90m"
PUNCT = "\x1b[35m"

INDENT = "  "

_ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")

Paint = Callable[[str, str], str]


def _plain(token: str, color: str) -> str:
    return token


def _ansi(token: str, color: str) -> str:
    return f"{color}{token}{RESET}"


def strip_ansi(text: str) -> str:
    return _ANSI_RE.sub("", text)


def should_colorize(stream: TextIO, environ: Optional[Mapping[str, str]] = None) -> bool:
    """True when stream is a terminal and the environment says it handles color.

    NO_COLOR wins; otherwise COLORTERM, or a TERM mentioning color/256, or a
    plain xterm/screen TERM, enables color.
    """
    env = os.environ if environ is None else environ
    try:
        if not stream.isatty():
            return False
    except (AttributeError, ValueError):
        return False
    if env.get("NO_COLOR", ""):
        return False
    term = env.get("TERM", "")
    return bool(
        env.get("COLORTERM", "")
        or "color" in term
        or "256" in term
        or term in ("xterm", "screen")
    )


def _encode_string(value: str) -> str:
    # No HTML escaping; line/paragraph separators escaped for JS consumers
    out = json.dumps(value, ensure_ascii=False)
    return out.replace("\u2028", "\\u2028").replace("\u2029", "\\u2029")


def _write_value(value: Any, depth: int, paint: Paint, out: List[str]) -> None:
    if isinstance(value, dict):
        _write_container(list(value.items()), "{", "}", depth, paint, out)
    elif isinstance(value, (list, tuple)):
        _write_container(list(value), "[", "]", depth, paint, out)
    elif value is None:
        out.append(paint("null", NULL))
    elif isinstance(value, bool):
        out.append(paint("true" if value else "false", BOOL))
    elif isinstance(value, (int, float)):
        out.append(paint(json.dumps(value), NUMBER))
    else:
        out.append(paint(_encode_string(str(value)), STRING))


def _write_container(items: list, open_: str, close: str, depth: int, paint: Paint, out: List[str]) -> None:
    if not items:
        out.append(paint(open_, PUNCT) + paint(close, PUNCT))
        return
    inner = INDENT * (depth + 1)
    out.append(paint(open_, PUNCT))
    for i, item in enumerate(items):
        out.append("\n" + inner)
        if open_ == "{":
            key, item = item
            out.append(paint(_encode_string(str(key)), KEY) + ": ")
        _write_value(item, depth + 1, paint, out)
        if i < len(items) - 1:
            out.append(paint(",", PUNCT))
    out.append("\n" + INDENT * depth + paint(close, PUNCT))


def render_value(value: Any, color: bool = False) -> str:
    """Serialize a JSON-compatible value with two-space indent and a trailing newline."""
    out: List[str] = []
    _write_value(value, 0, _ansi if color else _plain, out)
    out.append("\n")
    return "".join(out)


def render_json(record: PlaybackRecord, color: bool = False) -> str:
    return render_value(record.to_json_dict(), color=color)


def emit(
    record: PlaybackRecord,
    stream: Optional[TextIO] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> None:
    """Write the record to stream (stdout by default)."""
    stream = stream or sys.stdout
    stream.write(render_json(record, color=should_colorize(stream, environ)))
    stream.flush()
