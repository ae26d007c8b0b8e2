"""Map raw collector fields onto a PlaybackRecord."""
import logging
import math
import re
import time
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

from spotifyquery.core.share_url import spotify_share_url
from spotifyquery.models.playback import (
    STATE_NOT_RUNNING,
    STATE_PAUSED,
    STATE_PLAYING,
    STATE_STOPPED,
    STATE_UNKNOWN,
    PlaybackRecord,
)

logger = logging.getLogger(__name__)

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

# State -> playing; any other state falls back to the raw "playing" key
_PLAYING_BY_STATE = {
    STATE_NOT_RUNNING: False,
    STATE_STOPPED: False,
    STATE_PAUSED: False,
    STATE_PLAYING: True,
}

# record field -> raw key
_STRING_FIELDS = {
    "name": "name",
    "artist": "artist",
    "album": "album",
    "album_artist": "album_artist",
    "id": "id",
    "artwork_url": "artwork_url",
}
_INT_FIELDS = {
    "sound_volume": "sound_volume",
    "duration_ms": "duration",
    "track_number": "track_number",
    "disc_number": "disc_number",
    "popularity": "popularity",
}
_BOOL_FIELDS = {
    "shuffling": "shuffling",
    "shuffling_enabled": "shuffling_enabled",
    "repeating": "repeating",
}


def format_rfc3339_nano(ns: int) -> str:
    """UTC timestamp with up to nine fractional digits, trailing zeros trimmed."""
    secs, frac = divmod(ns, 1_000_000_000)
    out = datetime.fromtimestamp(secs, timezone.utc).strftime("%Y-%m-%dT%H:%M:%S")
    if frac:
        out += "." + f"{frac:09d}".rstrip("0")
    return out + "Z"


def now_rfc3339_nano() -> str:
    return format_rfc3339_nano(time.time_ns())


def _text(fields: Mapping[str, str], key: str) -> Optional[str]:
    value = fields.get(key, "").strip()
    return value or None


def _parse_int(value: str) -> Optional[int]:
    if not _INT_RE.fullmatch(value):
        return None
    n = int(value)
    if n < INT64_MIN or n > INT64_MAX:
        return None
    return n


def _parse_position_ms(value: str) -> Optional[int]:
    """Fractional seconds -> whole milliseconds, truncated toward zero."""
    if not _FLOAT_RE.fullmatch(value):
        return None
    ms = float(value) * 1000.0
    if not math.isfinite(ms):
        return None
    n = int(ms)
    if n < INT64_MIN or n > INT64_MAX:
        return None
    return n


def _derive_playing(state: str, fields: Mapping[str, str]) -> bool:
    if state in _PLAYING_BY_STATE:
        return _PLAYING_BY_STATE[state]
    return fields.get("playing", "").strip() == "true"


def normalize_fields(fields: Mapping[str, str], collected_at: Optional[str] = None) -> PlaybackRecord:
    """Build a PlaybackRecord from parsed collector output.

    Optional values are set only when their key is present and non-blank;
    numbers that fail to parse are dropped rather than reported.
    """
    state = _text(fields, "state") or STATE_UNKNOWN
    values: Dict[str, Any] = {
        "playing": _derive_playing(state, fields),
        "state": state,
        "collected_at": collected_at or now_rfc3339_nano(),
        "error": _text(fields, "error"),
    }

    for attr, key in _STRING_FIELDS.items():
        values[attr] = _text(fields, key)

    for attr, key in _INT_FIELDS.items():
        raw = _text(fields, key)
        if raw is None:
            continue
        values[attr] = _parse_int(raw)
        if values[attr] is None:
            logger.debug("Dropping %s: not an integer: %r", attr, raw)

    for attr, key in _BOOL_FIELDS.items():
        raw = _text(fields, key)
        if raw is not None:
            values[attr] = raw == "true"

    # starred compares case-insensitively, unlike the other flags
    raw = _text(fields, "starred")
    if raw is not None:
        values["starred"] = raw.casefold() == "true"

    raw = _text(fields, "player_position")
    if raw is not None:
        values["player_position_ms"] = _parse_position_ms(raw)
        if values["player_position_ms"] is None:
            logger.debug("Dropping player_position: not a number: %r", raw)

    if values["id"] is not None:
        values["share_url"] = spotify_share_url(values["id"])

    return PlaybackRecord(**values)


def failure_record(error: str, collected_at: Optional[str] = None) -> PlaybackRecord:
    """Record for a collection that produced nothing: only collected_at and error."""
    return PlaybackRecord(
        playing=False,
        state="",
        collected_at=collected_at or now_rfc3339_nano(),
        error=error,
    )


def record_to_fields(record: PlaybackRecord) -> Dict[str, str]:
    """Inverse of normalize_fields: raw key -> value for every reported field."""
    fields: Dict[str, str] = {"state": record.state}
    if record.state not in _PLAYING_BY_STATE:
        fields["playing"] = "true" if record.playing else "false"
    if record.error is not None:
        fields["error"] = record.error
    for attr, key in {**_STRING_FIELDS, **_INT_FIELDS}.items():
        value = getattr(record, attr)
        if value is not None:
            fields[key] = str(value)
    for attr in (*_BOOL_FIELDS, "starred"):
        value = getattr(record, attr)
        if value is not None:
            fields[attr] = "true" if value else "false"
    if record.player_position_ms is not None:
        fields["player_position"] = repr(record.player_position_ms / 1000)
    return fields
