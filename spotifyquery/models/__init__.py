"""Data models for player snapshots."""
from spotifyquery.models.playback import (
    STATE_NOT_RUNNING,
    STATE_PAUSED,
    STATE_PLAYING,
    STATE_STOPPED,
    STATE_UNKNOWN,
    PlaybackRecord,
)

__all__ = [
    "PlaybackRecord",
    "STATE_NOT_RUNNING",
    "STATE_STOPPED",
    "STATE_PAUSED",
    "STATE_PLAYING",
    "STATE_UNKNOWN",
]
