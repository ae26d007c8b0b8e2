"""Playback snapshot from the Spotify desktop player."""
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict

# Player states reported by the AppleScript collector
STATE_NOT_RUNNING = "not_running"
STATE_STOPPED = "stopped"
STATE_PAUSED = "paused"
STATE_PLAYING = "playing"
STATE_UNKNOWN = "unknown"


class PlaybackRecord(BaseModel):
    """Normalized player state. Optional fields are None when not reported
    and are left out of the serialized form."""

    model_config = ConfigDict(frozen=True)

    # Player state
    playing: bool
    state: str
    sound_volume: Optional[int] = None  # 0-100
    shuffling: Optional[bool] = None
    shuffling_enabled: Optional[bool] = None
    repeating: Optional[bool] = None
    player_position_ms: Optional[int] = None

    # Track metadata
    name: Optional[str] = None
    artist: Optional[str] = None
    album: Optional[str] = None
    album_artist: Optional[str] = None
    duration_ms: Optional[int] = None
    track_number: Optional[int] = None
    disc_number: Optional[int] = None
    id: Optional[str] = None  # spotify:track:... or open.spotify.com URL
    popularity: Optional[int] = None
    starred: Optional[bool] = None
    artwork_url: Optional[str] = None

    # Derived from id
    share_url: Optional[str] = None

    collected_at: str
    error: Optional[str] = None

    def to_json_dict(self) -> Dict[str, Any]:
        """Field order preserved, absent fields dropped."""
        return self.model_dump(exclude_none=True)
