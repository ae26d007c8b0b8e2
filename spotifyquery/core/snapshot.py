"""Collect, parse and normalize one player snapshot. Shared by the CLI and API."""
import logging
from dataclasses import dataclass
from functools import partial
from typing import Callable, Optional, Protocol

from spotifyquery.config import Settings
from spotifyquery.core.collector import CollectResult, collect_player_state
from spotifyquery.core.normalizer import failure_record, normalize_fields
from spotifyquery.core.tsv_parser import parse_fields
from spotifyquery.models.playback import PlaybackRecord

logger = logging.getLogger(__name__)


class TrackPublisher(Protocol):
    def post_track_info(self, artist: str, name: str, spotify_url: str) -> None: ...


@dataclass(frozen=True)
class Snapshot:
    record: PlaybackRecord
    failed: bool = False  # collection produced nothing usable


def build_snapshot(result: CollectResult, collected_at: Optional[str] = None) -> Snapshot:
    """Turn collector output into a record.

    A failed collection with no parsable lines yields a record holding only
    collected_at and error. A failure that still printed fields is kept as
    partial data.
    """
    fields = parse_fields(result.text)
    if result.error and not fields:
        return Snapshot(record=failure_record(result.error, collected_at), failed=True)
    if result.error:
        logger.warning("Collector reported an error, using partial output: %s", result.error)
    return Snapshot(record=normalize_fields(fields, collected_at))


def settings_collector(settings: Settings) -> Callable[[], CollectResult]:
    """Collector bound to the configured osascript command and timeout."""
    return partial(
        collect_player_state,
        osascript=settings.osascript,
        timeout=settings.collect_timeout_sec,
    )


def take_snapshot(collect: Callable[[], CollectResult] = collect_player_state) -> Snapshot:
    return build_snapshot(collect())


def publish_record(record: PlaybackRecord, publisher: TrackPublisher) -> bool:
    """Post the track when name, artist and share URL are all known.

    Returns True if posted. Failures are logged, never raised.
    """
    if not (record.name and record.artist and record.share_url):
        logger.info("Nothing to post: track name, artist or share URL missing")
        return False
    try:
        publisher.post_track_info(record.artist, record.name, record.share_url)
    except Exception as e:
        logger.warning("Failed to post to Slack: %s", e)
        return False
    return True
