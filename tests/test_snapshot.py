"""
tests/test_snapshot.py
Collector output -> Snapshot, total-failure short-circuit, and Slack hand-off.
"""

import logging
from unittest.mock import MagicMock

from spotifyquery.core.collector import CollectResult
from spotifyquery.core.slack_client import SlackError
from spotifyquery.core.snapshot import build_snapshot, publish_record, take_snapshot

TS = "2024-01-01T00:00:00Z"

PLAYING_TEXT = (
    "state\tplaying\n"
    "name\tSong 2\n"
    "artist\tBlur\n"
    "id\tspotify:track:1BpMw2vf4sWnFXy6liC5tD\n"
)


class TestBuildSnapshot:

    def test_success(self):
        snap = build_snapshot(CollectResult(text=PLAYING_TEXT), collected_at=TS)
        assert snap.failed is False
        assert snap.record.playing is True
        assert snap.record.share_url == "https://open.spotify.com/track/1BpMw2vf4sWnFXy6liC5tD"

    def test_total_failure_empty_text(self):
        snap = build_snapshot(CollectResult(text="", error="exit status 1: no Spotify"), collected_at=TS)
        assert snap.failed is True
        assert snap.record.to_json_dict() == {
            "playing": False,
            "state": "",
            "collected_at": TS,
            "error": "exit status 1: no Spotify",
        }

    def test_total_failure_unparsable_text(self):
        snap = build_snapshot(CollectResult(text="  \nsyntax error\n", error="exit status 1: x"))
        assert snap.failed is True
        assert snap.record.state == ""
        assert snap.record.error == "exit status 1: x"

    def test_partial_output_kept(self, caplog):
        with caplog.at_level(logging.WARNING):
            snap = build_snapshot(CollectResult(text="state\tpaused\n", error="exit status 1: late"))
        assert snap.failed is False
        assert snap.record.state == "paused"
        assert snap.record.error is None
        assert "late" in caplog.text

    def test_empty_text_without_error(self):
        snap = build_snapshot(CollectResult(text=""), collected_at=TS)
        assert snap.failed is False
        assert snap.record.state == "unknown"

    def test_take_snapshot_calls_collector_once(self):
        collect = MagicMock(return_value=CollectResult(text=PLAYING_TEXT))
        snap = take_snapshot(collect)
        collect.assert_called_once_with()
        assert snap.record.name == "Song 2"


class TestPublishRecord:

    def _record(self, text=PLAYING_TEXT):
        return build_snapshot(CollectResult(text=text), collected_at=TS).record

    def test_posts_artist_name_and_url(self):
        publisher = MagicMock()
        assert publish_record(self._record(), publisher) is True
        publisher.post_track_info.assert_called_once_with(
            "Blur", "Song 2", "https://open.spotify.com/track/1BpMw2vf4sWnFXy6liC5tD"
        )

    def test_skips_without_share_url(self):
        publisher = MagicMock()
        rec = self._record("name\tSong 2\nartist\tBlur\nid\tspotify:local:x\n")
        assert publish_record(rec, publisher) is False
        publisher.post_track_info.assert_not_called()

    def test_skips_without_artist(self):
        publisher = MagicMock()
        rec = self._record("name\tSong 2\nid\tspotify:track:abc\n")
        assert publish_record(rec, publisher) is False
        publisher.post_track_info.assert_not_called()

    def test_failure_is_warning_only(self, caplog):
        publisher = MagicMock()
        publisher.post_track_info.side_effect = SlackError("chat.postMessage: channel_not_found")
        with caplog.at_level(logging.WARNING):
            assert publish_record(self._record(), publisher) is False
        assert "channel_not_found" in caplog.text
        assert publisher.post_track_info.call_count == 1
