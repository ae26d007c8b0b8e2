"""Slack Web API client: post the current track to a channel."""
import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, Dict

logger = logging.getLogger(__name__)

SLACK_API_BASE = "https://slack.com/api"
YOUTUBE_SEARCH_URL = "https://www.youtube.com/results?search_query="


class SlackError(Exception):
    """Slack rejected the call or could not be reached."""


def youtube_search_url(artist: str, name: str) -> str:
    return YOUTUBE_SEARCH_URL + urllib.parse.quote_plus(f"{artist} {name}")


class SlackService:
    """Posts track info with a bot token to a single channel."""

    def __init__(
        self,
        bot_token: str,
        channel_id: str,
        api_base: str = SLACK_API_BASE,
        timeout_sec: float = 10,
    ) -> None:
        self.bot_token = bot_token
        self.channel_id = channel_id
        self.api_base = api_base.rstrip("/")
        self.timeout_sec = timeout_sec

    def _call(self, method: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        req = urllib.request.Request(
            f"{self.api_base}/{method}",
            data=json.dumps(payload).encode("utf-8"),
            headers={
                "Authorization": f"Bearer {self.bot_token}",
                "Content-Type": "application/json; charset=utf-8",
            },
            method="POST",
        )
        try:
            with urllib.request.urlopen(req, timeout=self.timeout_sec) as resp:
                data = json.loads(resp.read().decode("utf-8"))
        except urllib.error.URLError as e:
            raise SlackError(f"{method}: {e}") from e
        except OSError as e:
            # timeouts and dropped connections while reading the response
            raise SlackError(f"{method}: {e}") from e
        except json.JSONDecodeError as e:
            raise SlackError(f"{method}: invalid response: {e}") from e
        if not data.get("ok"):
            raise SlackError(f"{method}: {data.get('error', 'unknown_error')}")
        return data

    def post_message(self, text: str, thread_ts: str = "") -> str:
        """Post text to the channel; returns the message timestamp."""
        payload: Dict[str, Any] = {"channel": self.channel_id, "text": text}
        if thread_ts:
            payload["thread_ts"] = thread_ts
        return self._call("chat.postMessage", payload).get("ts", "")

    def post_track_info(self, artist: str, name: str, spotify_url: str) -> None:
        """Post "Artist - Name", then the Spotify and YouTube links as a thread reply."""
        ts = self.post_message(f"{artist} - {name}")
        logger.info("Posted %s - %s to %s", artist, name, self.channel_id)
        links = f"Spotify: {spotify_url}\nYouTube: {youtube_search_url(artist, name)}"
        self.post_message(links, thread_ts=ts)

    def test_connection(self) -> Dict[str, Any]:
        return self._call("auth.test", {})
