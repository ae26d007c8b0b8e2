"""Turn Spotify URIs and open.spotify.com links into shareable HTTPS URLs."""
from typing import Optional

WEB_BASE = "https://open.spotify.com/"
_HTTP_BASE = "http://open.spotify.com/"
_LOCAL_PREFIX = "spotify:local:"
_URI_PREFIX = "spotify:"


def spotify_share_url(value: str) -> Optional[str]:
    """Return https://open.spotify.com/<type>/<id> for a Spotify identifier, or None.

    Accepts spotify:<type>:<id> URIs and http(s)://open.spotify.com/ links.
    Local files (spotify:local:...) and bare ids have no web URL.
    """
    value = (value or "").strip()
    if not value:
        return None
    if value.startswith(WEB_BASE):
        return value
    if value.startswith(_HTTP_BASE):
        return WEB_BASE + value[len(_HTTP_BASE):]
    if value.startswith(_LOCAL_PREFIX):
        return None
    if value.startswith(_URI_PREFIX):
        parts = value.split(":")
        if len(parts) >= 3:
            kind, id_ = parts[1], parts[2]
            if kind and id_:
                return f"{WEB_BASE}{kind}/{id_}"
    return None
