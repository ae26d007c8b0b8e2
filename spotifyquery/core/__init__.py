"""Core pipeline: parse, normalize, resolve share URL, render."""
from spotifyquery.core.normalizer import normalize_fields
from spotifyquery.core.render import render_json
from spotifyquery.core.share_url import spotify_share_url
from spotifyquery.core.snapshot import Snapshot, build_snapshot, take_snapshot
from spotifyquery.core.tsv_parser import parse_fields

__all__ = [
    "parse_fields",
    "normalize_fields",
    "spotify_share_url",
    "render_json",
    "Snapshot",
    "build_snapshot",
    "take_snapshot",
]
