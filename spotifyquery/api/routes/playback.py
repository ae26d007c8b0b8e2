"""Current playback snapshot and Slack posting."""
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from spotifyquery.config import Settings, get_settings
from spotifyquery.core.slack_client import SlackError, SlackService
from spotifyquery.core.snapshot import settings_collector, take_snapshot

router = APIRouter()


@router.get("")
def get_playback(settings: Settings = Depends(get_settings)):
    """Return the current player snapshot; 502 when nothing could be collected."""
    snap = take_snapshot(settings_collector(settings))
    return JSONResponse(
        content=snap.record.to_json_dict(),
        status_code=502 if snap.failed else 200,
    )


@router.post("/post")
def post_playback(settings: Settings = Depends(get_settings)):
    """Post the current track to the configured Slack channel."""
    if not settings.slack_configured:
        raise HTTPException(
            status_code=503,
            detail="Slack not configured. Set SPOTIFYQUERY_SLACK_BOT_TOKEN and SPOTIFYQUERY_SLACK_CHANNEL_ID.",
        )
    snap = take_snapshot(settings_collector(settings))
    record = snap.record
    if not (record.name and record.artist and record.share_url):
        raise HTTPException(
            status_code=409,
            detail=record.error or "No shareable track is playing.",
        )
    slack = SlackService(settings.slack_bot_token, settings.slack_channel_id)
    try:
        slack.post_track_info(record.artist, record.name, record.share_url)
    except SlackError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return {"ok": True, "share_url": record.share_url}
