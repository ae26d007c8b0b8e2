"""Entry: print the Spotify player state as JSON, optionally post it or serve the API.

USAGE:
  spotifyquery                        # JSON snapshot to stdout
  spotifyquery --post                 # also post the track to Slack
  spotifyquery --config ./prod.yaml   # read settings from another YAML file
  spotifyquery --check-slack          # verify the Slack bot token and exit
  spotifyquery --serve                # local REST API on SPOTIFYQUERY_API_HOST:PORT
"""
import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from spotifyquery.config import CONFIG_ENV, ConfigError, load_settings
from spotifyquery.core.render import emit
from spotifyquery.core.slack_client import SlackError, SlackService
from spotifyquery.core.snapshot import publish_record, settings_collector, take_snapshot

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spotifyquery",
        description="Query Spotify player information and optionally post to Slack",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML config file (default is ./config.yaml)",
    )
    parser.add_argument(
        "--post",
        action="store_true",
        help="post track information to Slack",
    )
    parser.add_argument(
        "--check-slack",
        action="store_true",
        help="check the Slack bot token and exit",
    )
    parser.add_argument(
        "--serve",
        action="store_true",
        help="run the local REST API instead of printing one snapshot",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="enable info logging on stderr",
    )
    return parser


def check_slack(service: SlackService) -> int:
    try:
        info = service.test_connection()
    except SlackError as e:
        print(f"Slack check failed: {e}", file=sys.stderr)
        return 1
    print(
        f"Slack OK: team={info.get('team', '')} user={info.get('user', '')}",
        file=sys.stderr,
    )
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.serve and (args.post or args.check_slack):
        parser.error("--serve cannot be combined with --post or --check-slack; use POST /api/playback/post")

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s: %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        settings = load_settings(args.config)
        if args.post or args.check_slack:
            settings.require_slack()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.check_slack:
        return check_slack(SlackService(settings.slack_bot_token, settings.slack_channel_id))

    if args.serve:
        import uvicorn
        if args.config is not None:
            # API requests re-read settings; point them at the same file
            os.environ[CONFIG_ENV] = str(args.config.resolve())
        uvicorn.run("spotifyquery.api.app:app", host=settings.api_host, port=settings.api_port)
        return 0

    snap = take_snapshot(settings_collector(settings))
    if snap.failed:
        emit(snap.record)
        logger.error("Collection failed: %s", snap.record.error)
        return 1

    if args.post:
        publish_record(
            snap.record,
            SlackService(settings.slack_bot_token, settings.slack_channel_id),
        )

    emit(snap.record)
    return 0


if __name__ == "__main__":
    sys.exit(main())
