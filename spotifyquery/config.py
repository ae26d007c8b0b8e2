"""Configuration: config.yaml, env, Slack credentials, osascript and API settings."""
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Base paths (project root = parent of spotifyquery package)
BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PREFIX = "SPOTIFYQUERY_"
DEFAULT_CONFIG_NAME = "config.yaml"
# Config file path handed from the CLI to API workers
CONFIG_ENV = ENV_PREFIX + "CONFIG"

# Load .env from project root so SPOTIFYQUERY_SLACK_BOT_TOKEN etc. are set
load_dotenv(BASE_DIR / ".env")

# Bundled AppleScript that prints key<TAB>value lines
SPOTIFY_SCRIPT_PATH = Path(__file__).resolve().parent / "core" / "spotify_info.applescript"


class ConfigError(Exception):
    """Required setting missing or malformed."""


@dataclass(frozen=True)
class Settings:
    slack_bot_token: str = ""
    slack_channel_id: str = ""
    osascript: str = "osascript"
    collect_timeout_sec: Optional[float] = None
    api_host: str = "127.0.0.1"
    api_port: int = 8000

    @property
    def slack_configured(self) -> bool:
        return bool(self.slack_bot_token and self.slack_channel_id)

    def require_slack(self) -> None:
        """Raise ConfigError naming the first missing Slack setting."""
        if not self.slack_bot_token:
            raise ConfigError(
                f"slack bot token is required. Set slack.bot_token in config.yaml or {ENV_PREFIX}SLACK_BOT_TOKEN"
            )
        if not self.slack_channel_id:
            raise ConfigError(
                f"slack channel ID is required. Set slack.channel_id in config.yaml or {ENV_PREFIX}SLACK_CHANNEL_ID"
            )


def _getenv(name: str, default: str = "") -> str:
    return os.getenv(ENV_PREFIX + name, default).strip()


def _optional_float(name: str) -> Optional[float]:
    raw = _getenv(name)
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{ENV_PREFIX}{name} must be a number of seconds, got {raw!r}") from None


def _int(name: str, default: int) -> int:
    raw = _getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from None


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (yaml.YAMLError, OSError) as e:
        raise ConfigError(f"could not read config file {path}: {e}") from None
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"config file {path} must contain a mapping")
    return data


def load_config_file(config_file: Optional[Path] = None) -> Dict[str, Any]:
    """Return the YAML config as a dict.

    An explicit path must exist. Without one, ./config.yaml is used when
    present, otherwise the config is empty.
    """
    if config_file is not None:
        path = Path(config_file)
        if not path.is_file():
            raise ConfigError(f"config file not found: {config_file}")
    else:
        path = Path.cwd() / DEFAULT_CONFIG_NAME
        if not path.is_file():
            return {}
    logger.info("Using config file: %s", path)
    return _read_yaml(path)


def _file_value(config: Dict[str, Any], section: str, key: str) -> str:
    block = config.get(section) or {}
    if not isinstance(block, dict):
        raise ConfigError(f"'{section}' in config file must be a mapping")
    value = block.get(key)
    return "" if value is None else str(value).strip()


def load_settings(config_file: Optional[Path] = None) -> Settings:
    """Read settings from the YAML config file, then the environment.

    Non-empty SPOTIFYQUERY_* variables override values from the file.
    """
    config = load_config_file(config_file)
    return Settings(
        slack_bot_token=_getenv("SLACK_BOT_TOKEN") or _file_value(config, "slack", "bot_token"),
        slack_channel_id=_getenv("SLACK_CHANNEL_ID") or _file_value(config, "slack", "channel_id"),
        osascript=_getenv("OSASCRIPT", "osascript") or "osascript",
        collect_timeout_sec=_optional_float("COLLECT_TIMEOUT"),
        api_host=_getenv("API_HOST", "127.0.0.1") or "127.0.0.1",
        api_port=_int("API_PORT", 8000),
    )


def get_settings() -> Settings:
    """FastAPI dependency; re-reads the config file and environment on every call."""
    path = os.getenv(CONFIG_ENV, "").strip()
    return load_settings(Path(path) if path else None)
