"""Run the bundled AppleScript through osascript and capture its output."""
import logging
import subprocess
from dataclasses import dataclass
from typing import Optional

from spotifyquery.config import SPOTIFY_SCRIPT_PATH

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CollectResult:
    """Raw collector output. error is set when osascript failed; text may
    still hold whatever it printed before failing."""
    text: str
    error: Optional[str] = None


def load_script() -> str:
    return SPOTIFY_SCRIPT_PATH.read_text(encoding="utf-8")


def collect_player_state(
    script: Optional[str] = None,
    osascript: str = "osascript",
    timeout: Optional[float] = None,
) -> CollectResult:
    """Pipe the script to `osascript -`. Process failures are returned, not raised."""
    if script is None:
        script = load_script()
    try:
        proc = subprocess.run(
            [osascript, "-"],
            input=script,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        logger.warning("osascript timed out after %ss", timeout)
        partial = e.stdout or ""
        if isinstance(partial, bytes):
            partial = partial.decode("utf-8", errors="replace")
        return CollectResult(text=partial, error=f"osascript timed out after {timeout}s")
    except OSError as e:
        logger.warning("Could not run %s: %s", osascript, e)
        return CollectResult(text="", error=str(e))

    if proc.returncode != 0:
        stderr = (proc.stderr or "").strip()
        logger.debug("osascript exited %d: %s", proc.returncode, stderr)
        return CollectResult(text=proc.stdout or "", error=f"exit status {proc.returncode}: {stderr}")
    return CollectResult(text=proc.stdout or "")
