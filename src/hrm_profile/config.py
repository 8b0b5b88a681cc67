"""
HRM Profile Tool - Configuration
================================

Runtime configuration and save-file discovery. Configuration can come
from:
- Default values (defined here)
- Environment variables
- Command-line options (applied on top by the CLI)

Default profile locations are those used by the Steam release of the
game on each platform:

    Windows  %APPDATA%/Human Resource Machine/profiles.bin
    macOS    ~/Library/Application Support/Human Resource Machine/profiles.bin
             ~/Library/Containers/Tomorrow-Corporation.Human-Resource-Machine/
                 Data/Library/Application Support/Human Resource Machine/profiles.bin
    Linux    ~/.local/share/Tomorrow Corporation/Human Resource Machine/profiles.bin
"""

from dataclasses import dataclass
import logging
import os
from pathlib import Path
import sys
from typing import Mapping, Optional

from hrm_profile.errors import ProfileNotFoundError


logger = logging.getLogger(__name__)

PROFILE_FILENAME = "profiles.bin"
GAME_DIR = "Human Resource Machine"

ENV_PROFILE = "HRM_PROFILE"
ENV_WRAP_WIDTH = "HRM_WRAP_WIDTH"
ENV_LOG_LEVEL = "HRM_LOG_LEVEL"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ToolConfig:
    """
    Configuration for the command-line tool.

    Attributes:
        profile_path: Explicit profiles.bin to use (None: search defaults)
        wrap_width: Line length for DEFINE COMMENT payloads
        log_level: Logging level name used when not verbose
    """
    profile_path: Optional[Path] = None
    wrap_width: int = 80
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ToolConfig":
        """
        Create a ToolConfig from environment variables.

        Environment variables (all optional):
            HRM_PROFILE: Path to profiles.bin
            HRM_WRAP_WIDTH: Comment payload line length (positive integer)
            HRM_LOG_LEVEL: Logging level name (e.g. "INFO")

        Invalid values are ignored with a warning.
        """
        environ = os.environ if environ is None else environ
        config = cls()

        if profile := environ.get(ENV_PROFILE):
            config.profile_path = Path(profile).expanduser()

        if width := environ.get(ENV_WRAP_WIDTH):
            try:
                value = int(width)
            except ValueError:
                value = 0
            if value > 0:
                config.wrap_width = value
            else:
                logger.warning(f"Ignoring invalid {ENV_WRAP_WIDTH}={width!r}")

        if level := environ.get(ENV_LOG_LEVEL):
            if level.upper() in LOG_LEVELS:
                config.log_level = level.upper()
            else:
                logger.warning(f"Ignoring invalid {ENV_LOG_LEVEL}={level!r}")

        return config


# =============================================================================
# Profile Discovery
# =============================================================================

def default_profile_paths(
    platform: Optional[str] = None,
    home: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> list[Path]:
    """
    Return the locations the game stores profiles.bin in on a platform.

    Args:
        platform: A sys.platform value (default: the running platform)
        home: Home directory (default: the current user's)
        environ: Environment used for %APPDATA% (default: os.environ)

    Returns:
        Candidate paths, most likely first; empty for unknown platforms
    """
    platform = platform or sys.platform
    environ = os.environ if environ is None else environ
    home = home or Path.home()

    if platform.startswith("win"):
        appdata = environ.get("APPDATA")
        base = Path(appdata) if appdata else home / "AppData" / "Roaming"
        return [base / GAME_DIR / PROFILE_FILENAME]

    if platform == "darwin":
        support = Path("Library") / "Application Support" / GAME_DIR / PROFILE_FILENAME
        return [
            home / support,
            home / "Library" / "Containers" / "Tomorrow-Corporation.Human-Resource-Machine"
            / "Data" / support,
        ]

    if platform.startswith("linux"):
        return [
            home / ".local" / "share" / "Tomorrow Corporation" / GAME_DIR / PROFILE_FILENAME
        ]

    return []


def find_profile(
    explicit: Optional[Path] = None,
    platform: Optional[str] = None,
    home: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Path:
    """
    Locate the profiles.bin to decode.

    An explicit path always wins, then HRM_PROFILE, then the platform's
    default locations. Exactly one default location must exist.

    Raises:
        ProfileNotFoundError: If no candidate exists, several do, or the
            platform has no known default
    """
    if explicit is not None:
        return Path(explicit)

    environ = os.environ if environ is None else environ
    if profile := environ.get(ENV_PROFILE):
        return Path(profile).expanduser()

    candidates = default_profile_paths(platform, home, environ)
    if not candidates:
        raise ProfileNotFoundError(
            "unknown OS, cannot determine default profile path, please specify with --profile"
        )

    existing = [path for path in candidates if path.is_file()]
    logger.debug(f"Profile candidates: {[str(p) for p in candidates]}, found {len(existing)}")

    if not existing:
        raise ProfileNotFoundError(
            "no profiles found in default locations, use --profile to specify an alternative",
            candidates=[str(p) for p in candidates],
        )
    if len(existing) > 1:
        listing = "".join(f"    {path}\n" for path in existing)
        raise ProfileNotFoundError(
            "multiple profiles exist, use --profile to specify one:\n" + listing,
            candidates=[str(p) for p in existing],
        )
    return existing[0]
