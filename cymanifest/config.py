"""Program configuration stored as a small JSON document."""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://example.com/cytube"
DEFAULT_CONFIG_PATH = Path.home() / ".config" / "cymanifest" / "config.json"
CONFIG_ENV_VAR = "CYMANIFEST_CONFIG"


class ConfigError(ValueError):
    """Raised when the configuration file is missing or malformed."""
    pass


@dataclass(frozen=True)
class ProgramConfig:
    """User settings for manifest generation."""

    base_url: str = DEFAULT_BASE_URL
    create_htaccess: bool = False
    output_dir: Path | None = None


def config_path(path: str | Path | None = None) -> Path:
    """Explicit *path*, then $CYMANIFEST_CONFIG, then the default location."""
    if path:
        return Path(path)
    env = os.environ.get(CONFIG_ENV_VAR)
    if env:
        return Path(env)
    return DEFAULT_CONFIG_PATH


def create_config_if_missing(path: str | Path) -> bool:
    """Write a default config file. Returns True if one was created."""
    path = Path(path)
    if path.exists():
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    defaults = {"baseUrl": DEFAULT_BASE_URL, "createHtAccess": False}
    path.write_text(json.dumps(defaults, indent=2), encoding="utf-8")
    logger.info("created default config at %s", path)
    return True


def parse_config(data: dict) -> ProgramConfig:
    """Validate a decoded config document."""
    if not isinstance(data, dict):
        raise ConfigError("Config must be a JSON object")
    base_url = data.get("baseUrl")
    if not isinstance(base_url, str) or not base_url:
        raise ConfigError("Config must contain a 'baseUrl' string")
    if not base_url.startswith("https://"):
        raise ConfigError(
            'Base URL does not begin with "https://"; the player will reject your media'
        )

    output_dir = data.get("outputDir")
    return ProgramConfig(
        base_url=base_url.rstrip("/"),
        create_htaccess=bool(data.get("createHtAccess", False)),
        output_dir=Path(output_dir) if output_dir else None,
    )


def load_config(path: str | Path) -> ProgramConfig:
    """Load and validate the config file at *path*."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Unable to read config {path}: {e}") from e
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Error deserializing {path}: {e}") from e
    return parse_config(data)
