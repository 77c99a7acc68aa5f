"""Configuration management for Dayboard."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

DAYBOARD_HOME = Path(os.environ.get("DAYBOARD_HOME", Path.home() / "dayboard"))
CONFIG_FILE = DAYBOARD_HOME / "config" / "dayboard.conf"


@dataclass
class Config:
    """Dayboard configuration."""

    api_base_url: str = "http://localhost:3000"
    request_timeout: float = 10.0
    # Work mode only loads work tasks and the work graveyard
    work_mode: bool = False
    log_level: str = "WARNING"


def _parse_bool(value: str) -> bool | None:
    lowered = value.lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    return None


def _strip_value(value: str) -> str:
    # Handle quoted values with inline comments: "value" # comment
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    # Unquoted: strip inline comments
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config(path: Path | None = None) -> Config:
    """Load configuration from dayboard.conf, then apply environment overrides."""
    config = Config()
    path = path or CONFIG_FILE

    if path.exists():
        for line in path.read_text().splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            if "=" not in line:
                continue

            key, _, value = line.partition("=")
            key = key.strip().lower()
            value = _strip_value(value.strip())

            match key:
                case "api_base_url":
                    config.api_base_url = value.rstrip("/")
                case "request_timeout":
                    try:
                        config.request_timeout = float(value)
                    except ValueError:
                        logger.warning(f"Invalid REQUEST_TIMEOUT {value!r}, using {config.request_timeout}")
                case "work_mode":
                    parsed = _parse_bool(value)
                    if parsed is None:
                        logger.warning(f"Invalid WORK_MODE {value!r}, expected true/false")
                    else:
                        config.work_mode = parsed
                case "log_level":
                    config.log_level = value.upper()

    env_url = os.environ.get("DAYBOARD_API_BASE_URL")
    if env_url:
        config.api_base_url = env_url.rstrip("/")

    return config
