"""Settings for casefile."""

import json
import logging
import os
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "~/.casefile/config.json"
CONFIG_ENV_VAR = "CASEFILE_CONFIG"


class Settings(BaseModel):
    """Tunable analysis settings."""

    top_files: int = Field(10, ge=1, description="How many of the largest files to keep")
    max_workers: int = Field(4, ge=1, description="Worker threads used to stat files")
    follow_symlinks: bool = Field(
        True, description="Descend into symlinked folders (each folder is visited once)"
    )


def expand_path(path: str | Path) -> Path:
    """Expand ~ and environment variables in path."""
    return Path(os.path.expanduser(os.path.expandvars(str(path))))


def config_path() -> Path:
    """Location of the config file."""
    return expand_path(os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_FILE))


def load_settings(path: Path | None = None) -> Settings:
    """
    Load settings from the config file.

    A missing or corrupt file yields the defaults.

    Args:
        path: Config file to read (default: config_path())

    Returns:
        Settings instance
    """
    path = path or config_path()
    if not path.exists():
        return Settings()

    try:
        with open(path) as f:
            data = json.load(f)
        return Settings.model_validate(data)
    except (json.JSONDecodeError, OSError, ValidationError) as e:
        logger.warning("Ignoring unreadable config %s: %s", path, e)
        return Settings()


def save_settings(settings: Settings, path: Path | None = None) -> bool:
    """Write settings to the config file."""
    path = path or config_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(settings.model_dump(), f, indent=2)
        return True
    except OSError:
        return False
