"""Global configuration for taskflow.

Stores tunables in ~/.taskflow/config.json (or $TASKFLOW_HOME/config.json)
and locates the preferences file used by the notification sink.
"""

import json
import os
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

HOME_ENV_VAR = "TASKFLOW_HOME"


class TaskflowConfig(BaseModel):
    """User-tunable settings."""

    window_years: int = Field(default=1, ge=0)
    expiry_seconds: float = Field(default=5.0, gt=0)
    history_limit: int = Field(default=50, ge=1)
    due_soon_days: int = Field(default=3, ge=0)


def get_config_dir() -> Path:
    """Get the taskflow config directory, creating it if needed."""
    override = os.environ.get(HOME_ENV_VAR)
    config_dir = Path(override) if override else Path.home() / ".taskflow"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_config() -> TaskflowConfig:
    """Load configuration, falling back to defaults."""
    config_file = get_config_dir() / "config.json"
    if config_file.exists():
        try:
            data = json.loads(config_file.read_text(encoding="utf-8"))
            return TaskflowConfig(**data)
        except (json.JSONDecodeError, ValidationError, TypeError):
            pass
    return TaskflowConfig()  # defaults


def save_config(config: TaskflowConfig) -> None:
    """Save configuration."""
    config_file = get_config_dir() / "config.json"
    config_file.write_text(
        json.dumps(config.model_dump(), indent=2),
        encoding="utf-8",
    )


def get_preferences_path() -> Path:
    """Path of the JSON file holding notification settings and history."""
    return get_config_dir() / "preferences.json"
