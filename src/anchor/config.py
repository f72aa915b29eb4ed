"""Configuration management for anchor using Pydantic models."""

import json
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

CONFIG_FILENAME = ".anchor.json"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"


class ValidationConfig(BaseModel):
    """Validation configuration section."""
    max_depth: int = Field(alias="maxDepth", default=50)

    @field_validator("max_depth")
    @classmethod
    def validate_max_depth(cls, v):
        if v < 1:
            raise ValueError("max_depth must be >= 1")
        return v

    model_config = ConfigDict(populate_by_name=True)


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.INFO

    model_config = ConfigDict(use_enum_values=True, validate_default=True)


class AnchorConfig(BaseModel):
    """Complete anchor configuration model."""
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")


def load_config(config_path: str | Path | None = None) -> AnchorConfig:
    """Read an ``.anchor.json`` file into an AnchorConfig.

    With no path, the nearest ``.anchor.json`` at or above the working
    directory is used. A missing file means defaults.

    Raises:
        ValueError: If the file is not JSON or does not describe a valid config
    """
    path = find_config_file() if config_path is None else Path(config_path)
    if path is None or not path.is_file():
        return create_default_config()

    text = path.read_text(encoding="utf-8")
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file {path}: {e}")

    try:
        return AnchorConfig.model_validate(raw)
    except ValidationError as e:
        raise ValueError(f"Failed to load config from {path}: {e}")


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Return the closest ``.anchor.json`` walking up from ``start_dir`` (default: cwd)."""
    start = Path(start_dir or Path.cwd()).resolve()
    for directory in (start, *start.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def create_default_config() -> AnchorConfig:
    return AnchorConfig()
