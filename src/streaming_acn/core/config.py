"""
Configuration Management for Streaming ACN.

Uses Pydantic Settings for type-safe configuration with environment
variable support and YAML file loading.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings
import yaml

from streaming_acn.core.exceptions import ConfigError


class SourceConfig(BaseModel):
    """Identity of this sACN source."""
    cid: Optional[UUID] = None  # None = random UUID per process
    source_name: Optional[str] = None  # None = "streaming-acn-<pid>"
    priority: int = Field(default=100, ge=0, le=200)


class Settings(BaseSettings):
    """
    Main application settings.

    Can be configured via:
    - Environment variables (prefixed with STREAMING_ACN_)
    - YAML config file
    - Direct instantiation
    """

    source: SourceConfig = Field(default_factory=SourceConfig)

    # Debug
    debug: bool = False
    log_level: str = "INFO"

    class Config:
        env_prefix = "STREAMING_ACN_"
        env_nested_delimiter = "__"

    @classmethod
    def from_yaml(cls, path: Path) -> "Settings":
        """Load settings from a YAML file."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(str(path), str(e)) from e
        try:
            return cls(**(data or {}))
        except PydanticValidationError as e:
            raise ConfigError(str(path), str(e)) from e

    def to_yaml(self, path: Path) -> None:
        """Save settings to a YAML file."""
        with open(path, "w") as f:
            yaml.dump(self.model_dump(mode="json"), f, default_flow_style=False)
