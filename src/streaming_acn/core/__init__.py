"""Core system components for Streaming ACN."""

from streaming_acn.core.config import Settings, SourceConfig
from streaming_acn.core.exceptions import (
    ConfigError,
    E131Error,
    LayerLengthError,
    ValidationError,
)
from streaming_acn.core.identity import SourceIdentity, SourceSnapshot

__all__ = [
    "Settings",
    "SourceConfig",
    "SourceIdentity",
    "SourceSnapshot",
    "E131Error",
    "ValidationError",
    "LayerLengthError",
    "ConfigError",
]
