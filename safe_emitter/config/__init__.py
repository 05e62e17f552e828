"""Configuration package for the safe emitter."""

from .models import (
    AppConfig,
    EmitterConfig,
    LoggingConfig,
    SafeEmitterError,
    ConfigError,
    DEFAULT_MAX_LISTENERS,
    safe_load_dataclass,
)

__all__ = [
    'AppConfig',
    'EmitterConfig',
    'LoggingConfig',
    'SafeEmitterError',
    'ConfigError',
    'DEFAULT_MAX_LISTENERS',
    'safe_load_dataclass',
]
