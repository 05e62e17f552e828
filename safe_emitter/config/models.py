"""Configuration models for the safe emitter."""

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_MAX_LISTENERS = 10

ENV_MAX_LISTENERS = "SAFE_EMITTER_MAX_LISTENERS"
ENV_LOG_ERRORS = "SAFE_EMITTER_LOG_ERRORS"
ENV_LOG_LEVEL = "SAFE_EMITTER_LOG_LEVEL"
ENV_LOG_FILE = "SAFE_EMITTER_LOG_FILE"


# --- CUSTOM EXCEPTIONS ---

class SafeEmitterError(Exception):
    """Base exception for safe emitter errors."""


class ConfigError(SafeEmitterError):
    """Configuration loading error."""


# --- CONFIGURATION DATACLASSES ---

@dataclass
class EmitterConfig:
    """Configuration for a single emitter instance."""
    max_listeners: int = DEFAULT_MAX_LISTENERS
    log_errors: bool = True


@dataclass
class LoggingConfig:
    """Configuration for logging behavior."""
    level: str = "INFO"
    file: Optional[str] = None


# --- HELPER FUNCTIONS ---

def safe_load_dataclass(dclass_type, data: dict, section_name: str):
    """Safely load a dataclass from a dictionary.
    
    Ignores unknown keys and logs warnings for them.
    
    Args:
        dclass_type: Dataclass type to instantiate
        data: Dictionary with configuration data
        section_name: Name of config section (for logging)
        
    Returns:
        Instance of dclass_type with filtered data
    """
    valid_keys = {f.name for f in fields(dclass_type)}
    filtered_data = {}

    for k, v in (data or {}).items():
        if k in valid_keys:
            filtered_data[k] = v
        else:
            logger.warning(
                "Config warning: Unknown key '%s' in section '%s' ignored.",
                k, section_name
            )

    return dclass_type(**filtered_data)


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class AppConfig:
    """Main configuration container."""
    emitter: EmitterConfig = field(default_factory=EmitterConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def load(cls, config_path: Path | str) -> 'AppConfig':
        """Load configuration from a YAML file.
        
        Args:
            config_path: Path to config.yaml file
            
        Returns:
            AppConfig instance with loaded configuration
            
        Raises:
            ConfigError: If file not found or YAML parsing fails
        """
        path = Path(config_path)
        if not path.exists():
            raise ConfigError(f"Configuration file '{path}' not found.")

        try:
            with path.open('r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Error parsing YAML: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Configuration file '{path}' must contain a mapping.")

        return cls(
            emitter=safe_load_dataclass(EmitterConfig, data.get('emitter'), 'emitter'),
            logging=safe_load_dataclass(LoggingConfig, data.get('logging'), 'logging'),
        )

    @classmethod
    def from_env(cls) -> 'AppConfig':
        """Build configuration from environment variables (and a .env file).
        
        Raises:
            ConfigError: If SAFE_EMITTER_MAX_LISTENERS is not an integer
        """
        load_dotenv()

        emitter = EmitterConfig()
        raw_max = os.getenv(ENV_MAX_LISTENERS)
        if raw_max is not None:
            try:
                emitter.max_listeners = int(raw_max)
            except ValueError as e:
                raise ConfigError(
                    f"{ENV_MAX_LISTENERS} should be an integer, got '{raw_max}'"
                ) from e

        raw_log_errors = os.getenv(ENV_LOG_ERRORS)
        if raw_log_errors is not None:
            emitter.log_errors = _parse_bool(raw_log_errors)

        return cls(
            emitter=emitter,
            logging=LoggingConfig(
                level=os.getenv(ENV_LOG_LEVEL, "INFO"),
                file=os.getenv(ENV_LOG_FILE) or None,
            ),
        )
