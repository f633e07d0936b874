"""
Scriptura - Configuration

Centralized configuration management for the entire system.
Uses environment variables with sensible defaults.
"""
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from core.errors import ScripturaConfigError

# Load environment variables from .env file
load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


class LogLevel(Enum):
    """Logging levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "WARNING"))
    json_format: bool = field(
        default_factory=lambda: os.getenv("LOG_FORMAT", "console").lower() == "json"
    )

    def __post_init__(self):
        self.level = self.level.upper()
        if self.level not in LogLevel.__members__:
            raise ScripturaConfigError(
                f"Unknown log level '{self.level}'",
                config_key="LOG_LEVEL",
                actual_value=self.level,
            )


@dataclass
class ValidationConfig:
    """Validation engine options."""
    # Warn about canonical books missing from the collection
    check_canon_completeness: bool = field(
        default_factory=lambda: _env_bool("SCRIPTURA_CHECK_CANON_COMPLETENESS", "false")
    )


@dataclass
class ObservabilityConfig:
    """OpenTelemetry tracing configuration."""
    service_name: str = field(
        default_factory=lambda: os.getenv("OTEL_SERVICE_NAME", "scriptura")
    )
    tracing_enabled: bool = field(
        default_factory=lambda: _env_bool("OTEL_TRACING_ENABLED", "false")
    )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for diagnostics."""
        return {
            "service_name": self.service_name,
            "tracing_enabled": self.tracing_enabled,
        }


@dataclass
class Config:
    """Main configuration class combining all sub-configs."""
    # Debug-level logging for the CLI regardless of LOG_LEVEL
    debug: bool = field(default_factory=lambda: _env_bool("DEBUG", "false"))

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    validation: ValidationConfig = field(default_factory=ValidationConfig)
    observability: ObservabilityConfig = field(default_factory=ObservabilityConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "debug": self.debug,
            "logging": {
                "level": self.logging.level,
                "json_format": self.logging.json_format,
            },
            "validation": {
                "check_canon_completeness": self.validation.check_canon_completeness,
            },
            "observability": self.observability.to_dict(),
        }


# Singleton configuration instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create configuration singleton."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reload_config() -> Config:
    """Reload configuration from environment."""
    global _config
    load_dotenv(override=True)
    _config = Config()
    return _config
