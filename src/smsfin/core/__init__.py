"""
Core module - shared foundation for smsfin.

Provides:
- Exception hierarchy
- ParserConfig: JSON-driven pipeline configuration
"""

from smsfin.core.exceptions import (
    SMSFinError,
    PatternConfigError,
    AmountParseError,
    ConfigError,
    IngestionError,
)
from smsfin.core.config import ParserConfig, load_config, CONFIG_ENV_VAR

__all__ = [
    # Exceptions
    "SMSFinError",
    "PatternConfigError",
    "AmountParseError",
    "ConfigError",
    "IngestionError",
    # Configuration
    "ParserConfig",
    "load_config",
    "CONFIG_ENV_VAR",
]
