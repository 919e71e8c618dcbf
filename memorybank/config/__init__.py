"""Configuration for the memory-bank validators."""

from memorybank.config.validator_config import (
    ConfigError,
    ValidatorConfig,
    default_config,
    load_config,
)

__all__ = [
    "ConfigError",
    "ValidatorConfig",
    "default_config",
    "load_config",
]
