"""
Runtime Configuration Module

Provides configuration loading for proof generation and the CLI.
"""

from .runtime import (
    ENV_PREFIX,
    GenerationConfig,
    LoggingConfig,
    RuntimeConfig,
    get_default_config_template,
    load_config,
)

__all__ = [
    "ENV_PREFIX",
    "GenerationConfig",
    "LoggingConfig",
    "RuntimeConfig",
    "get_default_config_template",
    "load_config",
]
