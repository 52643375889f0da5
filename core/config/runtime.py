"""
Runtime Configuration

Central configuration for proof generation and the CLI.

Sources, later ones winning:
1. Defaults
2. Config file (JSON or YAML)
3. Environment variables (AIRDROP_*), with .env loaded first
"""

from __future__ import annotations

import copy
import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from core.engine.proof_engine import EngineConfig

load_dotenv()

logger = logging.getLogger(__name__)

# Environment variable prefix
ENV_PREFIX = "AIRDROP_"

DEFAULT_CONFIG_PATHS = (
    Path("airdrop.json"),
    Path(".airdrop.json"),
    Path("~/.config/airdrop/config.json"),
)


@dataclass
class GenerationConfig:
    """Configuration for proof generation runs."""
    default_campaign_id: int = 0
    duplicate_policy: str = "last_write_wins"
    output_dir: str = "output"


@dataclass
class LoggingConfig:
    """Configuration for logging."""
    level: str = "INFO"
    file: Optional[str] = None


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables
    - JSON or YAML file
    - Programmatic construction
    """
    generation: GenerationConfig = field(default_factory=GenerationConfig)
    log: LoggingConfig = field(default_factory=LoggingConfig)
    output_format: str = "human"  # "human" or "json"
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - AIRDROP_CAMPAIGN_ID: Default campaign id
        - AIRDROP_DUPLICATE_POLICY: last_write_wins | reject
        - AIRDROP_OUTPUT_DIR: Default output directory
        - AIRDROP_LOG_LEVEL: Log level name
        - AIRDROP_LOG_FILE: Optional log file path
        - AIRDROP_OUTPUT_FORMAT: human | json
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}CAMPAIGN_ID"):
            overrides.setdefault("generation", {})["default_campaign_id"] = int(
                os.getenv(f"{ENV_PREFIX}CAMPAIGN_ID", "0")
            )
        if os.getenv(f"{ENV_PREFIX}DUPLICATE_POLICY"):
            overrides.setdefault("generation", {})["duplicate_policy"] = os.getenv(
                f"{ENV_PREFIX}DUPLICATE_POLICY"
            )
        if os.getenv(f"{ENV_PREFIX}OUTPUT_DIR"):
            overrides.setdefault("generation", {})["output_dir"] = os.getenv(f"{ENV_PREFIX}OUTPUT_DIR")

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides.setdefault("logging", {})["file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        if os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT"):
            overrides["output_format"] = os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_json(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = json.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: str | Path) -> "RuntimeConfig":
        """Load from a .yaml/.yml or JSON file, chosen by extension."""
        path = Path(path)
        if path.suffix.lower() in (".yaml", ".yml"):
            return cls.from_yaml(path)
        return cls.from_json(path)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        generation_data = data.get("generation", {})
        logging_data = data.get("logging", {})

        generation = GenerationConfig(**generation_data) if generation_data else GenerationConfig()
        log_config = LoggingConfig(**logging_data) if logging_data else LoggingConfig()

        return cls(
            generation=generation,
            log=log_config,
            output_format=data.get("output_format", "human"),
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)
        for key, value in overrides.get("generation", {}).items():
            setattr(new_config.generation, key, value)
        for key, value in overrides.get("logging", {}).items():
            setattr(new_config.log, key, value)
        if "output_format" in overrides:
            new_config.output_format = overrides["output_format"]

        return new_config

    def engine_config(self) -> EngineConfig:
        """Build the proof engine configuration."""
        return EngineConfig.from_value(self.generation.duplicate_policy)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "generation": asdict(self.generation),
            "logging": asdict(self.log),
            "output_format": self.output_format,
            "extra": self.extra,
        }


def load_config(config_path: str | Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings. Without an explicit
    path, the first existing default location is used.

    Args:
        config_path: Optional path to config file

    Returns:
        Merged configuration
    """
    config = RuntimeConfig()

    if config_path is not None:
        config = RuntimeConfig.from_file(config_path)
    else:
        for default_path in DEFAULT_CONFIG_PATHS:
            default_path = default_path.expanduser()
            if default_path.exists():
                logger.debug(f"Using config file {default_path}")
                config = RuntimeConfig.from_file(default_path)
                break

    return config.with_env_overrides()


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return json.dumps(RuntimeConfig().to_dict(), indent=2) + "\n"


__all__ = [
    "ENV_PREFIX",
    "DEFAULT_CONFIG_PATHS",
    "GenerationConfig",
    "LoggingConfig",
    "RuntimeConfig",
    "load_config",
    "get_default_config_template",
]
