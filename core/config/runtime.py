"""
Runtime Configuration

Central configuration for engine selection, leaf source reading and logging.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from typing import Any, Optional
from pathlib import Path

from dotenv import load_dotenv

from core.merkle.root import WalkMode
from core.merkle.width_walk import DEFAULT_MIN_PARALLEL_PAIRS
from core.source.reader import DEFAULT_BUFFER_SIZE

load_dotenv()


# Environment variable prefix
ENV_PREFIX = "MERKLE_ROOT_"


@dataclass
class EngineConfig:
    """Configuration for root computation."""
    mode: str = WalkMode.DEPTH_WALK.value
    max_workers: Optional[int] = None
    min_parallel_pairs: int = DEFAULT_MIN_PARALLEL_PAIRS

    def __post_init__(self):
        # Unknown mode names fail here
        self.mode = WalkMode.parse(self.mode).value
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {self.max_workers}")


@dataclass
class SourceConfig:
    """Configuration for reading leaf files."""
    buffer_size: int = DEFAULT_BUFFER_SIZE
    encoding: str = "ascii"


@dataclass
class LoggingConfig:
    """Logging configuration."""
    level: str = "INFO"
    file: Optional[str] = None


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    engine: EngineConfig = field(default_factory=EngineConfig)
    source: SourceConfig = field(default_factory=SourceConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        This is the SINGLE source of truth for all env var reading.

        Supported variables:
        - MERKLE_ROOT_MODE: depth-walk or width-walk
        - MERKLE_ROOT_MAX_WORKERS: width-walk thread pool size
        - MERKLE_ROOT_MIN_PARALLEL_PAIRS: smallest layer hashed on the pool
        - MERKLE_ROOT_BUFFER_SIZE: leaf file read buffer in bytes
        - MERKLE_ROOT_LOG_LEVEL: log level name
        - MERKLE_ROOT_LOG_FILE: optional log file path
        """
        overrides: dict[str, Any] = {}

        # Engine settings
        if os.getenv(f"{ENV_PREFIX}MODE"):
            overrides.setdefault("engine", {})["mode"] = os.getenv(f"{ENV_PREFIX}MODE")
        if os.getenv(f"{ENV_PREFIX}MAX_WORKERS"):
            overrides.setdefault("engine", {})["max_workers"] = int(
                os.getenv(f"{ENV_PREFIX}MAX_WORKERS", "0")
            )
        if os.getenv(f"{ENV_PREFIX}MIN_PARALLEL_PAIRS"):
            overrides.setdefault("engine", {})["min_parallel_pairs"] = int(
                os.getenv(f"{ENV_PREFIX}MIN_PARALLEL_PAIRS", str(DEFAULT_MIN_PARALLEL_PAIRS))
            )

        # Source settings
        if os.getenv(f"{ENV_PREFIX}BUFFER_SIZE"):
            overrides.setdefault("source", {})["buffer_size"] = int(
                os.getenv(f"{ENV_PREFIX}BUFFER_SIZE", str(DEFAULT_BUFFER_SIZE))
            )

        # Logging
        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides.setdefault("logging", {})["file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
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
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        engine_data = data.get("engine", {}) or {}
        source_data = data.get("source", {}) or {}
        logging_data = data.get("logging", {}) or {}

        return cls(
            engine=EngineConfig(**engine_data),
            source=SourceConfig(**source_data),
            logging=LoggingConfig(**logging_data),
            extra=data.get("extra", {}) or {},
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

        for section in ("engine", "source", "logging"):
            for key, value in overrides.get(section, {}).items():
                setattr(getattr(new_config, section), key, value)

        # Re-run validation on the overridden engine section
        new_config.engine = EngineConfig(**vars(new_config.engine))

        return new_config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "engine": {
                "mode": self.engine.mode,
                "max_workers": self.engine.max_workers,
                "min_parallel_pairs": self.engine.min_parallel_pairs,
            },
            "source": {
                "buffer_size": self.source.buffer_size,
                "encoding": self.source.encoding,
            },
            "logging": {
                "level": self.logging.level,
                "file": self.logging.file,
            },
            "extra": self.extra,
        }


def get_default_config_template() -> str:
    """Get a template YAML configuration file."""
    return """\
engine:
  # depth-walk (streaming, O(log n) memory) or width-walk (parallel layers)
  mode: depth-walk
  max_workers: null
  min_parallel_pairs: 1024
source:
  buffer_size: 65536
  encoding: ascii
logging:
  level: INFO
  file: null
"""


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set the default runtime configuration."""
    global _default_config
    _default_config = config
