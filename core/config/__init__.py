"""
Runtime Configuration Module

Provides configuration loading and management for Merkle root computation.
"""

from .runtime import (
    RuntimeConfig,
    EngineConfig,
    SourceConfig,
    LoggingConfig,
    get_default_config,
    set_default_config,
    get_default_config_template,
)

__all__ = [
    "RuntimeConfig",
    "EngineConfig",
    "SourceConfig",
    "LoggingConfig",
    "get_default_config",
    "set_default_config",
    "get_default_config_template",
]
