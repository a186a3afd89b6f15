"""
CLI Configuration

Locates the configuration file and overlays environment variables.
"""

from __future__ import annotations

from pathlib import Path

from core.config.runtime import RuntimeConfig


def default_config_paths() -> list[Path]:
    """Config files looked up, in order, when --config is not given."""
    return [
        Path.cwd() / "merkle-root.yaml",
        Path.cwd() / ".merkle-root.yaml",
        Path.home() / ".config" / "merkle-root" / "config.yaml",
    ]


def load_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.

    Args:
        config_path: Optional path to a YAML config file

    Returns:
        Merged configuration

    Raises:
        FileNotFoundError: If config_path is given but does not exist
    """
    config = RuntimeConfig()

    if config_path is not None:
        config = RuntimeConfig.from_yaml(config_path)
    else:
        for default_path in default_config_paths():
            if default_path.exists():
                config = RuntimeConfig.from_yaml(default_path)
                break

    return config.with_env_overrides()
