"""Config loader utilities."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml

from .config_settings import Config
from .exceptions import ConfigurationError
from .utils.logging import get_logger

CONFIG_ENV_VAR = "OBSIDIAN_WORKBENCH_CONFIG"
CONFIG_FILE_NAME = "workbench.yaml"

_config: Config | None = None


def _candidate_paths(config_path: Path | None) -> list[Path]:
    if config_path:
        return [config_path.expanduser()]
    candidates: list[Path] = []
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        candidates.append(Path(env_path).expanduser())
    candidates.append(Path.cwd() / CONFIG_FILE_NAME)
    return candidates


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(
            f"Failed to parse config file: {path}",
            suggestion=(
                "Check YAML syntax (indentation, colons, quotes). "
                f"Original error: {e}"
            ),
            context={"config_path": str(path)},
        ) from e
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Config file must contain a mapping: {path}",
            context={"config_path": str(path)},
        )
    return data


def load_config(config_path: Path | None = None, *, validate: bool = True) -> Config:
    """Load configuration from workbench.yaml, the environment, and .env.

    Args:
        config_path: Explicit config file (from --config); otherwise
            $OBSIDIAN_WORKBENCH_CONFIG, then ./workbench.yaml
        validate: Run filesystem checks (vault must exist)

    Raises:
        ConfigurationError: Malformed file or invalid values
    """
    logger = get_logger(__name__)

    candidates = _candidate_paths(config_path)
    resolved = next((p for p in candidates if p.exists()), None)
    if config_path and resolved is None:
        raise ConfigurationError(
            f"Config file not found: {config_path}",
            context={"config_path": str(config_path)},
        )

    yaml_data: dict[str, Any] = {}
    if resolved:
        yaml_data = _read_yaml(resolved)
        logger.debug("config_file_found", config_path=str(resolved), keys_count=len(yaml_data))
    else:
        logger.debug("config_file_not_found", searched_paths=[str(p) for p in candidates])

    known = {k: v for k, v in yaml_data.items() if k in Config.model_fields}
    unknown = sorted(set(yaml_data) - set(known))
    if unknown:
        logger.warning("config_unknown_keys", keys=unknown)

    try:
        config = Config(**known)
    except ValueError as e:
        raise ConfigurationError(
            f"Invalid configuration: {e}",
            context={"config_path": str(resolved) if resolved else None},
        ) from e

    if validate:
        config.validate_config()

    logger.debug(
        "config_loaded",
        vault_path=str(config.vault_path),
        snapshot_path=str(config.get_snapshot_path()),
    )
    return config


def get_config() -> Config:
    """Get singleton config instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def set_config(config: Config) -> None:
    """Set singleton config instance (for testing)."""
    global _config
    _config = config


def reset_config() -> None:
    """Reset global config instance (for testing only)."""
    global _config
    _config = None


__all__ = ["Config", "get_config", "load_config", "reset_config", "set_config"]
