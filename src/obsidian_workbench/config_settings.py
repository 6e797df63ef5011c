"""Settings model for obsidian-workbench."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError

SNAPSHOT_FILE_NAME = "workbenches.json"
_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "WARN", "ERROR", "CRITICAL"}


class Config(BaseSettings):
    """Service configuration using pydantic-settings.

    Values come from (highest first) explicit kwargs / config.yaml, then
    OBSIDIAN_WORKBENCH_* environment variables, then .env.
    """

    model_config = SettingsConfigDict(
        env_prefix="OBSIDIAN_WORKBENCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
    )

    vault_path: Path = Field(default=Path(), description="Path to Obsidian vault")

    # Snapshot and logs live outside the vault
    data_dir: Path = Field(
        default=Path("~/.obsidian-workbench"),
        description="Directory for the snapshot file and logs",
    )
    snapshot_path: Path | None = Field(
        default=None,
        description="Snapshot file; relative paths resolve against data_dir",
    )

    log_level: str = Field(default="INFO", description="Console log level")
    log_dir: Path = Field(
        default=Path("logs"), description="Log directory, relative to data_dir"
    )

    assign_identifiers: bool = Field(
        default=True,
        description="Stamp a block id on headings when adding them as cards",
    )
    identifier_prefix: str = Field(
        default="wb",
        pattern=r"^[A-Za-z0-9]+$",
        description="Prefix for generated block ids",
    )

    @field_validator("vault_path", "data_dir", mode="before")
    @classmethod
    def parse_dir(cls, v: Any) -> Path:
        """Convert string to an absolute Path."""
        if v is None or v == "":
            return Path.cwd()
        if isinstance(v, (str, Path)):
            return Path(v).expanduser().resolve()
        msg = f"Path field must be string or Path, got {type(v).__name__}"
        raise ValueError(msg)

    @field_validator("snapshot_path", "log_dir", mode="before")
    @classmethod
    def parse_path(cls, v: Any, info: Any) -> Path | None:
        if v is None or v == "":
            return Path("logs") if info.field_name == "log_dir" else None
        if isinstance(v, (str, Path)):
            return Path(v).expanduser()
        msg = f"Path field must be string or Path, got {type(v).__name__}"
        raise ValueError(msg)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in _VALID_LOG_LEVELS:
            msg = f"log_level must be one of {sorted(_VALID_LOG_LEVELS)}, got {v!r}"
            raise ValueError(msg)
        return level

    def validate_config(self) -> Config:
        """Check values that depend on the filesystem."""
        if not self.vault_path.exists():
            raise ConfigurationError(
                f"Vault path does not exist: {self.vault_path}",
                suggestion="Set vault_path in workbench.yaml or OBSIDIAN_WORKBENCH_VAULT_PATH",
                context={"vault_path": str(self.vault_path)},
            )
        if not self.vault_path.is_dir():
            raise ConfigurationError(
                f"Vault path is not a directory: {self.vault_path}",
                context={"vault_path": str(self.vault_path)},
            )
        return self

    def get_data_path(self, relative: str | Path) -> Path:
        """Resolve a path against data_dir unless it is already absolute."""
        path = Path(relative).expanduser()
        return path if path.is_absolute() else self.data_dir / path

    def get_snapshot_path(self) -> Path:
        return self.get_data_path(self.snapshot_path or SNAPSHOT_FILE_NAME)

    def get_log_dir(self) -> Path:
        return self.get_data_path(self.log_dir)


__all__ = ["Config", "SNAPSHOT_FILE_NAME"]
