"""Centralized configuration for looker using Pydantic Settings."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)


ENV_PREFIX = "LOOKER_"
SETTINGS_FILENAME = "settings.toml"

LogLevel = Literal["debug", "info", "warning", "error", "critical"]


def default_config_dir() -> Path:
    """Return ``$XDG_CONFIG_HOME/looker`` (``~/.config/looker`` when unset)."""
    base = os.environ.get("XDG_CONFIG_HOME")
    root = Path(base).expanduser() if base else Path.home() / ".config"
    return root / "looker"


def resolve_config_dir(explicit: str | os.PathLike[str] | None = None) -> Path:
    """Pick the config directory: explicit value, then ``LOOKER_CONFIG_DIR``, then the default."""
    if explicit:
        return Path(explicit).expanduser()
    from_env = os.environ.get(f"{ENV_PREFIX}CONFIG_DIR")
    if from_env:
        return Path(from_env).expanduser()
    return default_config_dir()


class Settings(BaseSettings):
    """Strictly typed configuration for the indexer and the search CLI.

    Values come from (highest priority first) explicit keyword arguments,
    ``LOOKER_*`` environment variables, ``settings.toml`` in the config
    directory, and finally the defaults below.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    config_dir: Path = Field(default_factory=resolve_config_dir, description="Directory holding settings.toml")

    # Locations
    index_path: Path = Field(default=Path("index.json"), description="Where the index file is written and read")
    data_path: Path = Field(default=Path("."), description="Root directory of the document collection")

    # Indexing
    recompute_norms: bool = Field(
        default=False,
        description="Recompute document norms against the final idf table after indexing",
    )

    # Output
    result_limit: int = Field(default=10, ge=1, description="Maximum number of results displayed")
    color: bool = Field(default=True, description="Colorize terminal output")

    # Logging
    log_level: LogLevel = Field(default="warning", description="Logging level")
    log_json: bool = Field(default=False, description="Emit structured JSON logs")

    @field_validator("log_level", mode="before")
    @classmethod
    def _lowercase_log_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        init_kwargs = getattr(init_settings, "init_kwargs", {})
        toml_file = resolve_config_dir(init_kwargs.get("config_dir")) / SETTINGS_FILENAME
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
        )

    @classmethod
    def load(cls, config_dir: str | os.PathLike[str] | None = None, **overrides: Any) -> Settings:
        """Build settings, reading ``settings.toml`` from ``config_dir`` when given.

        ``None`` overrides are dropped so unset CLI flags fall through to the
        environment and the config file.
        """
        values = {key: value for key, value in overrides.items() if value is not None}
        if config_dir is not None:
            values["config_dir"] = Path(config_dir)
        return cls(**values)

    @property
    def settings_file(self) -> Path:
        return self.config_dir / SETTINGS_FILENAME
