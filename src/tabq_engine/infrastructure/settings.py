"""Runtime configuration for :mod:`tabq_engine`.

Values are merged from (highest wins):

1. keyword arguments (`Settings(...)`, `Settings.load(...)`, CLI flags)
2. `TABQ_ENGINE_*` environment variables
3. a `.env` file in the working directory
4. a flat `settings.toml` in the working directory (keys are field names)
5. field defaults
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources import PydanticBaseSettingsSource, TomlConfigSettingsSource

from tabq_engine.columns.synonyms import SynonymTable
from tabq_engine.ops.preview import DEFAULT_PREVIEW_LIMIT
from tabq_engine.ops.shaping import DEFAULT_ROW_CAP

ENV_PREFIX = "TABQ_ENGINE_"
SETTINGS_FILE = "settings.toml"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, env_file=".env", extra="ignore")

    result_row_cap: int = Field(default=DEFAULT_ROW_CAP, ge=0, description="Rows returned by filter and sort.")
    preview_default_limit: int = Field(default=DEFAULT_PREVIEW_LIMIT, ge=0)
    synonyms: dict[str, list[str]] | None = Field(
        default=None,
        description="Canonical field -> aliases; replaces the built-in synonym table when set.",
    )

    log_format: Literal["text", "ndjson"] = "text"
    log_level: int = logging.INFO

    @field_validator("log_level", mode="before")
    @classmethod
    def _parse_log_level(cls, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError("log_level must be a level name or number")
        if isinstance(value, int):
            return value

        text = str(value).strip().upper() or "INFO"
        if text.isdigit():
            return int(text)
        level = logging.getLevelNamesMapping().get(text)
        if level is None:
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    @field_validator("log_format", mode="before")
    @classmethod
    def _parse_log_format(cls, value: Any) -> Any:
        # "json" is accepted as a synonym for ndjson
        if isinstance(value, str):
            value = value.strip().lower()
            return "ndjson" if value == "json" else value
        return value

    @field_validator("synonyms", mode="before")
    @classmethod
    def _parse_synonyms(cls, value: Any) -> Any:
        if isinstance(value, str):
            return json.loads(value) if value.strip() else None
        return value

    def synonym_table(self) -> SynonymTable:
        """Synonym table in effect; raises ``ConfigError`` for a malformed override."""
        if self.synonyms is None:
            return SynonymTable.default()
        return SynonymTable.from_mapping(self.synonyms)

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
        toml_file = init_kwargs.get("_settings_file") or Path.cwd() / SETTINGS_FILE
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            file_secret_settings,
        )

    @classmethod
    def load(cls, *, cwd: Path | None = None, **overrides: Any) -> "Settings":
        """Load settings with `settings.toml` and `.env` taken from ``cwd``."""
        root = (cwd or Path.cwd()).expanduser().resolve()
        return cls(_settings_file=root / SETTINGS_FILE, _env_file=root / ".env", **overrides)


__all__ = ["ENV_PREFIX", "SETTINGS_FILE", "Settings"]
