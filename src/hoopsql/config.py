"""⚙️ Configuration - Pydantic models for engine, loader and rendering settings."""

from __future__ import annotations

import codecs
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from hoopsql.errors import ConfigError

# String values that should be treated as null when loading text columns
DEFAULT_NULL_VALUES = [
    "", "NaN", "nan", "NAN", "NA", "na", "N/A", "n/a", "<NA>",
    "null", "NULL", "None", "none", "#N/A", "#NA", "-",
]


class EngineConfig(BaseModel):
    """DuckDB settings applied to every transient store."""

    threads: int = Field(default=1, ge=1, le=64)
    memory_limit: str = Field(default="1GB")
    preserve_insertion_order: bool = Field(default=True)

    def to_duckdb_settings(self) -> dict[str, str]:
        """Generate DuckDB SET statements."""
        return {
            "memory_limit": f"'{self.memory_limit}'",
            "threads": str(self.threads),
            "preserve_insertion_order": str(self.preserve_insertion_order).lower(),
            # Only registered datasets may be resolved as tables
            "python_enable_replacements": "false",
        }

    def to_connect_options(self) -> dict[str, object]:
        """Options that can only be fixed when a connection opens."""
        # Refuses file and URL scans such as FROM 'data.csv'
        return {"enable_external_access": False}


class LoaderConfig(BaseModel):
    """How delimited files are decoded, parsed and normalized."""

    target_encoding: str = Field(
        default="utf-8",
        description="Encoding every text value must be representable in",
    )
    source_encodings: list[str] = Field(
        default_factory=lambda: ["utf-8-sig", "cp1252", "latin-1"],
        min_length=1,
        description="Encodings tried in order when decoding input files",
    )
    delimiter: str = Field(default=",", min_length=1, max_length=1)
    null_values: list[str] = Field(default_factory=lambda: list(DEFAULT_NULL_VALUES))
    parse_numbers: bool = Field(
        default=True,
        description="Convert text columns holding only numbers ($, %, thousands separators) to numeric",
    )

    @field_validator("target_encoding")
    @classmethod
    def _known_encoding(cls, value: str) -> str:
        try:
            return codecs.lookup(value).name
        except LookupError as e:
            raise ValueError(f"Unknown encoding: {value}") from e

    @field_validator("source_encodings")
    @classmethod
    def _known_source_encodings(cls, values: list[str]) -> list[str]:
        for value in values:
            try:
                codecs.lookup(value)
            except LookupError as e:
                raise ValueError(f"Unknown encoding: {value}") from e
        return values


class RenderConfig(BaseModel):
    """Limits for HTML and console output."""

    max_rows: int = Field(default=500, ge=1, description="Rows rendered per HTML table")
    console_rows: int = Field(default=20, ge=1, description="Rows printed per console table")


class HoopsqlConfig(BaseModel):
    """Top-level configuration.

    Can be loaded from a YAML file or set programmatically::

        engine:
          threads: 2
        loader:
          target_encoding: ascii
    """

    engine: EngineConfig = Field(default_factory=EngineConfig)
    loader: LoaderConfig = Field(default_factory=LoaderConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)

    @classmethod
    def from_yaml(cls, path: Path | str) -> "HoopsqlConfig":
        """Load configuration from a YAML file."""
        path = Path(path)
        if not path.exists():
            raise ConfigError("Config file not found", {"path": str(path)})

        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML: {e}", {"path": str(path)}) from e

        if not isinstance(data, dict):
            raise ConfigError("Config file must contain a mapping", {"path": str(path)})

        try:
            return cls(**data.get("hoopsql", data))
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}", {"path": str(path)}) from e


class Settings(BaseSettings):
    """Environment-based settings."""

    model_config = SettingsConfigDict(env_prefix="HOOPSQL_", case_sensitive=False)

    config_file: Path | None = Field(default=None)
    log_level: str = Field(default="WARNING")


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings from environment."""
    return Settings()


def load_config(path: Path | str | None = None) -> HoopsqlConfig:
    """Resolve configuration from an explicit path, then ``HOOPSQL_CONFIG_FILE``."""
    if path is None:
        path = get_settings().config_file
    if path is None:
        return HoopsqlConfig()
    return HoopsqlConfig.from_yaml(path)
