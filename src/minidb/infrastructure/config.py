"""Configuration management for the record store."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StoreConfig(BaseModel):
    """Store and persistence configuration."""

    data_dir: Path = Field(default=Path("./data"), description="Directory holding table files")
    indent: int = Field(default=2, ge=0, le=8, description="JSON indentation for table files")
    atomic_writes: bool = Field(
        default=False, description="Write via temp file + rename instead of overwriting in place"
    )
    best_effort: bool = Field(
        default=False, description="Continue past per-table failures during save/load"
    )
    missing_table_policy: Literal["ignore", "raise"] = Field(
        default="ignore", description="What insert does when the table does not exist"
    )
    strict_directory: bool = Field(
        default=False, description="Fail construction if the data directory cannot be created"
    )


class ObservabilityConfig(BaseModel):
    """Observability configuration."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level"
    )
    log_format: Literal["json", "console"] = Field(default="json", description="Log format")
    otel_endpoint: str | None = Field(
        default=None, description="OpenTelemetry collector endpoint"
    )
    otel_service_name: str = Field(default="minidb", description="Service name for tracing")
    otel_console_export: bool = Field(
        default=False, description="Also print finished spans to stdout"
    )


class Config(BaseSettings):
    """Main configuration for the record store."""

    model_config = SettingsConfigDict(
        env_prefix="MINIDB_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    store: StoreConfig = Field(default_factory=StoreConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache
def get_config() -> Config:
    """Get the global configuration instance."""
    return Config()
