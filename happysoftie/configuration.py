"""Mini README: Centralised configuration models and helpers for Happy Softie.

Structure:
    * DEFAULT_CATEGORY_COLORS - presentation colours for the expense categories.
    * HappySoftieSettings - Pydantic model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` to read environment variables (prefixed with
    ``HAPPYSOFTIE_``), locate the data directory that backs the snapshot
    store and tune the reporting windows. The configuration is cached so the
    cost of validation is incurred only once per process.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CATEGORY_COLORS: Dict[str, str] = {
    "Office Supplies": "#3B82F6",
    "Rent": "#8B5CF6",
    "Utilities": "#EC4899",
    "Salaries": "#F59E0B",
    "Marketing": "#10B981",
    "Equipment": "#6366F1",
    "Software": "#14B8A6",
    "Travel": "#F97316",
    "Other": "#94A3B8",
}
DEFAULT_FALLBACK_COLOR = "#94A3B8"


class HappySoftieSettings(BaseSettings):
    """Runtime configuration for the bookkeeping service."""

    model_config = SettingsConfigDict(
        env_prefix="HAPPYSOFTIE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    data_directory: Path = Field(
        Path("data"),
        description="Directory holding the persisted ledger snapshot.",
    )
    storage_key: str = Field(
        "happySoftieData",
        description="Key under which the serialised snapshot is stored.",
        min_length=1,
    )
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the HTTP service to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Default port the HTTP service exposes.",
        ge=1,
        le=65535,
    )
    log_level: str = Field("INFO", description="Root logging level.")
    dashboard_months: int = Field(
        6,
        description="Number of calendar months shown in the monthly series.",
        ge=1,
    )
    report_window_days: int = Field(
        30,
        description="Length of the default report range, ending today.",
        ge=0,
    )
    category_colors: Dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_CATEGORY_COLORS),
        description="Chart colour per expense category.",
    )
    default_category_color: str = Field(
        DEFAULT_FALLBACK_COLOR,
        description="Colour used for categories missing from ``category_colors``.",
    )

    @field_validator("data_directory", mode="before")
    @classmethod
    def _expand_path(cls, value: Optional[str | Path]) -> Path:
        """Ensure configured paths expand user directories and exist."""

        path = Path(value or "data").expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path


@lru_cache()
def get_settings() -> HappySoftieSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return HappySoftieSettings()
