"""Application configuration and settings management."""

from pathlib import Path
from typing import Any

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="DEPOT_SALES_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Depot Sales Manager API"
    api_prefix: str = "/api"
    data_root: Path = Field(default=Path("data"), description="Root directory for state and export files.")
    storage_key: str = Field(
        default="depot_sales.v1",
        description="Key of the persisted store blob; auxiliary keys are derived from it.",
    )
    company_name: str = Field(default="SRIVEN ENTERPRISES", description="First heading row of every report.")
    report_title_template: str = Field(
        default="Claim Report From - {depot} for {month_name} {year}",
        description="Second heading row; formatted with depot, month_name and year.",
    )
    years_back: int = Field(default=5, ge=0, description="Oldest selectable year relative to the current year.")
    years_ahead: int = Field(default=2, ge=0, description="Newest selectable year relative to the current year.")
    log_level: str = Field(default="INFO")
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("data_root", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
