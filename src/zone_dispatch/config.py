"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Literal, Optional

import json
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="ZD_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Zone Dispatch API"
    api_prefix: str = "/api"
    data_root: Path = Field(default=Path("data"), description="Root directory for static data files.")
    zones_file: Optional[Path] = Field(
        default=None,
        description="Zone records used when Supabase is not configured (defaults to data_root/zones.json).",
    )
    restaurants_file: Optional[Path] = Field(
        default=None,
        description="Restaurant records used when Supabase is not configured (defaults to data_root/restaurants.json).",
    )
    default_radius_km: float = Field(
        default=70.0,
        gt=0.0,
        description="Search radius for delivery-partner zone discovery.",
    )
    detection_buffer_km: float = Field(
        default=0.1,
        ge=0.0,
        description="Centroid buffer applied when a user location falls outside every zone.",
    )
    zone_overlap_policy: Literal["first_match", "smallest_area"] = Field(
        default="first_match",
        description="How a point contained by several overlapping zones is resolved.",
    )
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    # Supabase configuration
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key for backend operations.",
    )
    zones_table: str = "zones"
    restaurants_table: str = "restaurants"
    zones_order_by: str = Field(
        default="created_at",
        description="Column ordering zone rows; overlap and tie resolution follow this order.",
    )
    restaurants_order_by: str = Field(
        default="created_at",
        description="Column ordering restaurant rows; equal-distance ties follow this order.",
    )

    @field_validator("data_root", "zones_file", "restaurants_file", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Optional[Path]:
        if value is None or value == "":
            return None
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
            # Try JSON first
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

    @model_validator(mode="after")
    def _resolve_data_files(self) -> "Settings":
        self.data_root = self.data_root.expanduser().resolve()
        if self.zones_file is None:
            self.zones_file = self.data_root / "zones.json"
        if self.restaurants_file is None:
            self.restaurants_file = self.data_root / "restaurants.json"
        return self


settings = Settings()
