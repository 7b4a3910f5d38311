"""Application configuration and settings management."""

from typing import Any, Literal, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="TREEROUTE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "TreeRoute API"
    api_prefix: str = "/api"
    log_level: str = Field(default="INFO", description="Root log level applied by configure_logging().")

    # External optimization service (OpenRouteService)
    ors_endpoint: str = Field(
        default="https://api.openrouteservice.org/optimization",
        description="Full URL of the route optimization endpoint.",
    )
    ors_api_key: Optional[str] = Field(
        default=None,
        description="Bearer token for the optimization service. Never commit this value.",
    )
    ors_timeout_seconds: float = Field(default=30.0, gt=0.0)
    ors_profile: str = Field(default="driving-car", description="Vehicle profile sent with every request.")

    # Route planning
    route_strategy: Literal["nearest_neighbor", "openrouteservice"] = Field(
        default="nearest_neighbor",
        description="Planner used to order the selected assets.",
    )
    depot_longitude: float = Field(default=5.453487298268298)
    depot_latitude: float = Field(default=51.45081456926727)
    max_route_assets: int = Field(default=10, ge=1)
    maps_base_url: str = Field(
        default="https://www.google.com/maps",
        description="Base URL of the map service used for shareable direction links.",
    )
    startup_attributes: tuple[str, ...] = Field(
        default=("waterLevel", "soilTemperature"),
        description="Attributes optimized for tree assets when the application starts.",
    )

    # Local demo data
    seed_demo_assets: bool = Field(
        default=True,
        description="Populate the in-memory repository with demo trees when Supabase is not configured.",
    )
    seed_asset_count: int = Field(default=100, ge=0)

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

    @field_validator("maps_base_url", "ors_endpoint", mode="after")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("frontend_allowed_origins", "startup_attributes", mode="before")
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


settings = Settings()
