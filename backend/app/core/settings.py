from __future__ import annotations

from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TRANSITLINK_",
        case_sensitive=False,
    )

    # Google Maps Platform (Places text search + Routes transit directions)
    google_maps_api_key: SecretStr | None = None
    places_search_url: str = "https://places.googleapis.com/v1/places:searchText"
    routes_compute_url: str = (
        "https://routes.googleapis.com/directions/v2:computeRoutes"
    )
    maps_timeout_s: float = 10.0
    maps_max_retries: int = 3
    maps_backoff_base_s: float = 0.5

    # Route links: "{from}-{to}" geohashes, 6 symbols each.
    route_geohash_precision: int = 6

    cors_allow_origin: str = "http://localhost:3000"
    cors_allow_credentials: bool = True


@lru_cache
def get_settings() -> Settings:
    return Settings()
