from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "GeoMirror True Size Comparator"
    debug: bool = False
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:5173"]
    log_level: str = "INFO"

    identity_epsilon_deg: float = 1e-4  # rotations below this are a no-op
    close_tolerance_deg: float = 1e-7  # snap an almost-closed ring shut
    max_shape_extent_deg: float = 5.0  # beyond this the flat rotation drifts
    frame_interval_s: float = 1 / 60  # at most one recompute per frame

    # (lon, lat) view centers the two maps open on
    default_source_center: tuple[float, float] = (-122.4194, 37.7749)  # San Francisco
    default_target_center: tuple[float, float] = (-74.006, 40.7128)  # New York

    model_config = SettingsConfigDict(env_prefix="GEOMIRROR_")


settings = Settings()
