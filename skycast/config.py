from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # App
    app_name: str = "skycast"
    log_level: str = "INFO"

    # Provider
    openweather_api_key: str
    openweather_base_url: str = "https://api.openweathermap.org/data/2.5"
    openweather_icon_url_template: str = "https://openweathermap.org/img/wn/{icon}@2x.png"
    request_timeout_seconds: float = 10.0

    # Normalization / display
    forecast_limit: int = 5
    history_max_entries: int = 15
    # "auto": m/s for metric requests, mph for imperial ones
    wind_source_unit: Literal["auto", "m/s", "mph"] = "auto"

    # Redis
    redis_url: str = "redis://localhost:6379/0"

    # Cache tuning
    cache_ttl_current_seconds: int = 120
    cache_ttl_forecast_seconds: int = 900
    refresh_lock_ttl_ms: int = 10_000


settings = Settings()
