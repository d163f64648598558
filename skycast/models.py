from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field


Units = Literal["metric", "imperial"]
WindUnit = Literal["m/s", "mph"]


class CurrentWeather(BaseModel):
    """Normalized current conditions. Both temperatures come from one reading."""

    model_config = ConfigDict(frozen=True)

    city_name: str = ""
    timestamp: int
    temp_c: float = 0.0
    temp_f: float = 32.0
    humidity: int = 0
    # raw upstream value; its unit depends on `units` (see services.convert.wind_source_unit)
    wind_speed: float = 0.0
    units: Units = "metric"
    description: str = ""
    icon: str = ""
    sunrise: int = 0
    sunset: int = 0


class ForecastEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    timestamp: int = 0
    temp_c: float = 0.0
    temp_f: float = 32.0
    description: str = ""
    icon: str = ""


class CacheInfo(BaseModel):
    hit: bool
    age_seconds: Optional[int] = None


class CurrentWeatherResponse(BaseModel):
    city: str
    units: Units
    current: CurrentWeather
    cache: CacheInfo


class ForecastResponse(BaseModel):
    city: str
    units: Units
    forecast: List[ForecastEntry] = Field(default_factory=list)
    cache: CacheInfo


class CurrentDisplay(BaseModel):
    title: str
    temperature: str
    condition: str
    humidity: str
    wind: str
    icon_url: str = ""
    sky_phase: str


class ForecastDisplay(BaseModel):
    time: str
    temperature: str
    description: str
    icon_url: str = ""


class WeatherReport(BaseModel):
    city: str
    units: Units
    wind_unit: WindUnit
    current: CurrentWeather
    forecast: List[ForecastEntry] = Field(default_factory=list)
    display: CurrentDisplay
    forecast_display: List[ForecastDisplay] = Field(default_factory=list)
    cache: CacheInfo


class HistoryItem(BaseModel):
    label: str
    city: str
    weather: CurrentWeather
