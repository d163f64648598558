"""Presentation helpers: the unit toggles work on stored records, no refetch."""
import time
from datetime import datetime, timezone
from typing import Optional, Union

from skycast.models import CurrentWeather, ForecastEntry
from skycast.services.convert import convert_wind, wind_source_unit

TITLE_TS_FORMAT = "%Y-%m-%d %H:%M:%S"
FORECAST_TS_FORMAT = "%m-%d %H:%M"


def capitalize(text: Optional[str]) -> str:
    if not text or not text.strip():
        return ""
    return text[0].upper() + text[1:]


def format_timestamp(ts: int, fmt: str = TITLE_TS_FORMAT) -> str:
    try:
        return datetime.fromtimestamp(ts, tz=timezone.utc).strftime(fmt)
    except (OverflowError, OSError, ValueError):
        # out-of-range upstream timestamp
        return ""


def format_temperature(record: Union[CurrentWeather, ForecastEntry], show_units: str) -> str:
    if show_units == "imperial":
        return f"{record.temp_f:.1f} °F"
    return f"{record.temp_c:.1f} °C"


def display_wind(weather: CurrentWeather, target: str, source_override: str = "auto") -> float:
    source = wind_source_unit(weather.units, source_override)
    return convert_wind(weather.wind_speed, source, target)


def format_wind(weather: CurrentWeather, target: str, source_override: str = "auto") -> str:
    return f"{display_wind(weather, target, source_override):.2f} {target}"


def icon_url(icon: str, template: str) -> str:
    if not icon or not icon.strip():
        return ""
    return template.format(icon=icon)


def sky_phase(weather: CurrentWeather, now: Optional[float] = None) -> str:
    """
    "day" or "night" from sunrise/sunset when both are known.

    Without them, falls back to the UTC hour: 06-17 day, 18-19 dusk, else night.
    """
    if now is None:
        now = time.time()
    if weather.sunrise > 0 and weather.sunset > 0:
        return "day" if weather.sunrise <= now < weather.sunset else "night"
    hour = datetime.fromtimestamp(now, tz=timezone.utc).hour
    if 6 <= hour < 18:
        return "day"
    if 18 <= hour < 20:
        return "dusk"
    return "night"
