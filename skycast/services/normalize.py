"""Turn raw OpenWeatherMap bodies into CurrentWeather / ForecastEntry records."""
import time
from typing import Callable, List

from skycast.models import CurrentWeather, ForecastEntry
from skycast.services.convert import celsius_fahrenheit, to_double, to_long
from skycast.services.extract import (
    extract_array_items,
    extract_first_array_field,
    extract_nested_number,
    extract_number,
    extract_string,
)

DEFAULT_FORECAST_LIMIT = 5


def normalize_current(doc: str, units: str, now: Callable[[], float] = time.time) -> CurrentWeather:
    """
    Build a CurrentWeather from a 200 response body of the /weather endpoint.

    `units` is the unit system the request was made with; the single `main.temp`
    reading is interpreted in it and both Celsius and Fahrenheit are derived.
    Missing fields fall back to "" / 0, and `dt` falls back to `now()`.
    """
    temp = to_double(extract_nested_number(doc, "main", "temp"), 0.0)
    temp_c, temp_f = celsius_fahrenheit(temp, units)

    return CurrentWeather(
        city_name=extract_string(doc, "name"),
        timestamp=to_long(extract_number(doc, "dt"), int(now())),
        sunrise=to_long(extract_nested_number(doc, "sys", "sunrise"), 0),
        sunset=to_long(extract_nested_number(doc, "sys", "sunset"), 0),
        temp_c=temp_c,
        temp_f=temp_f,
        humidity=to_long(extract_nested_number(doc, "main", "humidity"), 0),
        wind_speed=to_double(extract_nested_number(doc, "wind", "speed"), 0.0),
        units=units,
        description=extract_first_array_field(doc, "weather", "description"),
        icon=extract_first_array_field(doc, "weather", "icon"),
    )


def normalize_forecast(doc: str, units: str, limit: int = DEFAULT_FORECAST_LIMIT) -> List[ForecastEntry]:
    """First `limit` items of the forecast "list" array, in source order."""
    entries: List[ForecastEntry] = []
    if limit <= 0:
        return entries

    for item in extract_array_items(doc, "list"):
        if len(entries) >= limit:
            break
        temp = to_double(extract_nested_number(item, "main", "temp"), 0.0)
        temp_c, temp_f = celsius_fahrenheit(temp, units)
        entries.append(
            ForecastEntry(
                timestamp=to_long(extract_number(item, "dt"), 0),
                temp_c=temp_c,
                temp_f=temp_f,
                description=extract_first_array_field(item, "weather", "description"),
                icon=extract_first_array_field(item, "weather", "icon"),
            )
        )
    return entries


def error_message(body: str, status_code: int, label: str = "") -> str:
    """Readable failure text for a non-200 response."""
    msg = extract_string(body or "", "message")
    if not msg:
        suffix = f" ({label})" if label else ""
        msg = f"HTTP {status_code} returned from API{suffix}."
    return f"API error: {msg}"
