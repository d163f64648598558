import asyncio
import logging
from typing import Awaitable, Callable, List, Tuple

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import JSONResponse

from skycast.config import settings
from skycast.models import (
    CacheInfo,
    CurrentDisplay,
    CurrentWeather,
    CurrentWeatherResponse,
    ForecastDisplay,
    ForecastEntry,
    ForecastResponse,
    HistoryItem,
    WeatherReport,
)
from skycast.services.cache import RedisCache, cache_key
from skycast.services.display import (
    FORECAST_TS_FORMAT,
    capitalize,
    format_temperature,
    format_timestamp,
    format_wind,
    icon_url,
    sky_phase,
)
from skycast.services.history import SearchHistory, city_from_label
from skycast.services.normalize import normalize_current, normalize_forecast
from skycast.services.openweather import FetchError, OpenWeatherClient

logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name)

cache = RedisCache(settings.redis_url)
ow = OpenWeatherClient(
    settings.openweather_base_url,
    settings.openweather_api_key,
    timeout_seconds=settings.request_timeout_seconds,
)
history = SearchHistory(max_entries=settings.history_max_entries)


@app.get("/health")
def health():
    return {"status": "ok", "service": settings.app_name}


@app.get("/")
def root():
    return JSONResponse({"service": settings.app_name, "docs": "/docs"})


# ── Weather endpoints ────────────────────────────────────────────────────────

@app.get("/weather/current", response_model=CurrentWeatherResponse)
async def current_weather(
    city: str = Query(..., min_length=1, description="City name, e.g. 'London'"),
    units: str = Query("metric", pattern="^(metric|imperial)$"),
):
    current, cache_info = await _fetch_current(city, units)
    history.add(current)
    return CurrentWeatherResponse(city=city, units=units, current=current, cache=cache_info)  # type: ignore[arg-type]


@app.get("/weather/forecast", response_model=ForecastResponse)
async def forecast(
    city: str = Query(..., min_length=1, description="City name, e.g. 'London'"),
    units: str = Query("metric", pattern="^(metric|imperial)$"),
    limit: int = Query(settings.forecast_limit, ge=1, le=40),
):
    entries, cache_info = await _fetch_forecast(city, units, limit)
    return ForecastResponse(city=city, units=units, forecast=entries, cache=cache_info)  # type: ignore[arg-type]


@app.get("/weather", response_model=WeatherReport)
async def weather_report(
    city: str = Query(..., min_length=1, description="City name, e.g. 'London'"),
    units: str = Query("metric", pattern="^(metric|imperial)$"),
    wind_unit: str = Query("m/s", pattern="^(m/s|mph)$"),
    limit: int = Query(settings.forecast_limit, ge=1, le=40),
):
    results = await asyncio.gather(
        _fetch_current(city, units),
        _fetch_forecast(city, units, limit),
        return_exceptions=True,
    )
    for result in results:
        if isinstance(result, BaseException):
            raise result
    (current, cache_info), (entries, _) = results
    history.add(current)
    return WeatherReport(
        city=city,
        units=units,  # type: ignore[arg-type]
        wind_unit=wind_unit,  # type: ignore[arg-type]
        current=current,
        forecast=entries,
        display=_current_display(current, units, wind_unit),
        forecast_display=[_forecast_display(e, units) for e in entries],
        cache=cache_info,
    )


@app.get("/history", response_model=List[HistoryItem])
def search_history():
    return [
        HistoryItem(label=label, city=city_from_label(label), weather=weather)
        for label, weather in history.items()
    ]


# ── Shared helpers ───────────────────────────────────────────────────────────

async def _fetch_current(city: str, units: str) -> Tuple[CurrentWeather, CacheInfo]:
    body, cache_info = await _cached_body(
        "current", city, units, ow.get_current_body, settings.cache_ttl_current_seconds
    )
    return normalize_current(body, units), cache_info


async def _fetch_forecast(city: str, units: str, limit: int) -> Tuple[List[ForecastEntry], CacheInfo]:
    body, cache_info = await _cached_body(
        "forecast", city, units, ow.get_forecast_body, settings.cache_ttl_forecast_seconds
    )
    return normalize_forecast(body, units, limit), cache_info


async def _cached_body(
    kind: str,
    city: str,
    units: str,
    fetcher: Callable[[str, str], Awaitable[str]],
    ttl_seconds: int,
) -> Tuple[str, CacheInfo]:
    """Raw response body from cache, or from upstream under a per-request lock."""
    key = cache_key(kind, units, city)
    lock_key = f"lock:{key}"

    cached = cache.get_body(key)
    if cached.hit and cached.value is not None:
        return cached.value, CacheInfo(hit=True, age_seconds=cached.age_seconds)

    have_lock = cache.acquire_lock(lock_key, ttl_ms=settings.refresh_lock_ttl_ms)
    try:
        if not have_lock:
            raise HTTPException(status_code=503, detail=f"{kind.capitalize()} refresh in progress, try again")

        body = await fetcher(city, units)
        cache.set_body(key, body, ttl_seconds=ttl_seconds)
        return body, CacheInfo(hit=False, age_seconds=None)
    except HTTPException:
        raise
    except FetchError as exc:
        status = 404 if exc.status_code == 404 else 502
        raise HTTPException(status_code=status, detail=exc.message)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    finally:
        if have_lock:
            cache.release_lock(lock_key)


def _current_display(current: CurrentWeather, units: str, wind_unit: str) -> CurrentDisplay:
    return CurrentDisplay(
        title=f"{current.city_name}  (as of {format_timestamp(current.timestamp)})",
        temperature=format_temperature(current, units),
        condition=capitalize(current.description),
        humidity=f"{current.humidity} %",
        wind=format_wind(current, wind_unit, settings.wind_source_unit),
        icon_url=icon_url(current.icon, settings.openweather_icon_url_template),
        sky_phase=sky_phase(current),
    )


def _forecast_display(entry: ForecastEntry, units: str) -> ForecastDisplay:
    return ForecastDisplay(
        time=format_timestamp(entry.timestamp, FORECAST_TS_FORMAT),
        temperature=format_temperature(entry, units),
        description=capitalize(entry.description),
        icon_url=icon_url(entry.icon, settings.openweather_icon_url_template),
    )
