from __future__ import annotations

import asyncio
import json
import logging
from datetime import date, datetime, timezone, tzinfo
from http.client import HTTPException
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.parse import quote, urlencode
from urllib.request import Request, urlopen
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from ...domain.models import (
    CurrentWeather,
    DailyWeather,
    ProviderConfig,
    WeatherCondition,
    WeatherData,
    WeatherLocation,
)
from .base import ConfigurationError, NetworkError, ParseError

LOGGER = logging.getLogger(__name__)

PIRATE_WEATHER_FORECAST_URL = "https://api.pirateweather.net/forecast"
DEFAULT_TIMEOUT_SECONDS = 10
DEFAULT_UNITS = "us"
MAX_DAILY_ENTRIES = 7
FETCH_FAILED_MESSAGE = "Failed to fetch Pirate Weather data"
UNKNOWN_CONDITION_TEXT = "Unknown"

ICON_BASE_URL = (
    "https://raw.githubusercontent.com/manifestinteractive/weather-underground-icons"
    "/master/dist/icons/white/png/64x64"
)

ICON_CONDITIONS = {
    "clear-day": WeatherCondition.SUNNY,
    "clear-night": WeatherCondition.CLEAR_NIGHT,
    "rain": WeatherCondition.RAINY,
    "snow": WeatherCondition.SNOWY,
    "sleet": WeatherCondition.SNOWY,
    "wind": WeatherCondition.WINDY,
    "fog": WeatherCondition.FOGGY,
    "cloudy": WeatherCondition.CLOUDY,
    "partly-cloudy-day": WeatherCondition.PARTLY_CLOUDY,
    "partly-cloudy-night": WeatherCondition.PARTLY_CLOUDY_NIGHT,
    "hail": WeatherCondition.HAIL,
    "thunderstorm": WeatherCondition.LIGHTNING,
    "tornado": WeatherCondition.EXCEPTIONAL,
}

ICON_FILES = {
    "clear-day": "clear.png",
    "clear-night": "nt_clear.png",
    "rain": "rain.png",
    "snow": "snow.png",
    "sleet": "sleet.png",
    "wind": "wind.png",
    "fog": "fog.png",
    "cloudy": "cloudy.png",
    "partly-cloudy-day": "partlycloudy.png",
    "partly-cloudy-night": "nt_partlycloudy.png",
    "hail": "sleet.png",
    "thunderstorm": "tstorms.png",
    "tornado": "tornado.png",
}
FALLBACK_ICON_FILE = "cloudy.png"

# us: Fahrenheit, mph / si: Celsius, m/s / ca: Celsius, km/h / uk2: Celsius, mph
UNITS_DESCRIPTIONS = {
    "us": "imperial",
    "si": "metric",
    "ca": "metric",
    "uk2": "hybrid",
}
FALLBACK_UNITS_DESCRIPTION = "imperial"


class _VendorModel(BaseModel):
    model_config = ConfigDict(extra="ignore", alias_generator=to_camel, populate_by_name=True)


class PirateWeatherCurrently(_VendorModel):
    time: int
    summary: str = ""
    icon: str = ""
    temperature: float
    apparent_temperature: float
    humidity: float
    pressure: float
    wind_speed: float
    wind_gust: float | None = None
    wind_bearing: float
    cloud_cover: float
    uv_index: float
    visibility: float


class PirateWeatherDaily(_VendorModel):
    time: int
    summary: str = ""
    icon: str = ""
    temperature_high: float | None = None
    temperature_low: float | None = None
    temperature_max: float | None = None
    temperature_min: float | None = None
    apparent_temperature_high: float | None = None
    apparent_temperature_low: float | None = None
    humidity: float
    pressure: float
    wind_speed: float
    wind_gust: float | None = None
    wind_bearing: float
    cloud_cover: float
    uv_index: float


class PirateWeatherDailyBlock(_VendorModel):
    summary: str = ""
    icon: str = ""
    data: list[PirateWeatherDaily] = Field(default_factory=list)


class PirateWeatherResponse(_VendorModel):
    latitude: float
    longitude: float
    timezone: str
    currently: PirateWeatherCurrently
    daily: PirateWeatherDailyBlock


def map_icon_to_condition(icon: str) -> WeatherCondition:
    return ICON_CONDITIONS.get(icon, WeatherCondition.ALL)


def get_icon_url(icon: str) -> str:
    return f"{ICON_BASE_URL}/{ICON_FILES.get(icon, FALLBACK_ICON_FILE)}"


def format_condition(summary: str | None) -> str:
    text = (summary or "").strip()
    return text or UNKNOWN_CONDITION_TEXT


def get_units_description(units: str | None) -> str:
    return UNITS_DESCRIPTIONS.get(units or "", FALLBACK_UNITS_DESCRIPTION)


def _to_percent(fraction: float) -> float:
    return fraction * 100


def _prefer_value(primary: float | None, fallback: float | None, *, field_name: str) -> float:
    """Pick primary unless it is missing or zero, then fall back to the legacy field."""
    value = primary if primary else fallback
    if value is None:
        value = primary
    if value is None:
        raise ValueError(f"Daily forecast entry is missing {field_name}")
    return value


def _resolve_timezone(name: str) -> tzinfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        LOGGER.warning("Unknown Pirate Weather timezone '%s', using UTC for daily dates", name)
        return timezone.utc


def _to_local_date(epoch_seconds: int, tz: tzinfo) -> date:
    return datetime.fromtimestamp(epoch_seconds, tz=timezone.utc).astimezone(tz).date()


def _wrap_message(exc: BaseException) -> str:
    detail = str(exc).strip()
    if detail:
        return f"{FETCH_FAILED_MESSAGE}: {detail}"
    return FETCH_FAILED_MESSAGE


def _read_response_body(url: str, *, timeout: float) -> bytes:
    request = Request(url, method="GET")
    try:
        with urlopen(request, timeout=timeout) as response:
            return response.read()
    except HTTPError as exc:
        reason = str(exc.reason or "").strip()
        raise NetworkError(
            f"{FETCH_FAILED_MESSAGE}: Pirate Weather API error: {exc.code} {reason}".rstrip(),
            status_code=exc.code,
            reason=reason,
        ) from exc
    except (URLError, TimeoutError, OSError, HTTPException) as exc:
        raise NetworkError(_wrap_message(exc)) from exc


def _decode_payload(body: bytes) -> PirateWeatherResponse:
    try:
        payload: Any = json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ParseError(_wrap_message(exc)) from exc

    if not isinstance(payload, dict):
        raise ParseError(f"{FETCH_FAILED_MESSAGE}: Unexpected Pirate Weather response shape")

    try:
        return PirateWeatherResponse.model_validate(payload)
    except ValidationError as exc:
        raise ParseError(_wrap_message(exc)) from exc


class PirateWeatherProvider:
    id = "pirateweather"
    name = "Pirate Weather"

    def __init__(
        self,
        *,
        base_url: str = PIRATE_WEATHER_FORECAST_URL,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds

    def get_default_config(self) -> ProviderConfig:
        return ProviderConfig(api_key="", latitude=0, longitude=0, units=DEFAULT_UNITS)

    def build_url(self, config: ProviderConfig) -> str:
        units = config.units or DEFAULT_UNITS
        api_key = quote(config.api_key, safe="")
        query = urlencode({"units": units})
        return f"{self._base_url}/{api_key}/{config.latitude},{config.longitude}?{query}"

    def fetch_weather(self, config: ProviderConfig) -> WeatherData:
        if not config.api_key:
            raise ConfigurationError("Pirate Weather API key is required")

        # Zero is rejected along with missing values.
        if not config.latitude or not config.longitude:
            raise ConfigurationError("Latitude and longitude are required")

        units = config.units or DEFAULT_UNITS
        LOGGER.debug(
            "Requesting Pirate Weather forecast for %s,%s (units=%s)",
            config.latitude,
            config.longitude,
            units,
        )

        try:
            body = _read_response_body(self.build_url(config), timeout=self._timeout_seconds)
            response = _decode_payload(body)
            return self.transform_response(response, units)
        except (ValueError, TypeError, OverflowError, OSError) as exc:
            raise ParseError(_wrap_message(exc)) from exc

    async def fetch_weather_async(self, config: ProviderConfig) -> WeatherData:
        return await asyncio.to_thread(self.fetch_weather, config)

    def transform_response(self, data: PirateWeatherResponse, units: str) -> WeatherData:
        currently = data.currently
        local_tz = _resolve_timezone(data.timezone)

        return WeatherData(
            current=CurrentWeather(
                temperature=currently.temperature,
                feels_like=currently.apparent_temperature,
                condition=format_condition(currently.summary),
                condition_unified=map_icon_to_condition(currently.icon),
                icon=get_icon_url(currently.icon),
                humidity=_to_percent(currently.humidity),
                pressure=currently.pressure,
                wind_speed=currently.wind_speed,
                wind_gust=currently.wind_gust,
                wind_bearing=currently.wind_bearing,
                cloud_cover=_to_percent(currently.cloud_cover),
                uv_index=currently.uv_index,
                visibility=currently.visibility,
            ),
            daily=[
                self._transform_daily(day, local_tz)
                for day in data.daily.data[:MAX_DAILY_ENTRIES]
            ],
            location=WeatherLocation(
                latitude=data.latitude,
                longitude=data.longitude,
                timezone=data.timezone,
            ),
            units=get_units_description(units),
        )

    @staticmethod
    def _transform_daily(day: PirateWeatherDaily, local_tz: tzinfo) -> DailyWeather:
        return DailyWeather(
            date=_to_local_date(day.time, local_tz),
            temperature_max=_prefer_value(
                day.temperature_max, day.temperature_high, field_name="temperatureMax"
            ),
            temperature_min=_prefer_value(
                day.temperature_min, day.temperature_low, field_name="temperatureMin"
            ),
            condition=format_condition(day.summary),
            condition_unified=map_icon_to_condition(day.icon),
            icon=get_icon_url(day.icon),
            humidity=_to_percent(day.humidity),
            pressure=day.pressure,
            wind_speed=day.wind_speed,
            wind_gust=day.wind_gust,
            wind_bearing=day.wind_bearing,
            cloud_cover=_to_percent(day.cloud_cover),
            uv_index=day.uv_index,
        )
