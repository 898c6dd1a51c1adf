from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

UnitSystem = Literal["us", "si", "ca", "uk2"]


class WeatherCondition(str, Enum):
    """Provider-agnostic weather states understood by the overlay renderer."""

    SUNNY = "sunny"
    CLEAR_NIGHT = "clear-night"
    RAINY = "rainy"
    SNOWY = "snowy"
    WINDY = "windy"
    FOGGY = "fog"
    CLOUDY = "cloudy"
    PARTLY_CLOUDY = "partlycloudy"
    PARTLY_CLOUDY_NIGHT = "partlycloudy-night"
    HAIL = "hail"
    LIGHTNING = "lightning"
    EXCEPTIONAL = "exceptional"
    ALL = "all"


class ProviderConfig(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    api_key: str = ""
    latitude: float = Field(default=0, ge=-90, le=90)
    longitude: float = Field(default=0, ge=-180, le=180)
    units: UnitSystem | None = "us"

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, value: str) -> str:
        return value.strip()


class CurrentWeather(BaseModel):
    model_config = ConfigDict(extra="ignore")

    temperature: float
    feels_like: float
    condition: str
    condition_unified: WeatherCondition
    icon: str
    humidity: float
    pressure: float
    wind_speed: float
    wind_gust: float | None = None
    wind_bearing: float
    cloud_cover: float
    uv_index: float
    visibility: float


class DailyWeather(BaseModel):
    model_config = ConfigDict(extra="ignore")

    date: date
    temperature_max: float
    temperature_min: float
    condition: str
    condition_unified: WeatherCondition
    icon: str
    humidity: float
    pressure: float
    wind_speed: float
    wind_gust: float | None = None
    wind_bearing: float
    cloud_cover: float
    uv_index: float


class WeatherLocation(BaseModel):
    model_config = ConfigDict(extra="ignore")

    latitude: float
    longitude: float
    timezone: str


class WeatherData(BaseModel):
    model_config = ConfigDict(extra="ignore")

    current: CurrentWeather
    daily: list[DailyWeather] = Field(default_factory=list, max_length=7)
    location: WeatherLocation
    units: str
