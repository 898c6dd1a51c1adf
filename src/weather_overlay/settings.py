from __future__ import annotations

from pathlib import Path
from typing import Literal
from urllib.parse import urlparse

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .adapters.weather.pirate_weather import DEFAULT_TIMEOUT_SECONDS, PIRATE_WEATHER_FORECAST_URL
from .domain.models import UnitSystem

PROJECT_ROOT = Path(__file__).resolve().parents[2]

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class WeatherSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    provider: Literal["pirateweather"] = "pirateweather"
    api_key: str = ""
    latitude: float = 0
    longitude: float = 0
    units: UnitSystem = "us"
    base_url: str = PIRATE_WEATHER_FORECAST_URL
    timeout_seconds: float = Field(default=DEFAULT_TIMEOUT_SECONDS, ge=1, le=60)

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, value: str) -> str:
        return value.strip()

    @field_validator("latitude")
    @classmethod
    def validate_latitude(cls, value: float) -> float:
        if not -90 <= value <= 90:
            raise ValueError("weather.latitude must be between -90 and 90")
        return value

    @field_validator("longitude")
    @classmethod
    def validate_longitude(cls, value: float) -> float:
        if not -180 <= value <= 180:
            raise ValueError("weather.longitude must be between -180 and 180")
        return value

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, value: str) -> str:
        text = value.strip().rstrip("/")
        parsed = urlparse(text)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("weather.base_url must be an absolute http(s) URL")
        return text


class WeatherOverlayYamlSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    weather: WeatherSettings = Field(default_factory=WeatherSettings)


class EnvSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    weather_overlay_config_path: Path = Path("config/weather.yaml")
    weather_overlay_log_level: LogLevel = "INFO"
    pirate_weather_api_key: str = ""

    @field_validator("weather_overlay_log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value


class AppSettings(BaseModel):
    env: EnvSettings
    yaml: WeatherOverlayYamlSettings
    config_path: Path


def _resolve_project_path(path: Path) -> Path:
    if path.is_absolute():
        return path
    return (PROJECT_ROOT / path).resolve()


def _load_yaml_settings(path: Path) -> WeatherOverlayYamlSettings:
    if not path.exists():
        raise FileNotFoundError(f"Weather overlay config file not found: {path}")

    raw_config = yaml.safe_load(path.read_text(encoding="utf-8"))
    if raw_config is None:
        raw_config = {}
    if not isinstance(raw_config, dict):
        raise ValueError("Weather overlay config must be a YAML mapping/object at the top level")
    return WeatherOverlayYamlSettings.model_validate(raw_config)


def build_settings(config_path: Path | None = None) -> AppSettings:
    env = EnvSettings()
    resolved_path = _resolve_project_path(config_path or env.weather_overlay_config_path)
    return AppSettings(
        env=env,
        yaml=_load_yaml_settings(resolved_path),
        config_path=resolved_path,
    )

