from __future__ import annotations

import logging

from .adapters.weather import WeatherProvider, WeatherProviderError, get_weather_provider
from .domain.models import ProviderConfig, WeatherData
from .settings import AppSettings

LOGGER = logging.getLogger(__name__)


def build_provider_config(settings: AppSettings) -> ProviderConfig:
    weather = settings.yaml.weather
    return ProviderConfig(
        api_key=settings.env.pirate_weather_api_key or weather.api_key,
        latitude=weather.latitude,
        longitude=weather.longitude,
        units=weather.units,
    )


def build_weather_provider(settings: AppSettings) -> WeatherProvider:
    weather = settings.yaml.weather
    return get_weather_provider(
        weather.provider,
        base_url=weather.base_url,
        timeout_seconds=weather.timeout_seconds,
    )


def fetch_configured_weather(
    settings: AppSettings,
    *,
    config: ProviderConfig | None = None,
) -> WeatherData:
    provider = build_weather_provider(settings)
    provider_config = config or build_provider_config(settings)
    try:
        data = provider.fetch_weather(provider_config)
    except WeatherProviderError:
        LOGGER.exception("Weather fetch from '%s' failed", provider.name)
        raise

    LOGGER.info(
        "Fetched %s weather for %s,%s with %d daily entries (%s)",
        provider.name,
        data.location.latitude,
        data.location.longitude,
        len(data.daily),
        data.units,
    )
    return data
