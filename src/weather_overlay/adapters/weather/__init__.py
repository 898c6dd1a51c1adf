from typing import Any

from .base import (
    ConfigurationError,
    NetworkError,
    ParseError,
    WeatherProvider,
    WeatherProviderError,
)
from .pirate_weather import PirateWeatherProvider

WEATHER_PROVIDERS: dict[str, type[WeatherProvider]] = {
    PirateWeatherProvider.id: PirateWeatherProvider,
}


def get_weather_provider(provider_id: str, **options: Any) -> WeatherProvider:
    try:
        provider_cls = WEATHER_PROVIDERS[provider_id]
    except KeyError as exc:
        raise ValueError(f"Unsupported weather provider: {provider_id}") from exc
    return provider_cls(**options)


__all__ = [
    "ConfigurationError",
    "NetworkError",
    "ParseError",
    "PirateWeatherProvider",
    "WEATHER_PROVIDERS",
    "WeatherProvider",
    "WeatherProviderError",
    "get_weather_provider",
]
