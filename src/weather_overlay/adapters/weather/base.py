from __future__ import annotations

from typing import Protocol

from ...domain.models import ProviderConfig, WeatherData


class WeatherProviderError(RuntimeError):
    """Raised when a weather provider request cannot be completed."""


class ConfigurationError(WeatherProviderError):
    """Raised before any network I/O when the provider config is incomplete."""


class NetworkError(WeatherProviderError):
    """Raised when the provider endpoint is unreachable or answers with an error status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        reason: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason


class ParseError(WeatherProviderError):
    """Raised when a provider response cannot be decoded or normalized."""


class WeatherProvider(Protocol):
    id: str
    name: str

    def get_default_config(self) -> ProviderConfig:
        """Return an empty configuration skeleton for this provider."""

    def fetch_weather(self, config: ProviderConfig) -> WeatherData:
        """Fetch current and daily weather normalized to the unified model."""

    async def fetch_weather_async(self, config: ProviderConfig) -> WeatherData:
        """Awaitable variant of fetch_weather."""
