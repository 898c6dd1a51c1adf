from __future__ import annotations

import copy
import json
from email.message import Message
from typing import Any
from urllib.error import HTTPError

import pytest

from weather_overlay.adapters.weather import pirate_weather

# 2024-01-01 00:00 America/Denver
DENVER_MIDNIGHT = 1704092400
DAY_SECONDS = 86400

ICONS = [
    "clear-day",
    "rain",
    "snow",
    "partly-cloudy-day",
    "cloudy",
    "wind",
    "fog",
    "thunderstorm",
    "sleet",
]


def make_daily(index: int, **overrides: Any) -> dict[str, Any]:
    day = {
        "time": DENVER_MIDNIGHT + index * DAY_SECONDS,
        "summary": f"Day {index}",
        "icon": ICONS[index % len(ICONS)],
        "temperatureHigh": 40.0 + index,
        "temperatureLow": 20.0 + index,
        "temperatureMax": 42.0 + index,
        "temperatureMin": 18.0 + index,
        "apparentTemperatureHigh": 38.0,
        "apparentTemperatureLow": 15.0,
        "humidity": 0.4,
        "pressure": 1015.2,
        "windSpeed": 6.1,
        "windGust": 12.4,
        "windBearing": 270,
        "cloudCover": 0.3,
        "uvIndex": 2,
    }
    day.update(overrides)
    return day


SAMPLE_RESPONSE: dict[str, Any] = {
    "latitude": 40.0,
    "longitude": -105.0,
    "timezone": "America/Denver",
    "offset": -7.0,
    "currently": {
        "time": DENVER_MIDNIGHT + 12 * 3600,
        "summary": "Clear",
        "icon": "clear-day",
        "temperature": 45.3,
        "apparentTemperature": 41.9,
        "humidity": 0.5,
        "pressure": 1012.4,
        "windSpeed": 7.2,
        "windGust": 15.8,
        "windBearing": 225,
        "cloudCover": 0.25,
        "uvIndex": 3,
        "visibility": 10,
    },
    "daily": {
        "summary": "Mixed week",
        "icon": "rain",
        "data": [make_daily(index) for index in range(8)],
    },
}


@pytest.fixture
def sample_response() -> dict[str, Any]:
    return copy.deepcopy(SAMPLE_RESPONSE)


class FakeResponse:
    def __init__(self, body: bytes) -> None:
        self._body = body

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> FakeResponse:
        return self

    def __exit__(self, *exc_info: object) -> None:
        return None


class FakeUrlopen:
    """Stands in for urllib's urlopen and records every request."""

    def __init__(self) -> None:
        self.requests: list[Any] = []
        self.timeouts: list[float] = []
        self.body: bytes = b"{}"
        self.error: BaseException | None = None

    def respond_json(self, payload: Any) -> None:
        self.body = json.dumps(payload).encode("utf-8")
        self.error = None

    def respond_raw(self, body: bytes) -> None:
        self.body = body
        self.error = None

    def respond_status(self, status_code: int, reason: str) -> None:
        self.error = HTTPError("https://api.test", status_code, reason, Message(), None)

    def raise_error(self, error: BaseException) -> None:
        self.error = error

    @property
    def urls(self) -> list[str]:
        return [request.full_url for request in self.requests]

    def __call__(self, request: Any, timeout: float | None = None) -> FakeResponse:
        self.requests.append(request)
        self.timeouts.append(timeout)
        if self.error is not None:
            raise self.error
        return FakeResponse(self.body)


@pytest.fixture
def fake_urlopen(monkeypatch: pytest.MonkeyPatch) -> FakeUrlopen:
    fake = FakeUrlopen()
    monkeypatch.setattr(pirate_weather, "urlopen", fake)
    return fake
