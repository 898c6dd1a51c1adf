"""Command-line entry point: fetch the configured forecast and print it as JSON."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from pydantic import ValidationError

from .adapters.weather import WeatherProviderError
from .domain.models import ProviderConfig
from .service import build_provider_config, fetch_configured_weather
from .settings import build_settings

LOGGER = logging.getLogger("weather_overlay")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="weather-overlay",
        description="Fetch current and daily weather normalized for the overlay renderer.",
    )
    parser.add_argument("--config", type=Path, help="Path to the YAML config file.")
    parser.add_argument("--api-key", help="Pirate Weather API key (overrides config and env).")
    parser.add_argument("--lat", type=float, help="Latitude override.")
    parser.add_argument("--lon", type=float, help="Longitude override.")
    parser.add_argument("--units", choices=("us", "si", "ca", "uk2"), help="Unit system override.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    try:
        config_path = args.config.resolve() if args.config is not None else None
        settings = build_settings(config_path)
    except (FileNotFoundError, ValueError, ValidationError) as exc:
        logging.basicConfig(level=logging.INFO)
        LOGGER.error("Could not load settings: %s", exc)
        return 2

    level = "DEBUG" if args.verbose else settings.env.weather_overlay_log_level
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    overrides = {
        key: value
        for key, value in (
            ("api_key", args.api_key),
            ("latitude", args.lat),
            ("longitude", args.lon),
            ("units", args.units),
        )
        if value is not None
    }
    try:
        config = ProviderConfig.model_validate(
            {**build_provider_config(settings).model_dump(), **overrides}
        )
    except ValidationError as exc:
        LOGGER.error("Invalid weather options: %s", exc)
        return 2

    try:
        data = fetch_configured_weather(settings, config=config)
    except WeatherProviderError:
        return 1

    sys.stdout.write(data.model_dump_json(indent=2))
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
