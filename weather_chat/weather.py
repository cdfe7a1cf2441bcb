from typing import Optional, Union
import logging
import math
import time
import json
from datetime import datetime, timezone

import httpx

from .config import CONFIG
from .models import WeatherError, WeatherSummary


WeatherResult = Union[WeatherSummary, WeatherError]

MS_TO_KMH = 3.6


def _round_half_up(value: float) -> int:
    return int(math.floor(float(value) + 0.5))


def normalize_current_weather(data: dict) -> WeatherSummary:
    """Map an OpenWeatherMap current-weather payload onto a WeatherSummary.

    Raises KeyError, IndexError, TypeError or ValueError when the payload
    is missing the fields we need.
    """
    main = data["main"]
    primary = data["weather"][0]
    return WeatherSummary(
        city=str(data["name"]),
        country=str(data["sys"]["country"]),
        temperature=_round_half_up(main["temp"]),
        feels_like=_round_half_up(main["feels_like"]),
        description=str(primary["description"]),
        humidity=_round_half_up(main["humidity"]),
        wind_speed=_round_half_up(float(data["wind"]["speed"]) * MS_TO_KMH),
        conditions=str(primary["main"]),
    )


class WeatherClient:
    """Current-weather lookups against OpenWeatherMap.

    Every failure is folded into a WeatherError so the caller can hand it to
    the LLM as-is. One GET per call, no retry.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_key: Optional[str],
        base_url: str = CONFIG.openweather_base,
    ) -> None:
        self._client = http_client
        self._api_key = api_key
        self._base_url = base_url

    async def fetch_weather(self, city: str) -> WeatherResult:
        if not self._api_key:
            return WeatherError(
                error="Weather API key not configured. Please set OPENWEATHER_API_KEY in the environment",
            )

        start_time = time.monotonic()
        params = {
            "q": city,
            "appid": self._api_key,
            "units": "metric",
        }
        headers = {"User-Agent": CONFIG.user_agent}
        http_status = None
        result: WeatherResult

        try:
            resp = await self._client.get(self._base_url, params=params, headers=headers)
            http_status = resp.status_code
            if not resp.is_success:
                result = WeatherError(
                    error=f"Could not fetch weather for {city}. Please check the city name.",
                )
            else:
                result = normalize_current_weather(resp.json())
        except (httpx.HTTPError, ValueError, KeyError, IndexError, TypeError) as e:
            result = WeatherError(error=f"Failed to fetch weather data: {str(e) or 'Unknown error'}")

        latency_ms = (time.monotonic() - start_time) * 1000
        log_data = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "tool": "openweather",
            "fn": "current",
            "latency_ms": f"{latency_ms:.2f}",
            "ok": isinstance(result, WeatherSummary),
            "http_status": http_status,
        }
        logging.info(json.dumps(log_data))
        return result
