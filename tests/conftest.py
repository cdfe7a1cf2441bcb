from typing import Callable, List, Optional, Sequence

import httpx
import pytest

from weather_chat.models import Message


OPENWEATHER_URL = "https://api.openweathermap.org/data/2.5/weather"


def openweather_payload(
    name: str = "Rome",
    country: str = "IT",
    temp: float = 28.4,
    feels_like: float = 29.6,
    humidity: int = 40,
    wind_speed: float = 3.0,
    main: str = "Clear",
    description: str = "clear sky",
) -> dict:
    return {
        "name": name,
        "sys": {"country": country},
        "main": {"temp": temp, "feels_like": feels_like, "humidity": humidity},
        "weather": [{"main": main, "description": description}],
        "wind": {"speed": wind_speed},
    }


class FakeLLM:
    """Records the messages it receives and replays fixed deltas."""

    def __init__(self, deltas: Sequence[str], error: Optional[Exception] = None) -> None:
        self.deltas = list(deltas)
        self.error = error
        self.calls: List[List[Message]] = []

    async def stream_chat(self, messages):
        self.calls.append(list(messages))
        for delta in self.deltas:
            yield delta
        if self.error is not None:
            raise self.error


class RecordingHandler:
    def __init__(self, respond: Callable[[httpx.Request], httpx.Response]) -> None:
        self.respond = respond
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.respond(request)


@pytest.fixture
def ok_handler() -> RecordingHandler:
    return RecordingHandler(lambda request: httpx.Response(200, json=openweather_payload()))


def mock_http_client(handler: RecordingHandler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))
