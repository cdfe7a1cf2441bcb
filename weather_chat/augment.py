import logging
from typing import List, Optional, Sequence

from .intent import IntentExtractor
from .models import Message
from .weather import WeatherClient, WeatherResult


WEATHER_FUNCTION_NAME = "getWeather"


def augment(history: Sequence[Message], weather_result: Optional[WeatherResult]) -> List[Message]:
    """Return the history with the weather lookup appended as a function message.

    Both result variants are serialized the same way; the LLM decides how to
    present an error payload.
    """
    messages = list(history)
    if weather_result is None:
        return messages
    messages.append(
        Message(
            role="function",
            name=WEATHER_FUNCTION_NAME,
            content=weather_result.model_dump_json(),
        )
    )
    return messages


async def resolve_weather_context(
    message: Message,
    weather: WeatherClient,
    extractor: IntentExtractor,
) -> Optional[WeatherResult]:
    if not extractor.classify_intent(message):
        return None
    city = extractor.extract_entity(message.content)
    if not city:
        logging.info("Weather keywords present but no city found in message")
        return None
    return await weather.fetch_weather(city)
