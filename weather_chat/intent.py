"""Keyword triggers and location extraction for weather questions.

Both checks are deliberately shallow. Only English prepositions and
capitalized Latin-letter place names are recognized; lower-case or
non-Latin names are unsupported and simply produce no match.
"""
import re
from typing import Optional, Protocol

from .models import Message


WEATHER_KEYWORDS = ("weather", "pack", "bring", "temperature", "rain", "umbrella", "clothes", "wear")

CITY_PATTERN = re.compile(r"(?:in|to|for)\s+([A-Z][a-zA-Z\s]+?)(?:\s+this|\s+tomorrow|\?|\.|$)")


def needs_weather_context(message: Message) -> bool:
    if message.role != "user":
        return False
    lower = message.content.lower()
    return any(kw in lower for kw in WEATHER_KEYWORDS)


def extract_city(text: str) -> Optional[str]:
    m = CITY_PATTERN.search(text)
    if not m:
        return None
    return m.group(1).strip() or None


class IntentExtractor(Protocol):
    def classify_intent(self, message: Message) -> bool: ...

    def extract_entity(self, text: str) -> Optional[str]: ...


class KeywordIntentExtractor:
    """Default extractor: keyword substring match plus a preposition regex."""

    def classify_intent(self, message: Message) -> bool:
        return needs_weather_context(message)

    def extract_entity(self, text: str) -> Optional[str]:
        return extract_city(text)
