import httpx

from fastapi import Depends, HTTPException, status, Request

from .config import CONFIG
from .intent import IntentExtractor, KeywordIntentExtractor
from .llm import ChatLLMClient
from .weather import WeatherClient


def get_http_client(request: Request) -> httpx.AsyncClient:
    client = getattr(request.app.state, "http_client", None)
    if client is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="HTTP client not initialized",
        )
    return client


def get_llm_client(request: Request) -> ChatLLMClient:
    client = getattr(request.app.state, "llm_client", None)
    if client is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="LLM client not initialized",
        )
    return client


def get_weather_client(http_client: httpx.AsyncClient = Depends(get_http_client)) -> WeatherClient:
    # Key is read per request so a missing key only degrades the lookup.
    return WeatherClient(http_client, api_key=CONFIG.openweather_api_key, base_url=CONFIG.openweather_base)


def get_intent_extractor() -> IntentExtractor:
    return KeywordIntentExtractor()
