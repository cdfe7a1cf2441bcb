from typing import List
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, Field

from ..augment import augment, resolve_weather_context
from ..deps import get_intent_extractor, get_llm_client, get_weather_client
from ..intent import IntentExtractor
from ..llm import ChatLLMClient
from ..models import Message
from ..orchestrator import STREAM_PROTOCOL_HEADERS, stream_completion
from ..weather import WeatherClient


router = APIRouter()


class ChatRequest(BaseModel):
    messages: List[Message] = Field(..., min_length=1)


@router.post("/chat")
async def chat(
    req: ChatRequest,
    weather: WeatherClient = Depends(get_weather_client),
    llm: ChatLLMClient = Depends(get_llm_client),
    extractor: IntentExtractor = Depends(get_intent_extractor),
) -> StreamingResponse:
    # The weather lookup must finish before the completion call starts.
    last_message = req.messages[-1]
    weather_result = await resolve_weather_context(last_message, weather, extractor)
    messages = augment(req.messages, weather_result)
    logging.info(
        "Chat request: %d messages, weather context %s",
        len(req.messages),
        "attached" if weather_result is not None else "skipped",
    )
    return StreamingResponse(
        stream_completion(messages, llm),
        media_type="text/plain; charset=utf-8",
        headers=STREAM_PROTOCOL_HEADERS,
    )
