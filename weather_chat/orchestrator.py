import json
import logging
import time
from datetime import datetime, timezone
from typing import AsyncIterator, List, Sequence

from .llm import ChatLLMClient
from .models import Message


SYSTEM_PROMPT = """You are a helpful weather assistant. When you receive weather data in a function response, analyze it and provide personalized recommendations.

For packing advice, consider:
- Temperature: Cold (<10°C) = warm layers, jackets. Mild (10-20°C) = light jacket. Warm (>20°C) = light clothes
- Rain/conditions: Suggest umbrella, raincoat, waterproof shoes
- Wind: Recommend windbreaker, scarf
- Humidity: Breathable fabrics for high humidity

If the function response contains an error, apologize briefly and explain what went wrong.

Be conversational, friendly, and practical!"""

FRAME_PREFIX = "0:"
STREAM_PROTOCOL_HEADERS = {"X-Vercel-AI-Data-Stream": "v1"}


def build_messages(history: Sequence[Message]) -> List[Message]:
    return [Message(role="system", content=SYSTEM_PROMPT), *history]


def encode_frame(delta: str) -> str:
    """Encode one text delta as a single `0:"..."` line."""
    return f"{FRAME_PREFIX}{json.dumps(delta, ensure_ascii=False)}\n"


def decode_frame(line: str) -> str:
    line = line.rstrip("\n")
    if not line.startswith(FRAME_PREFIX):
        raise ValueError(f"Not a text frame: {line!r}")
    text = json.loads(line[len(FRAME_PREFIX):])
    if not isinstance(text, str):
        raise ValueError(f"Text frame does not carry a string: {line!r}")
    return text


async def stream_completion(history: Sequence[Message], llm: ChatLLMClient) -> AsyncIterator[str]:
    """Stream the assistant reply for `history` as encoded frames.

    Deltas are forwarded as soon as they arrive; empty ones are dropped.
    Provider errors are logged and re-raised so the transport aborts the
    response instead of ending it cleanly.
    """
    messages = build_messages(history)
    start_time = time.monotonic()
    frames = 0
    try:
        async for delta in llm.stream_chat(messages):
            if not delta:
                continue
            frames += 1
            yield encode_frame(delta)
    except Exception:
        logging.exception("LLM stream failed after %d frames", frames)
        raise

    latency_ms = (time.monotonic() - start_time) * 1000
    log_data = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "tool": "gemini",
        "fn": "stream_chat",
        "latency_ms": f"{latency_ms:.2f}",
        "ok": True,
        "frames": frames,
    }
    logging.info(json.dumps(log_data))
