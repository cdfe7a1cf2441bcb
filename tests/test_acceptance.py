import os
import re

import httpx
import pytest

from weather_chat.orchestrator import FRAME_PREFIX, decode_frame


CHAT_API_URL = os.getenv("CHAT_API_URL", "http://localhost:3000").rstrip("/")
CHAT_ENDPOINT = f"{CHAT_API_URL}/api/chat"
DEFAULT_TIMEOUT = float(os.getenv("TEST_HTTP_TIMEOUT", "60"))

pytestmark = pytest.mark.skipif(
    os.getenv("RUN_ACCEPTANCE") != "1",
    reason="live acceptance tests need a running server and real API keys (set RUN_ACCEPTANCE=1)",
)


def _collect_reply(messages: list[dict]) -> str:
    """
    Call the running /api/chat endpoint and collect the concatenated text frames.
    """
    with httpx.Client(timeout=DEFAULT_TIMEOUT) as client:
        with client.stream("POST", CHAT_ENDPOINT, json={"messages": messages}) as resp:
            resp.raise_for_status()
            assert resp.headers.get("x-vercel-ai-data-stream") == "v1"
            out: list[str] = []
            for line in resp.iter_lines():
                if line.startswith(FRAME_PREFIX):
                    out.append(decode_frame(line))
            return "".join(out)


def _contains_word(haystack: str, word: str) -> bool:
    return re.search(rf"\b{re.escape(word)}\b", haystack, flags=re.IGNORECASE) is not None


def test_packing_advice_mentions_clothing():
    txt = _collect_reply([{"role": "user", "content": "What should I pack for a trip to Rome tomorrow?"}])
    assert txt.strip()
    assert any(_contains_word(txt, w) for w in ("jacket", "layers", "clothes", "clothing", "shirt"))


def test_weather_question_mentions_temperature():
    txt = _collect_reply([{"role": "user", "content": "What's the weather in London?"}])
    assert "°C" in txt or _contains_word(txt, "degrees")


def test_unknown_city_is_explained_not_crashed():
    txt = _collect_reply([{"role": "user", "content": "What's the weather in Xyzzyplugh?"}])
    assert txt.strip()


def test_small_talk_still_answers():
    txt = _collect_reply([{"role": "user", "content": "Hi! Who are you?"}])
    assert _contains_word(txt, "weather")
