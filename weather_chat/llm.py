from typing import Any, AsyncIterator, Dict, List, Optional, Protocol, Sequence, Tuple

import google.generativeai as genai

from .config import ConfigError
from .models import Message


class ChatLLMClient(Protocol):
    def stream_chat(self, messages: Sequence[Message]) -> AsyncIterator[str]: ...


# Gemini only knows "user" and "model" turns.
_GEMINI_ROLES = {
    "user": "user",
    "assistant": "model",
    "function": "user",
    "system": "user",
}


def to_gemini_contents(messages: Sequence[Message]) -> Tuple[Optional[str], List[Dict[str, Any]]]:
    """Split a chat message list into (system_instruction, contents).

    A leading system message becomes the system instruction. Function results
    are passed as user text, and adjacent turns with the same role are merged
    into one multi-part turn.
    """
    system_instruction: Optional[str] = None
    rest = list(messages)
    if rest and rest[0].role == "system":
        system_instruction = rest.pop(0).content

    contents: List[Dict[str, Any]] = []
    for msg in rest:
        # Gemini rejects empty text parts, e.g. an assistant turn left blank by an aborted stream.
        if not msg.content.strip():
            continue
        role = _GEMINI_ROLES[msg.role]
        text = msg.content
        if msg.role == "function":
            text = f"{msg.name or 'function'} result: {msg.content}"
        if contents and contents[-1]["role"] == role:
            contents[-1]["parts"].append(text)
        else:
            contents.append({"role": role, "parts": [text]})
    return system_instruction, contents


BLOCKED_FINISH_REASONS = {"SAFETY", "RECITATION", "BLOCKLIST", "PROHIBITED_CONTENT", "SPII"}


class LLMResponseBlocked(RuntimeError):
    """Raised when Gemini stops a stream for safety or recitation reasons."""


def chunk_text(chunk: Any) -> str:
    """Text carried by one streamed chunk, or "" for a chunk without parts.

    The SDK's `chunk.text` accessor raises ValueError on part-less chunks,
    which Gemini commonly sends last with finish_reason STOP or MAX_TOKENS.
    """
    candidates = list(getattr(chunk, "candidates", None) or [])
    if not candidates:
        feedback = getattr(chunk, "prompt_feedback", None)
        block_reason = getattr(feedback, "block_reason", None)
        if block_reason:
            raise LLMResponseBlocked(f"Prompt blocked: {getattr(block_reason, 'name', block_reason)}")
        return ""

    candidate = candidates[0]
    content = getattr(candidate, "content", None)
    parts = getattr(content, "parts", None) or []
    text = "".join(getattr(p, "text", "") or "" for p in parts)
    if not text:
        finish_reason = getattr(candidate, "finish_reason", None)
        reason = getattr(finish_reason, "name", str(finish_reason))
        if reason in BLOCKED_FINISH_REASONS:
            raise LLMResponseBlocked(f"Response stopped: {reason}")
    return text


class GeminiChatClient:
    def __init__(self, api_key: Optional[str], model: str, temperature: float = 0.7) -> None:
        if not api_key:
            raise ConfigError("GEMINI_API_KEY not configured (set a valid key in environment)")
        genai.configure(api_key=api_key)
        self.model = model
        self.temperature = temperature

    async def stream_chat(self, messages: Sequence[Message]) -> AsyncIterator[str]:
        system_instruction, contents = to_gemini_contents(messages)
        model = genai.GenerativeModel(
            self.model,
            system_instruction=system_instruction,
            generation_config={"temperature": self.temperature},
        )
        response_stream = await model.generate_content_async(contents, stream=True)
        async for chunk in response_stream:
            yield chunk_text(chunk)
