import os
import logging

from fastapi import FastAPI, Request
from contextlib import asynccontextmanager
import httpx
import uvicorn
from weather_chat.routers.chat import router as chat_router
from .config import CONFIG
from .llm import GeminiChatClient


# --- Logging Configuration ---
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler()  # Ensure logs go to stdout/stderr
    ]
)
# --------------------------


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Missing LLM key is fatal: ConfigError aborts startup.
    app.state.llm_client = GeminiChatClient(
        api_key=CONFIG.gemini_api_key,
        model=CONFIG.gemini_model,
        temperature=CONFIG.gemini_temperature,
    )
    if not CONFIG.openweather_api_key:
        logging.warning("OPENWEATHER_API_KEY not set; weather lookups will return an error payload")
    http_client = httpx.AsyncClient(timeout=CONFIG.http_timeout_sec)
    app.state.http_client = http_client
    try:
        yield
    finally:
        await http_client.aclose()

app = FastAPI(title="Weather Chat Assistant", lifespan=lifespan)
app.include_router(chat_router, prefix="/api")


@app.get("/")
async def root(_: Request):
    return {"status": "ok"}


if __name__ == "__main__":
    port = int(os.getenv("PORT", "3000"))
    uvicorn.run(app, host="0.0.0.0", port=port)
