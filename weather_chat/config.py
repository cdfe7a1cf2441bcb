import os
from typing import Final


def _float_env(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


class ConfigError(RuntimeError):
    """Raised when a required setting is missing at startup."""


class _Config:
    def __init__(self) -> None:
        # LLM provider
        self.gemini_api_key: str | None = os.getenv("GEMINI_API_KEY")
        self.gemini_model: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash-lite")
        self.gemini_temperature: float = _float_env("GEMINI_TEMPERATURE", 0.7)

        # Weather provider (optional; lookups degrade to an error payload)
        self.openweather_api_key: str | None = os.getenv("OPENWEATHER_API_KEY")
        self.openweather_base: str = os.getenv(
            "OPENWEATHER_BASE", "https://api.openweathermap.org/data/2.5/weather"
        )

        # HTTP behavior
        self.user_agent: str = os.getenv("WEATHER_CHAT_USER_AGENT", "WeatherChat-Assistant")
        self.http_timeout_sec: float = _float_env("HTTP_TIMEOUT_SEC", 10.0)


CONFIG: Final[_Config] = _Config()
