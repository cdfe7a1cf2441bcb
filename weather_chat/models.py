from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict


Role = Literal["system", "user", "assistant", "function"]


class Message(BaseModel):
    # Browser clients attach extra keys (id, createdAt); they are dropped.
    model_config = ConfigDict(frozen=True, extra="ignore")

    role: Role
    content: str
    name: Optional[str] = None


class WeatherSummary(BaseModel):
    city: str
    country: str
    temperature: int  # °C
    feels_like: int  # °C
    description: str
    humidity: int  # %
    wind_speed: int  # km/h
    conditions: str


class WeatherError(BaseModel):
    error: str
