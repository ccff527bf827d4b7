"""Adapt API forecast models and the derived display projection."""

from dataclasses import dataclass
from datetime import datetime

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

MAX_LEVEL_SCORE = 255
MAX_CARBON_INTENSITY = 4_294_967_295


class RawForecastRecord(BaseModel):
    """One forecast sample exactly as the API returns it."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, strict=True)

    start: AwareDatetime
    end: AwareDatetime
    location: str
    level_score: int = Field(alias="levelScore", ge=0, le=MAX_LEVEL_SCORE)
    carbon_intensity: int = Field(
        alias="carbonIntensity", ge=0, le=MAX_CARBON_INTENSITY
    )


class ForecastEnvelope(BaseModel):
    """Top-level response body of ``GET /api/v2/forecasts``."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, strict=True)

    status: str
    version: str
    forecasts: list[RawForecastRecord]

    @classmethod
    def decode(cls, body: str | bytes) -> "ForecastEnvelope":
        return cls.model_validate_json(body)

    def encode(self) -> str:
        return self.model_dump_json(by_alias=True)


@dataclass(frozen=True)
class ForecastForPoint:
    date: datetime
    level: int


@dataclass(frozen=True)
class ForecastSet:
    next_low: ForecastForPoint | None
    forecast: tuple[ForecastForPoint, ...]

    @property
    def now(self) -> ForecastForPoint:
        return self.forecast[0]
