"""Pydantic v2 configuration schema with strict validation."""

from enum import StrEnum

from pydantic import BaseModel, Field, field_validator

from carbonwidget.ingest.adapt_client import ADAPT_BASE_URL, DEFAULT_LIMIT
from carbonwidget.models.location import Location


class SourceKind(StrEnum):
    LIVE = "live"
    FIXTURE = "fixture"


class ReloadKind(StrEnum):
    AFTER = "after"    # regenerate at a fixed time
    AT_END = "at_end"  # regenerate once the last entry is shown
    NEVER = "never"


class ApiConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = ADAPT_BASE_URL
    api_key: str = ""
    limit: int = Field(default=DEFAULT_LIMIT, ge=1, le=1000)
    timeout_seconds: float = Field(default=30.0, gt=0.0)


class TimelineConfig(BaseModel):
    model_config = {"extra": "forbid"}

    source: SourceKind = SourceKind.LIVE
    entry_count: int = Field(default=1, ge=1, le=48)
    entry_spacing_minutes: int = Field(default=60, ge=1)
    reload: ReloadKind = ReloadKind.AFTER
    refresh_minutes: int = Field(default=15, ge=1)


class ValidationConfig(BaseModel):
    model_config = {"extra": "forbid"}

    required_status: str | None = None
    required_version: str | None = None


class WidgetConfig(BaseModel):
    model_config = {"extra": "forbid"}

    api: ApiConfig = ApiConfig()
    timeline: TimelineConfig = TimelineConfig()
    validation: ValidationConfig = ValidationConfig()
    location: Location = Location.DEFAULT

    @field_validator("location", mode="before")
    @classmethod
    def _parse_location(cls, value: object) -> Location:
        if isinstance(value, (str, int)):
            return Location.from_code(value)
        return value  # type: ignore[return-value]


DEMO_TIMELINE = TimelineConfig(
    source=SourceKind.FIXTURE,
    entry_count=5,
    entry_spacing_minutes=60,
    reload=ReloadKind.AT_END,
)
