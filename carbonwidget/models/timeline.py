"""Timeline models: dated entries plus the host reload policy."""

from dataclasses import dataclass
from datetime import datetime

from carbonwidget.config.schema import ReloadKind
from carbonwidget.display.levels import DisplayPoint
from carbonwidget.models.forecast import ForecastSet
from carbonwidget.models.location import Location
from carbonwidget.models.outcome import FetchFailure


@dataclass(frozen=True)
class ReloadPolicy:
    kind: ReloadKind
    at: datetime | None = None

    @classmethod
    def after(cls, at: datetime) -> "ReloadPolicy":
        return cls(ReloadKind.AFTER, at)

    @classmethod
    def at_end(cls) -> "ReloadPolicy":
        return cls(ReloadKind.AT_END)

    @classmethod
    def never(cls) -> "ReloadPolicy":
        return cls(ReloadKind.NEVER)


@dataclass(frozen=True)
class TimelineEntry:
    date: datetime
    location: Location
    errored: bool = False
    data: ForecastSet | None = None
    failure: FetchFailure | None = None

    def __post_init__(self) -> None:
        if self.errored == (self.data is not None):
            raise ValueError("TimelineEntry needs exactly one of errored or data")

    @classmethod
    def success(
        cls, date: datetime, location: Location, data: ForecastSet
    ) -> "TimelineEntry":
        return cls(date=date, location=location, data=data)

    @classmethod
    def error(
        cls, date: datetime, location: Location, failure: FetchFailure | None = None
    ) -> "TimelineEntry":
        return cls(date=date, location=location, errored=True, failure=failure)

    @property
    def now(self) -> DisplayPoint | None:
        if self.data is None:
            return None
        return DisplayPoint.from_point(self.data.now)

    @property
    def next_low(self) -> DisplayPoint | None:
        if self.data is None or self.data.next_low is None:
            return None
        return DisplayPoint.from_point(self.data.next_low)

    @property
    def forecast(self) -> list[DisplayPoint]:
        if self.data is None:
            return []
        return [DisplayPoint.from_point(p) for p in self.data.forecast]


@dataclass(frozen=True)
class Timeline:
    entries: tuple[TimelineEntry, ...]
    policy: ReloadPolicy

    @property
    def errored(self) -> bool:
        return any(e.errored for e in self.entries)

    @property
    def last_date(self) -> datetime:
        return self.entries[-1].date
