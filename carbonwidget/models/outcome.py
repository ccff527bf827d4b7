"""Fetch outcomes handed from the ingest layer to the timeline builder."""

from dataclasses import dataclass

from carbonwidget.errors import FailureKind, ForecastError
from carbonwidget.models.forecast import ForecastEnvelope, ForecastSet


@dataclass(frozen=True)
class FetchSuccess:
    envelope: ForecastEnvelope


@dataclass(frozen=True)
class FetchFailure:
    kind: FailureKind
    message: str = ""

    @classmethod
    def from_error(cls, error: ForecastError) -> "FetchFailure":
        return cls(kind=error.kind, message=str(error))


@dataclass(frozen=True)
class ForecastLoaded:
    data: ForecastSet


FetchOutcome = FetchSuccess | FetchFailure
SourceOutcome = ForecastLoaded | FetchFailure
