"""Derive the display forecast set from raw API records."""

from collections.abc import Sequence

from carbonwidget.errors import PreconditionFailure
from carbonwidget.models.forecast import (
    ForecastForPoint,
    ForecastSet,
    RawForecastRecord,
)

FORECAST_WINDOW = 6
LOW_CARBON_MAX_LEVEL = 2


def to_point(record: RawForecastRecord) -> ForecastForPoint:
    return ForecastForPoint(date=record.start, level=record.level_score)


def is_low_carbon(level: int) -> bool:
    return level <= LOW_CARBON_MAX_LEVEL


def derive_forecast_set(records: Sequence[RawForecastRecord]) -> ForecastSet:
    """Build the six-point window and the first low-carbon point.

    Records are taken in API order; nothing is sorted or de-duplicated.
    Raises PreconditionFailure when fewer than six records are supplied.
    """
    if len(records) < FORECAST_WINDOW:
        raise PreconditionFailure(
            f"Need at least {FORECAST_WINDOW} forecast records, got {len(records)}"
        )

    next_low = next(
        (to_point(r) for r in records if is_low_carbon(r.level_score)), None
    )
    window = tuple(to_point(r) for r in records[:FORECAST_WINDOW])
    return ForecastSet(next_low=next_low, forecast=window)
