"""Forecast sources: live API data or fixed placeholder data."""

import logging
from datetime import datetime, timedelta
from typing import Protocol

from carbonwidget.errors import ForecastError
from carbonwidget.forecast.derive import derive_forecast_set
from carbonwidget.ingest.cancel import CancelToken
from carbonwidget.ingest.forecast_client import ForecastClient
from carbonwidget.ingest.validation import EnvelopeValidator, accept_all
from carbonwidget.models.common import utc_now
from carbonwidget.models.forecast import ForecastForPoint, ForecastSet
from carbonwidget.models.location import Location
from carbonwidget.models.outcome import FetchFailure, ForecastLoaded, SourceOutcome

logger = logging.getLogger(__name__)

# Levels shown hour by hour by the placeholder, starting at "now".
PLACEHOLDER_LEVELS = (3, 4, 3, 2, 1, 5)
PLACEHOLDER_NEXT_LOW_HOURS = 8


class ForecastSource(Protocol):
    def load(
        self,
        location: Location,
        now: datetime | None = None,
        cancel: CancelToken | None = None,
    ) -> SourceOutcome: ...


class LiveForecastSource:
    """Fetches from the Adapt API and derives the display set."""

    def __init__(
        self, client: ForecastClient, validator: EnvelopeValidator = accept_all
    ):
        self.client = client
        self.validator = validator

    def load(
        self,
        location: Location,
        now: datetime | None = None,
        cancel: CancelToken | None = None,
    ) -> SourceOutcome:
        try:
            envelope = self.client.fetch_envelope(location.short, cancel)
            self.validator(envelope)
            data = derive_forecast_set(envelope.forecasts)
        except ForecastError as e:
            logger.warning(
                "No forecast for %s (%s): %s", location.short, e.kind, e
            )
            return FetchFailure.from_error(e)
        return ForecastLoaded(data)


class FixtureForecastSource:
    """Static demo data relative to ``now``; never touches the network."""

    def load(
        self,
        location: Location,
        now: datetime | None = None,
        cancel: CancelToken | None = None,
    ) -> SourceOutcome:
        return ForecastLoaded(placeholder_forecast_set(now or utc_now()))


def placeholder_forecast_set(now: datetime) -> ForecastSet:
    forecast = tuple(
        ForecastForPoint(date=now + timedelta(hours=i), level=level)
        for i, level in enumerate(PLACEHOLDER_LEVELS)
    )
    next_low = ForecastForPoint(
        date=now + timedelta(hours=PLACEHOLDER_NEXT_LOW_HOURS), level=2
    )
    return ForecastSet(next_low=next_low, forecast=forecast)
