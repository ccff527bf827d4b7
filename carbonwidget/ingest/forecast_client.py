"""Fetch and decode forecasts, reducing every failure to a FetchFailure."""

import logging

from pydantic import ValidationError

from carbonwidget.errors import CancelledFailure, DecodeFailure, ForecastError
from carbonwidget.ingest.adapt_client import AdaptClient
from carbonwidget.ingest.cancel import CancelToken
from carbonwidget.models.forecast import ForecastEnvelope
from carbonwidget.models.outcome import FetchFailure, FetchOutcome, FetchSuccess

logger = logging.getLogger(__name__)


class ForecastClient:
    def __init__(self, adapt_client: AdaptClient):
        self.adapt = adapt_client

    def fetch(
        self, location_code: str, cancel: CancelToken | None = None
    ) -> FetchOutcome:
        """Fetch a fresh forecast envelope. Never raises for API failures."""
        try:
            envelope = self.fetch_envelope(location_code, cancel)
        except ForecastError as e:
            logger.warning(
                "Forecast fetch failed for %s (%s): %s", location_code, e.kind, e
            )
            return FetchFailure.from_error(e)
        return FetchSuccess(envelope)

    def fetch_envelope(
        self, location_code: str, cancel: CancelToken | None = None
    ) -> ForecastEnvelope:
        """Like fetch() but raises the underlying ForecastError."""
        if cancel is not None and cancel.cancelled:
            raise CancelledFailure("Cancelled before request")

        body = self.adapt.get_forecasts_body(location_code)

        if cancel is not None and cancel.cancelled:
            raise CancelledFailure("Cancelled while request was in flight")

        try:
            return ForecastEnvelope.decode(body)
        except ValidationError as e:
            raise DecodeFailure(
                f"Could not parse forecast: {e.error_count()} error(s)"
            ) from e
