"""Timeline builder: one forecast request turned into entries and a reload policy."""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta

from carbonwidget.config.schema import (
    ReloadKind,
    SourceKind,
    TimelineConfig,
    WidgetConfig,
)
from carbonwidget.ingest.adapt_client import AdaptClient
from carbonwidget.ingest.cancel import CancelToken
from carbonwidget.ingest.forecast_client import ForecastClient
from carbonwidget.ingest.sources import (
    FixtureForecastSource,
    ForecastSource,
    LiveForecastSource,
    placeholder_forecast_set,
)
from carbonwidget.ingest.validation import (
    EnvelopeValidator,
    accept_all,
    chain,
    require_status,
    require_version,
)
from carbonwidget.models.common import utc_now
from carbonwidget.models.location import Location
from carbonwidget.models.outcome import FetchFailure, ForecastLoaded
from carbonwidget.models.timeline import ReloadPolicy, Timeline, TimelineEntry

logger = logging.getLogger(__name__)


class TimelineBuilder:
    def __init__(
        self,
        source: ForecastSource,
        config: TimelineConfig | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.source = source
        self.config = config or TimelineConfig()
        self.clock = clock

    def build(
        self,
        location: Location,
        now: datetime | None = None,
        cancel: CancelToken | None = None,
    ) -> Timeline:
        """Request a forecast once and package the result."""
        now = now or self.clock()
        outcome = self.source.load(location, now=now, cancel=cancel)

        if isinstance(outcome, ForecastLoaded):
            entries = tuple(
                TimelineEntry.success(date, location, outcome.data)
                for date in self._entry_dates(now)
            )
            policy = self._policy(now)
        else:
            # Failures get a single entry and retry on the refresh horizon
            # whatever the strategy.
            entries = (TimelineEntry.error(now, location, outcome),)
            policy = self._refresh_after(now)

        logger.info(
            "Timeline for %s: %d entr%s, %s, reload=%s",
            location.short,
            len(entries),
            "y" if len(entries) == 1 else "ies",
            "errored" if isinstance(outcome, FetchFailure) else "ok",
            policy.kind,
        )
        return Timeline(entries=entries, policy=policy)

    def get_timeline(
        self,
        location: Location,
        completion: Callable[[Timeline], None],
        cancel: CancelToken | None = None,
    ) -> None:
        """Build and deliver the timeline to ``completion`` exactly once.

        Nothing is delivered if ``cancel`` fires before the build finishes.
        """
        timeline = self.build(location, cancel=cancel)
        if cancel is not None and cancel.cancelled:
            logger.info("Timeline for %s dropped: consumer cancelled", location.short)
            return
        completion(timeline)

    def placeholder(self, location: Location, now: datetime | None = None) -> TimelineEntry:
        """Entry shown while the first real timeline is loading."""
        now = now or self.clock()
        return TimelineEntry.success(now, location, placeholder_forecast_set(now))

    def snapshot(self, location: Location, now: datetime | None = None) -> TimelineEntry:
        """Entry for transient previews such as a widget gallery."""
        return self.placeholder(location, now)

    def _entry_dates(self, now: datetime) -> list[datetime]:
        spacing = timedelta(minutes=self.config.entry_spacing_minutes)
        return [now + i * spacing for i in range(self.config.entry_count)]

    def _policy(self, now: datetime) -> ReloadPolicy:
        if self.config.reload == ReloadKind.AT_END:
            return ReloadPolicy.at_end()
        if self.config.reload == ReloadKind.NEVER:
            return ReloadPolicy.never()
        return self._refresh_after(now)

    def _refresh_after(self, now: datetime) -> ReloadPolicy:
        return ReloadPolicy.after(now + timedelta(minutes=self.config.refresh_minutes))


def build_validator(config: WidgetConfig) -> EnvelopeValidator:
    checks: list[EnvelopeValidator] = []
    if config.validation.required_status is not None:
        checks.append(require_status(config.validation.required_status))
    if config.validation.required_version is not None:
        checks.append(require_version(config.validation.required_version))
    if not checks:
        return accept_all
    return chain(checks)


def build_source(config: WidgetConfig) -> ForecastSource:
    """Select the forecast source named by ``timeline.source``."""
    if config.timeline.source == SourceKind.FIXTURE:
        return FixtureForecastSource()
    adapt = AdaptClient(
        base_url=config.api.base_url,
        api_key=config.api.api_key,
        limit=config.api.limit,
        timeout=config.api.timeout_seconds,
    )
    return LiveForecastSource(ForecastClient(adapt), build_validator(config))


def builder_from_config(config: WidgetConfig) -> TimelineBuilder:
    return TimelineBuilder(build_source(config), config.timeline)
