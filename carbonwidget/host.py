"""Refresh host: regenerates the timeline whenever its reload policy says so.

Stands in for the OS widget scheduler when running outside a device:

    carbonwidget serve --location fr
"""

import logging
import signal
import time
from datetime import datetime

from carbonwidget.config.loader import snapshot_config
from carbonwidget.config.schema import ReloadKind, WidgetConfig
from carbonwidget.models.common import utc_now
from carbonwidget.models.location import Location
from carbonwidget.models.timeline import Timeline
from carbonwidget.reporting.formatters import format_timeline_text
from carbonwidget.storage import run_repo
from carbonwidget.storage.database import Persistence
from carbonwidget.timeline.builder import TimelineBuilder, builder_from_config

logger = logging.getLogger(__name__)


class RefreshHost:
    """Runs timeline builds in a loop with signal handling."""

    def __init__(
        self,
        config: WidgetConfig,
        location: Location,
        persistence: Persistence | None = None,
        builder: TimelineBuilder | None = None,
        max_cycles: int | None = None,
    ):
        self.config = config
        self.location = location
        self.persistence = persistence
        self.builder = builder or builder_from_config(config)
        self.max_cycles = max_cycles
        self._running = False
        self.cycles = 0
        self.failures = 0
        self.last_timeline: Timeline | None = None

    def start(self) -> None:
        """Start the refresh loop; returns once stopped or max_cycles is hit."""
        previous = self._setup_signals()
        self._running = True
        logger.info(
            "Refresh host started: location=%s source=%s",
            self.location.short, self.config.timeline.source,
        )
        try:
            self._loop()
        except KeyboardInterrupt:
            logger.info("Refresh host interrupted by keyboard")
        finally:
            if previous:
                for signum, handler in previous.items():
                    signal.signal(signum, handler)
            logger.info(
                "Refresh host stopped: %d cycles (%d errored)",
                self.cycles, self.failures,
            )

    def stop(self) -> None:
        self._running = False

    def _loop(self) -> None:
        while self._running:
            timeline = self.run_once()
            if self.max_cycles is not None and self.cycles >= self.max_cycles:
                break
            wait = self.seconds_until_reload(timeline)
            if wait is None:
                logger.info("Reload policy is 'never', stopping")
                break
            sleep_until = time.monotonic() + wait
            # Sleep in short increments so signals are honoured promptly
            while self._running and time.monotonic() < sleep_until:
                time.sleep(min(1.0, max(0.0, sleep_until - time.monotonic())))

    def run_once(self) -> Timeline:
        """Build one timeline, record it and print it."""
        self.cycles += 1
        try:
            timeline = self.builder.build(self.location)
        except Exception:
            self.failures += 1
            logger.exception("Timeline build #%d crashed", self.cycles)
            raise
        if timeline.errored:
            self.failures += 1
        self.last_timeline = timeline

        if self.persistence is not None:
            conn = self.persistence.conn
            c_hash = snapshot_config(self.config, conn)
            run_repo.record_run(
                conn, timeline, self.config.timeline.source.value, c_hash
            )
        print(format_timeline_text(timeline))
        return timeline

    def seconds_until_reload(
        self, timeline: Timeline, now: datetime | None = None
    ) -> float | None:
        """Seconds to wait before the next build, or None to stop."""
        now = now or utc_now()
        policy = timeline.policy
        if policy.kind == ReloadKind.NEVER:
            return None
        if policy.kind == ReloadKind.AT_END:
            # Never sooner than the refresh horizon, even for a single entry.
            horizon = self.config.timeline.refresh_minutes * 60
            return max(float(horizon), (timeline.last_date - now).total_seconds())
        assert policy.at is not None
        return max(0.0, (policy.at - now).total_seconds())

    def _setup_signals(self) -> dict[int, object]:
        """Handle SIGTERM and SIGINT for graceful shutdown. Returns prior handlers."""
        def _stop(signum: int, frame: object) -> None:
            logger.info("Received %s, shutting down", signal.Signals(signum).name)
            self._running = False

        previous = {}
        for signum in (signal.SIGTERM, signal.SIGINT):
            previous[signum] = signal.getsignal(signum)
            signal.signal(signum, _stop)
        return previous
