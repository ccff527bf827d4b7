"""Widget API: FastAPI backend serving timelines to render hosts."""

from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from carbonwidget.config.loader import load_config, snapshot_config
from carbonwidget.config.schema import WidgetConfig
from carbonwidget.models.location import Location
from carbonwidget.reporting.formatters import (
    levels_to_list,
    locations_to_list,
    timeline_to_dict,
)
from carbonwidget.storage import run_repo
from carbonwidget.storage.database import Persistence
from carbonwidget.timeline.builder import TimelineBuilder, builder_from_config

CONFIG_PATH = Path("configs") / "default.yaml"
DB_PATH = Path("data") / "widget.db"


def create_app(
    config: WidgetConfig,
    db_path: str | Path | None = None,
    builder: TimelineBuilder | None = None,
) -> FastAPI:
    app = FastAPI(title="Carbon Forecast Widget", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    timeline_builder = builder or builder_from_config(config)

    def _persistence() -> Persistence | None:
        return Persistence(db_path).open() if db_path is not None else None

    @app.get("/api/timeline")
    def get_timeline(location: str | None = None):
        """Build a fresh timeline for a location (configured default if omitted)."""
        try:
            loc = Location.from_code(location) if location else config.location
        except ValueError as e:
            raise HTTPException(status_code=404, detail=str(e)) from e

        timeline = timeline_builder.build(loc)
        db = _persistence()
        if db is not None:
            try:
                c_hash = snapshot_config(config, db.conn)
                run_repo.record_run(
                    db.conn, timeline, config.timeline.source.value, c_hash
                )
            finally:
                db.close()
        return timeline_to_dict(timeline)

    @app.get("/api/locations")
    def get_locations():
        return locations_to_list()

    @app.get("/api/levels")
    def get_levels():
        return levels_to_list()

    @app.get("/api/runs")
    def get_runs(limit: int = 20):
        """Recent timeline runs; empty when no database is configured."""
        db = _persistence()
        if db is None:
            return []
        try:
            return run_repo.get_recent_runs(db.conn, limit=limit)
        finally:
            db.close()

    return app


def main() -> None:
    import uvicorn

    app = create_app(load_config(CONFIG_PATH), DB_PATH)
    uvicorn.run(app, host="0.0.0.0", port=8777)


if __name__ == "__main__":
    main()
