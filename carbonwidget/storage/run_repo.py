"""Repository for the timeline run log."""

import sqlite3
import uuid

from carbonwidget.models.timeline import Timeline


def record_run(
    conn: sqlite3.Connection,
    timeline: Timeline,
    source: str,
    config_hash: str | None = None,
    run_id: str | None = None,
) -> str:
    """Persist metadata for one generated timeline. Returns the run id."""
    run_id = run_id or str(uuid.uuid4())
    first = timeline.entries[0]
    failure = first.failure
    conn.execute(
        "INSERT INTO timeline_runs "
        "(run_id, location, source, outcome, failure_kind, failure_message, "
        "entry_count, generated_at, reload_kind, reload_at, config_hash) "
        "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
        (
            run_id,
            first.location.short,
            source,
            "errored" if timeline.errored else "ok",
            failure.kind.value if failure else None,
            failure.message if failure else None,
            len(timeline.entries),
            first.date.isoformat(),
            timeline.policy.kind.value,
            timeline.policy.at.isoformat() if timeline.policy.at else None,
            config_hash,
        ),
    )
    conn.commit()
    return run_id


def get_recent_runs(conn: sqlite3.Connection, limit: int = 20) -> list[dict]:
    rows = conn.execute(
        "SELECT * FROM timeline_runs ORDER BY generated_at DESC, id DESC LIMIT ?",
        (limit,),
    ).fetchall()
    return [dict(r) for r in rows]


def get_last_run(conn: sqlite3.Connection, location: str) -> dict | None:
    """Most recent run for a location short code."""
    row = conn.execute(
        "SELECT * FROM timeline_runs WHERE location = ? "
        "ORDER BY generated_at DESC, id DESC LIMIT 1",
        (location,),
    ).fetchone()
    if row is None:
        return None
    return dict(row)
