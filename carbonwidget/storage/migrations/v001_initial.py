"""Initial schema: config snapshots and timeline run log."""

import sqlite3

DDL = [
    """
    CREATE TABLE IF NOT EXISTS config_snapshots (
        config_hash TEXT PRIMARY KEY,
        config_json TEXT NOT NULL,
        created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
    )
    """,

    # One row per timeline generation; forecast values are not stored
    """
    CREATE TABLE IF NOT EXISTS timeline_runs (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        run_id TEXT NOT NULL UNIQUE,
        location TEXT NOT NULL,
        source TEXT NOT NULL,
        outcome TEXT NOT NULL CHECK (outcome IN ('ok', 'errored')),
        failure_kind TEXT,
        failure_message TEXT,
        entry_count INTEGER NOT NULL,
        generated_at TEXT NOT NULL,
        reload_kind TEXT NOT NULL,
        reload_at TEXT,
        config_hash TEXT REFERENCES config_snapshots(config_hash)
    )
    """,
    (
        "CREATE INDEX IF NOT EXISTS idx_timeline_runs_location "
        "ON timeline_runs(location, generated_at)"
    ),
]


def up(conn: sqlite3.Connection) -> None:
    for stmt in DDL:
        conn.execute(stmt)
    conn.commit()
