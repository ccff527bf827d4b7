"""CLI entry point for the carbon forecast widget."""

import argparse
import json
import logging

from carbonwidget.config.loader import (
    get_config_value,
    load_config,
    redacted_dump,
    set_config_value,
)
from carbonwidget.config.schema import SourceKind, WidgetConfig
from carbonwidget.host import RefreshHost
from carbonwidget.models.location import Location
from carbonwidget.reporting.formatters import (
    WidgetSize,
    format_timeline_json,
    format_timeline_text,
    levels_to_list,
    locations_to_list,
)
from carbonwidget.storage import run_repo
from carbonwidget.storage.database import Persistence
from carbonwidget.timeline.builder import builder_from_config

DEFAULT_CONFIG = "configs/default.yaml"
DEFAULT_DB = "data/widget.db"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="carbonwidget",
        description="Electricity carbon-intensity forecast widget",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )
    parser.add_argument("--db", default=DEFAULT_DB, help="SQLite DB path")

    sub = parser.add_subparsers(dest="command")

    # timeline
    tl_p = sub.add_parser("timeline", help="Build one timeline and print it")
    tl_p.add_argument("--location", help="Location code, e.g. fr, be, uk")
    tl_p.add_argument(
        "--source", choices=[s.value for s in SourceKind], help="Override source"
    )
    tl_p.add_argument("--json", action="store_true", help="Print JSON")
    tl_p.add_argument(
        "--size", choices=[s.value for s in WidgetSize], default=WidgetSize.MEDIUM.value,
        help="Text layout",
    )

    # static tables
    sub.add_parser("levels", help="Show the carbon level display table")
    sub.add_parser("locations", help="List supported locations")

    # runs
    runs_p = sub.add_parser("runs", help="Show recent timeline runs")
    runs_p.add_argument("--limit", type=int, default=20)

    # config show / config set
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    set_p = config_sub.add_parser("set", help="Set a config value")
    set_p.add_argument("keyvalue", help="key=value to set")

    # serve
    serve_p = sub.add_parser("serve", help="Regenerate timelines on their reload policy")
    serve_p.add_argument("--location", help="Location code")
    serve_p.add_argument("--cycles", type=int, default=None, help="Stop after N builds")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    if args.command == "timeline":
        return _cmd_timeline(config, args)
    elif args.command == "levels":
        return _cmd_levels()
    elif args.command == "locations":
        return _cmd_locations()
    elif args.command == "runs":
        return _cmd_runs(args)
    elif args.command == "config":
        return _cmd_config(config, args)
    elif args.command == "serve":
        return _cmd_serve(config, args)
    else:
        parser.print_help()
        return 1


def _resolve_location(config: WidgetConfig, code: str | None) -> Location | None:
    if code is None:
        return config.location
    try:
        return Location.from_code(code)
    except ValueError as e:
        print(f"Error: {e}")
        return None


def _cmd_timeline(config: WidgetConfig, args) -> int:
    location = _resolve_location(config, args.location)
    if location is None:
        return 1
    if args.source:
        config = config.model_copy(
            update={"timeline": config.timeline.model_copy(update={"source": SourceKind(args.source)})}
        )
    timeline = builder_from_config(config).build(location)
    if args.json:
        print(format_timeline_json(timeline))
    else:
        print(format_timeline_text(timeline, WidgetSize(args.size)))
    return 1 if timeline.errored else 0


def _cmd_levels() -> int:
    for row in levels_to_list():
        level = row["level"] if row["level"] is not None else "?"
        print(f"{level}  {row['tint']}  {row['icon']:<24} {row['label']}")
    return 0


def _cmd_locations() -> int:
    for row in locations_to_list():
        print(f"{row['id']:>2}  {row['code']}  {row['name']}")
    return 0


def _cmd_runs(args) -> int:
    with Persistence(args.db) as db:
        runs = run_repo.get_recent_runs(db.conn, limit=args.limit)
    if not runs:
        print("No runs recorded")
        return 0
    for r in runs:
        detail = r["failure_kind"] or f"{r['entry_count']} entries"
        print(f"{r['generated_at']}  {r['location']}  {r['outcome']:<7} {detail}")
    return 0


def _cmd_config(config: WidgetConfig, args) -> int:
    if args.config_command == "show":
        print(json.dumps(redacted_dump(config), indent=2, ensure_ascii=False))
        return 0
    elif args.config_command == "set":
        kv = args.keyvalue
        if "=" not in kv:
            print("Error: use key=value format")
            return 1
        key, value = kv.split("=", 1)
        try:
            new_config = set_config_value(config, key.strip(), value.strip())
            shown = get_config_value(new_config, key.strip())
            print(f"Set {key} = {json.dumps(shown, default=str)}")
            return 0
        except Exception as e:
            print(f"Error: {e}")
            return 1
    else:
        print("Use: config show | config set key=value")
        return 1


def _cmd_serve(config: WidgetConfig, args) -> int:
    location = _resolve_location(config, args.location)
    if location is None:
        return 1
    with Persistence(args.db) as db:
        host = RefreshHost(config, location, persistence=db, max_cycles=args.cycles)
        host.start()
    return 0
