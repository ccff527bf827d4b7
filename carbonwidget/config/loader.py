"""YAML config loader with snapshot persistence and runtime get/set."""

import hashlib
import json
import os
from enum import StrEnum
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel

from carbonwidget.config.schema import WidgetConfig
from carbonwidget.models.location import Location

API_KEY_ENV = "ADAPT_API_KEY"
REDACTED = "***"
NULL_WORDS = ("null", "none")


def load_config(path: str | Path | None) -> WidgetConfig:
    """Load and validate config from a YAML file.

    A missing file yields the defaults. An empty ``api.api_key`` is filled
    from the ADAPT_API_KEY environment variable when it is set.
    """
    raw: dict[str, Any] = {}
    if path is not None and Path(path).exists():
        with open(path) as f:
            raw = yaml.safe_load(f) or {}

    env_key = os.environ.get(API_KEY_ENV, "")
    api = raw.setdefault("api", {}) or {}
    if env_key and not api.get("api_key"):
        api["api_key"] = env_key
    raw["api"] = api

    return WidgetConfig(**raw)


def redacted_dump(config: WidgetConfig) -> dict[str, Any]:
    """Config as plain data with the API key masked.

    The key is credential material: it never reaches snapshots, hashes or
    terminal output.
    """
    data = json.loads(config.model_dump_json())
    if data["api"]["api_key"]:
        data["api"]["api_key"] = REDACTED
    data["location"] = config.location.short
    return data


def config_hash(config: WidgetConfig) -> str:
    """Deterministic hash of the widget behaviour; rotating the API key keeps it."""
    data = json.dumps(redacted_dump(config), sort_keys=True)
    return hashlib.sha256(data.encode()).hexdigest()[:16]


def snapshot_config(config: WidgetConfig, db: Any) -> str:
    """Persist a redacted config snapshot if this hash is new. Returns the hash."""
    h = config_hash(config)
    cursor = db.execute(
        "SELECT 1 FROM config_snapshots WHERE config_hash = ?", (h,)
    )
    if cursor.fetchone() is None:
        db.execute(
            "INSERT INTO config_snapshots (config_hash, config_json, created_at) "
            "VALUES (?, ?, CURRENT_TIMESTAMP)",
            (h, json.dumps(redacted_dump(config), ensure_ascii=False)),
        )
        db.commit()
    return h


def get_config_value(config: WidgetConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key, e.g. 'timeline.refresh_minutes'.

    Locations come back as their short code, enums as their value.
    """
    obj: Any = config
    for part in dotted_key.split("."):
        if not isinstance(obj, BaseModel) or part not in type(obj).model_fields:
            raise KeyError(f"Config key not found: {dotted_key}")
        obj = getattr(obj, part)
    if isinstance(obj, Location):
        return obj.short
    if isinstance(obj, StrEnum):
        return obj.value
    return obj


def set_config_value(config: WidgetConfig, dotted_key: str, value: Any) -> WidgetConfig:
    """Set a config value by dotted key and re-validate.

    String input is coerced to the current field's type; "null" or "none"
    clears an optional validation setting. Returns a new WidgetConfig.
    """
    data = json.loads(config.model_dump_json())
    *path, leaf = dotted_key.split(".")
    target = data
    for part in path:
        if not isinstance(target.get(part), dict):
            raise KeyError(f"Config key not found: {dotted_key}")
        target = target[part]
    if leaf not in target or isinstance(target[leaf], dict):
        raise KeyError(f"Config key not found: {dotted_key}")

    old_value = target[leaf]
    if isinstance(value, str):
        if value.lower() in NULL_WORDS and path == ["validation"]:
            value = None
        elif isinstance(old_value, float):
            value = float(value)
        elif isinstance(old_value, int) and value.isdigit():
            value = int(value)
    target[leaf] = value
    return WidgetConfig(**data)
