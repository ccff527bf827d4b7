"""Output formatters for timelines: plain text for the terminal, JSON for hosts."""

import json
from enum import StrEnum
from typing import Any

from carbonwidget.display.levels import (
    ERROR_ICON,
    ERROR_TEXT,
    LEVEL_TABLE,
    NEXT_LOW_TEXT,
    UNKNOWN_LEVEL,
    DisplayPoint,
)
from carbonwidget.models.location import REAL_LOCATIONS
from carbonwidget.models.timeline import Timeline, TimelineEntry

NEXT_LOW_DATE_FORMAT = "%a %d %Hh"
HOUR_FORMAT = "%Hh"


class WidgetSize(StrEnum):
    SMALL = "small"
    MEDIUM = "medium"


def _next_low_line(entry: TimelineEntry) -> str:
    next_low = entry.next_low
    if next_low is None:
        return f"{NEXT_LOW_TEXT} -"
    return (
        f"{NEXT_LOW_TEXT} [{next_low.icon}] "
        f"{next_low.point.date.strftime(NEXT_LOW_DATE_FORMAT)}"
    )


def format_entry_small(entry: TimelineEntry) -> str:
    """Small-widget layout: location, current level, next low point."""
    if entry.errored:
        return f"[{ERROR_ICON}] {ERROR_TEXT}"

    now = entry.now
    assert now is not None
    return "\n".join([
        entry.location.long.title(),
        f"[{now.icon}] {now.text.title()}",
        _next_low_line(entry),
    ])


def format_entry_text(entry: TimelineEntry) -> str:
    """Medium-widget layout as text: header, next low point, hourly row."""
    if entry.errored:
        return f"[{ERROR_ICON}] {ERROR_TEXT}"

    now = entry.now
    assert now is not None
    hourly = "  ".join(
        f"{p.point.date.strftime(HOUR_FORMAT)} {p.point.level}" for p in entry.forecast
    )
    return "\n".join([
        f"{entry.location.long.title()} | [{now.icon}] {now.text.title()}",
        _next_low_line(entry),
        hourly,
    ])


def format_timeline_text(
    timeline: Timeline, size: WidgetSize = WidgetSize.MEDIUM
) -> str:
    render = format_entry_small if size == WidgetSize.SMALL else format_entry_text
    parts = [render(e) for e in timeline.entries]
    policy = timeline.policy
    reload = policy.kind.value
    if policy.at is not None:
        reload = f"{reload} {policy.at.isoformat()}"
    parts.append(f"Reload: {reload}")
    return "\n\n".join(parts)


def point_to_dict(p: DisplayPoint) -> dict[str, Any]:
    return {
        "date": p.point.date.isoformat(),
        "level": p.point.level,
        "label": p.text,
        "icon": p.icon,
        "tint": p.tint.hex,
    }


def entry_to_dict(entry: TimelineEntry) -> dict[str, Any]:
    data: dict[str, Any] = {
        "date": entry.date.isoformat(),
        "location": entry.location.short,
        "location_name": entry.location.long,
        "errored": entry.errored,
    }
    if entry.errored:
        data["failure"] = (
            {"kind": entry.failure.kind.value, "message": entry.failure.message}
            if entry.failure
            else None
        )
        return data
    now = entry.now
    next_low = entry.next_low
    data["now"] = point_to_dict(now) if now else None
    data["next_low"] = point_to_dict(next_low) if next_low else None
    data["forecast"] = [point_to_dict(p) for p in entry.forecast]
    return data


def timeline_to_dict(timeline: Timeline) -> dict[str, Any]:
    return {
        "entries": [entry_to_dict(e) for e in timeline.entries],
        "policy": {
            "kind": timeline.policy.kind.value,
            "at": timeline.policy.at.isoformat() if timeline.policy.at else None,
        },
    }


def format_timeline_json(timeline: Timeline) -> str:
    return json.dumps(timeline_to_dict(timeline), indent=2, ensure_ascii=False)


def levels_to_list() -> list[dict[str, Any]]:
    rows = [
        {"level": level, "label": d.label, "icon": d.icon, "tint": d.tint.hex}
        for level, d in sorted(LEVEL_TABLE.items())
    ]
    rows.append({
        "level": None,
        "label": UNKNOWN_LEVEL.label,
        "icon": UNKNOWN_LEVEL.icon,
        "tint": UNKNOWN_LEVEL.tint.hex,
    })
    return rows


def locations_to_list() -> list[dict[str, Any]]:
    return [
        {"id": int(loc), "code": loc.short, "name": loc.long}
        for loc in REAL_LOCATIONS
    ]
