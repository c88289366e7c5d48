"""Read-only views over a synthesized schedule."""
from __future__ import annotations

import typing as t
from datetime import date, datetime

from .models import ScheduleEvent


def parse_iso_datetime(value: str) -> t.Optional[datetime]:
    """Parse an ISO 8601 datetime, returning None if it is not one."""
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (ValueError, AttributeError):
        return None


def _sort_key(event: ScheduleEvent) -> tuple[int, float]:
    start = parse_iso_datetime(event.start)
    if start is None:
        return (1, 0.0)
    return (0, start.timestamp())


def sorted_schedule(schedule: list[ScheduleEvent]) -> list[ScheduleEvent]:
    """Return a copy ordered by start time; unparseable starts go last."""
    return sorted(schedule, key=_sort_key)


def events_by_day(schedule: list[ScheduleEvent]) -> dict[date, list[ScheduleEvent]]:
    """Group events by the calendar date of their start, days in order."""
    days: dict[date, list[ScheduleEvent]] = {}
    for event in sorted_schedule(schedule):
        start = parse_iso_datetime(event.start)
        if start is None:
            continue
        days.setdefault(start.date(), []).append(event)
    return days
