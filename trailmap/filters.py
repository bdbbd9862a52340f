"""Helpers for narrowing, ordering and totalling a collection of activities.

These functions are intentionally free of any presentation code so they can be
used by the CLI and by any other caller holding a list of activities.
"""

from __future__ import annotations

import datetime
from collections.abc import Iterable
from dataclasses import dataclass

import pytz

from trailmap.activity import Activity
from trailmap.sport import SportType


@dataclass(frozen=True)
class Totals:
    count: int
    distance: float  # meters
    duration: float  # seconds


def _day_start(value: datetime.date | datetime.datetime, tz) -> datetime.datetime:
    if isinstance(value, datetime.datetime):
        return value if value.tzinfo else value.replace(tzinfo=datetime.UTC)
    return _localize(datetime.datetime.combine(value, datetime.time.min), tz)


def _day_end(value: datetime.date | datetime.datetime, tz) -> datetime.datetime:
    if isinstance(value, datetime.datetime):
        return value if value.tzinfo else value.replace(tzinfo=datetime.UTC)
    return _localize(datetime.datetime.combine(value, datetime.time.max), tz)


def _localize(naive: datetime.datetime, tz) -> datetime.datetime:
    # pytz zones need localize() to pick the right UTC offset
    return tz.localize(naive)


def filter_activities(
    activities: Iterable[Activity],
    sport: SportType | None = None,
    start: datetime.date | datetime.datetime | None = None,
    end: datetime.date | datetime.datetime | None = None,
    search: str | None = None,
    timezone: str = "UTC",
) -> list[Activity]:
    """Return the activities matching every given criterion, preserving order.

    A plain ``date`` for *start* means the start of that day and for *end* the
    very end of that day, both in *timezone*. Datetimes are used as given
    (naive ones are taken as UTC). *search* is a case-insensitive substring of
    the activity name.
    """
    tz = pytz.timezone(timezone)
    start_dt = _day_start(start, tz) if start is not None else None
    end_dt = _day_end(end, tz) if end is not None else None
    query = search.lower() if search else None

    result = []
    for activity in activities:
        if sport is not None and activity.type is not sport:
            continue
        if start_dt is not None and activity.start_time < start_dt:
            continue
        if end_dt is not None and activity.start_time > end_dt:
            continue
        if query is not None and query not in activity.name.lower():
            continue
        result.append(activity)
    return result


def sort_by_start(activities: Iterable[Activity]) -> list[Activity]:
    """Newest first."""
    return sorted(activities, key=lambda a: a.start_time, reverse=True)


def summarize(activities: Iterable[Activity]) -> Totals:
    count = 0
    distance = 0.0
    duration = 0.0
    for activity in activities:
        count += 1
        distance += activity.stats.distance
        duration += activity.stats.duration
    return Totals(count=count, distance=distance, duration=duration)


def remove_activity(activities: Iterable[Activity], activity_id: str) -> list[Activity]:
    """Return a new list without the activity whose id is *activity_id*."""
    return [a for a in activities if a.id != activity_id]
