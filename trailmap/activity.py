"""Core activity records produced by the ingestion pipeline."""

import datetime
from dataclasses import dataclass

from trailmap.sport import SportType


@dataclass(frozen=True)
class GeoPoint:
    """One recorded sample.

    ``ele`` is meters above sea level and ``time`` a timezone-aware UTC
    datetime; both are ``None`` when the source did not record them.
    """

    lat: float
    lon: float
    ele: float | None = None
    time: datetime.datetime | None = None


@dataclass(frozen=True)
class ActivityStats:
    """Aggregates derived from an activity's point sequence."""

    distance: float  # meters
    duration: float  # seconds
    avg_speed: float  # km/h
    max_ele: float  # meters
    min_ele: float  # meters


@dataclass(frozen=True)
class Activity:
    """
    A single normalized recording with its derived statistics.

    Built once by :func:`trailmap.aggregate.build_activity` and never mutated.
    ``path`` keeps the points in recorded order.
    """

    id: str
    name: str
    type: SportType
    start_time: datetime.datetime
    stats: ActivityStats
    path: tuple[GeoPoint, ...]
    color: str

    @property
    def end_time(self) -> datetime.datetime:
        return self.start_time + datetime.timedelta(seconds=self.stats.duration)

    @property
    def point_count(self) -> int:
        return len(self.path)
