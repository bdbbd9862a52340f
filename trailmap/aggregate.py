"""Turn a parsed point sequence into an immutable :class:`Activity`."""

import datetime
import logging
import math
import uuid
from collections.abc import Iterable

from trailmap.activity import Activity, ActivityStats, GeoPoint
from trailmap.errors import FormatError
from trailmap.sport import SportType, sport_color
from trailmap.utils import distance_meters

logger = logging.getLogger(__name__)


def compute_stats(points: list[GeoPoint], now: datetime.datetime) -> ActivityStats:
    """Accumulate distance, elevation range and duration over *points* in order.

    Missing first/last timestamps fall back to *now*.
    """
    distance = 0.0
    max_ele = -math.inf
    min_ele = math.inf

    for i, point in enumerate(points):
        if point.ele is not None and math.isfinite(point.ele):
            max_ele = max(max_ele, point.ele)
            min_ele = min(min_ele, point.ele)
        if i > 0:
            step = distance_meters(points[i - 1], point)
            if math.isfinite(step):
                distance += step

    start = points[0].time or now
    end = points[-1].time or now
    duration = max(0.0, (end - start).total_seconds())
    avg_speed = (distance / 1000) / (duration / 3600) if duration > 0 else 0.0

    return ActivityStats(
        distance=distance,
        duration=duration,
        avg_speed=avg_speed,
        max_ele=max_ele if max_ele != -math.inf else 0.0,
        min_ele=min_ele if min_ele != math.inf else 0.0,
    )


def build_activity(
    points: Iterable[GeoPoint],
    name: str,
    sport: SportType,
    now: datetime.datetime | None = None,
) -> Activity:
    """Build an :class:`Activity` from raw points.

    Points with a NaN latitude or longitude are dropped first. *now* is the
    wall-clock time used when the track carries no timestamps; it defaults to
    the current UTC time.

    Raises:
        FormatError: no valid point remains.
    """
    valid = [p for p in points if not (math.isnan(p.lat) or math.isnan(p.lon))]
    if not valid:
        raise FormatError("no valid points")

    if now is None:
        now = datetime.datetime.now(datetime.UTC)

    stats = compute_stats(valid, now)
    logger.debug("Built %s activity %r from %d points", sport.value, name, len(valid))
    return Activity(
        id=uuid.uuid4().hex,
        name=name,
        type=sport,
        start_time=valid[0].time or now,
        stats=stats,
        path=tuple(valid),
        color=sport_color(sport),
    )
