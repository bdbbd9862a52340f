"""Geometry and formatting helpers shared across the trailmap package."""

from __future__ import annotations

import datetime
import math
from typing import TYPE_CHECKING

import pytz

if TYPE_CHECKING:
    from trailmap.activity import GeoPoint

EARTH_RADIUS_M = 6_371_000


def is_valid_coordinate(lat: float, lon: float) -> bool:
    """True when *lat*/*lon* are finite degrees inside [-90, 90] and [-180, 180]."""
    if not (math.isfinite(lat) and math.isfinite(lon)):
        return False
    return -90 <= lat <= 90 and -180 <= lon <= 180


def distance_meters(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle (haversine) distance between two points, in meters.

    Returns NaN when any coordinate is not finite.
    """
    if not all(math.isfinite(v) for v in (a.lat, a.lon, b.lat, b.lon)):
        return math.nan
    if a.lat == b.lat and a.lon == b.lon:
        return 0.0
    lat1 = math.radians(a.lat)
    lat2 = math.radians(b.lat)
    d_lat = math.radians(b.lat - a.lat)
    d_lon = math.radians(b.lon - a.lon)
    h = math.sin(d_lat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2
    # Rounding can push h a hair past 1 for near-antipodal points
    h = min(1.0, max(0.0, h))
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def format_duration(seconds: float) -> str:
    """Format seconds as ``"Hh Mm"`` (or ``"Mm"`` under an hour), floored to minutes."""
    total_minutes = int(max(0, seconds) // 60)
    hours, minutes = divmod(total_minutes, 60)
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def format_distance(meters: float) -> str:
    """Format meters as kilometres with two decimals, e.g. ``"12.35 km"``."""
    return f"{meters / 1000:.2f} km"


def format_start_time(start_time: datetime.datetime, timezone: str = "UTC") -> str:
    """Render an activity start time in the home timezone."""
    try:
        tz = pytz.timezone(timezone)
    except pytz.UnknownTimeZoneError:
        tz = pytz.UTC
    if start_time.tzinfo is None:
        start_time = start_time.replace(tzinfo=datetime.UTC)
    local_dt = start_time.astimezone(tz)
    return f"{local_dt.strftime('%Y-%m-%d %H:%M')} {local_dt.tzname()}"
