"""Write normalized activities back out as GPX 1.1 documents."""

import logging
import os
import re

import gpxpy.gpx

from trailmap.activity import Activity

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r"[^\w.-]+")


def activity_to_gpx(activity: Activity) -> str:
    """Serialize *activity* as a single-track, single-segment GPX document."""
    gpx = gpxpy.gpx.GPX()
    gpx.creator = "trailmap"

    track = gpxpy.gpx.GPXTrack(name=activity.name)
    # Lowercase enum names classify back to the same sport on re-import
    track.type = activity.type.name.lower()
    gpx.tracks.append(track)

    segment = gpxpy.gpx.GPXTrackSegment()
    track.segments.append(segment)
    for point in activity.path:
        segment.points.append(
            gpxpy.gpx.GPXTrackPoint(
                latitude=point.lat,
                longitude=point.lon,
                elevation=point.ele,
                time=point.time,
            )
        )

    return gpx.to_xml(version="1.1")


def export_filename(activity: Activity) -> str:
    """Build a filesystem-safe ``YYYY-MM-DD_name.gpx`` filename."""
    stem = os.path.splitext(activity.name)[0]
    safe_name = _UNSAFE_FILENAME_CHARS.sub("_", stem).strip("_") or activity.id
    return f"{activity.start_time.strftime('%Y-%m-%d')}_{safe_name}.gpx"


def write_gpx(activity: Activity, folder: str) -> str:
    """Write *activity* as GPX into *folder* and return the file path."""
    os.makedirs(folder, exist_ok=True)
    path = os.path.join(folder, export_filename(activity))
    with open(path, "w", encoding="utf-8") as f:
        f.write(activity_to_gpx(activity))
    logger.debug("Wrote %s", path)
    return path
