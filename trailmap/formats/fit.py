"""FIT file format parser for trailmap.

This module decodes FIT (Flexible and Interoperable Data Transfer) recordings
with ``fitparse`` and turns their ``record`` messages into normalized
:class:`~trailmap.activity.GeoPoint` values. Coordinates stored as semicircles
are converted to degrees.
"""

import datetime
import logging
import struct
from dataclasses import dataclass, field
from typing import Any

import fitparse  # type: ignore

from trailmap.activity import GeoPoint
from trailmap.errors import DecodeError, FormatError
from trailmap.sport import SportType, classify
from trailmap.utils import is_valid_coordinate

from .base import ParsedTrack

logger = logging.getLogger(__name__)

SEMICIRCLES_TO_DEGREES = 180 / 2**31

# (lat, lon) field names, most specific first
POSITION_FIELDS = (("position_lat", "position_long"), ("lat", "long"))
ELEVATION_FIELDS = ("altitude", "enhanced_altitude")


@dataclass
class FitData:
    """Decoded FIT messages as plain ``{field: value}`` dicts."""

    sessions: list[dict[str, Any]] = field(default_factory=list)
    records: list[dict[str, Any]] = field(default_factory=list)


def decode_fit(content: bytes) -> FitData:
    """Decode a FIT byte buffer into its session and record messages."""
    data = FitData()
    try:
        fitfile = fitparse.FitFile(content)
        for message in fitfile.get_messages(["session", "record"]):
            if message.name == "session":
                data.sessions.append(message.get_values())
            else:
                data.records.append(message.get_values())
    except (fitparse.FitParseError, EOFError, ValueError, struct.error) as e:
        raise DecodeError(str(e)) from e
    return data


def normalize_coordinate(value: float) -> float:
    """Return *value* in degrees, converting from semicircles when |value| > 180."""
    if abs(value) > 180:
        return value * SEMICIRCLES_TO_DEGREES
    return value


def _first_present(values: dict[str, Any], names: tuple[str, ...]) -> Any:
    for name in names:
        if values.get(name) is not None:
            return values[name]
    return None


def _read_position(values: dict[str, Any]) -> tuple[float, float] | None:
    for lat_field, lon_field in POSITION_FIELDS:
        lat = values.get(lat_field)
        lon = values.get(lon_field)
        if lat is not None and lon is not None:
            break
    else:
        return None
    try:
        lat = normalize_coordinate(float(lat))
        lon = normalize_coordinate(float(lon))
    except (TypeError, ValueError):
        return None
    if not is_valid_coordinate(lat, lon):
        return None
    return lat, lon


def _read_timestamp(values: dict[str, Any]) -> datetime.datetime | None:
    timestamp = values.get("timestamp")
    if not isinstance(timestamp, datetime.datetime):
        return None
    # fitparse returns naive datetimes in UTC
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=datetime.UTC)
    return timestamp.astimezone(datetime.UTC)


def sport_label_from_sessions(sessions: list[dict[str, Any]]) -> str | None:
    """Pick the sport label from the first session, using ``sub_sport`` when ``sport`` is unknown."""
    if not sessions:
        return None
    session = sessions[0]
    sport = session.get("sport")
    label = str(sport) if sport is not None else None
    if classify(label) is SportType.OTHER and session.get("sub_sport") is not None:
        label = str(session["sub_sport"])
    return label


def parse_fit(content: bytes, filename: str) -> ParsedTrack:
    """Parse FIT content and return its valid track points and sport label.

    FIT files carry no activity name, so the track is named after *filename*.

    Raises:
        FormatError: the buffer cannot be decoded or has no valid position.
    """
    try:
        data = decode_fit(content)
    except DecodeError as e:
        raise FormatError(str(e), filename) from e

    points: list[GeoPoint] = []
    discarded = 0
    for values in data.records:
        position = _read_position(values)
        if position is None:
            discarded += 1
            continue
        elevation = _first_present(values, ELEVATION_FIELDS)
        points.append(
            GeoPoint(
                lat=position[0],
                lon=position[1],
                ele=float(elevation) if elevation is not None else 0.0,
                time=_read_timestamp(values),
            )
        )

    if discarded:
        logger.debug("%s: discarded %d records without a valid position", filename, discarded)
    if not points:
        raise FormatError("no track points", filename)

    return ParsedTrack(name=filename, sport_label=sport_label_from_sessions(data.sessions), points=points)
