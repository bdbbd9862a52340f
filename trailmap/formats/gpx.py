"""GPX file format parser for trailmap.

This module parses GPX (GPS Exchange Format) track documents into an ordered
list of :class:`~trailmap.activity.GeoPoint` plus the track name and sport type
label. GPX 1.0, GPX 1.1 and documents without a namespace are accepted.
"""

import datetime
import logging
import xml.etree.ElementTree as ET

import gpxpy.gpx
import gpxpy.gpxfield

from trailmap.activity import GeoPoint
from trailmap.errors import DecodeError, FormatError
from trailmap.utils import is_valid_coordinate

from .base import ParsedTrack

logger = logging.getLogger(__name__)


def _namespace(root: ET.Element) -> str:
    if root.tag.startswith("{"):
        return root.tag[1 : root.tag.index("}")]
    return ""


def _child_text(element: ET.Element, tag: str) -> str | None:
    child = element.find(tag)
    if child is None or child.text is None:
        return None
    return child.text.strip()


def _parse_time(text: str | None) -> datetime.datetime | None:
    if not text:
        return None
    try:
        parsed = gpxpy.gpxfield.parse_time(text)
    except (gpxpy.gpx.GPXException, ValueError) as e:
        logger.debug("Ignoring unparseable GPX time %r: %s", text, e)
        return None
    if parsed is None:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=datetime.UTC)
    return parsed.astimezone(datetime.UTC)


def _parse_elevation(text: str | None) -> float:
    if not text:
        return 0.0
    try:
        return float(text)
    except ValueError:
        return 0.0


def decode_gpx(content: str | bytes) -> ET.Element:
    """Parse GPX content into an XML element tree, raising :class:`DecodeError`."""
    # Leading whitespace before the XML declaration is a syntax error
    try:
        return ET.fromstring(content.lstrip())
    except ET.ParseError as e:
        raise DecodeError(str(e)) from e


def parse_gpx(content: str | bytes, filename: str) -> ParsedTrack:
    """Parse GPX content and return the track's points, name and sport label.

    Track points from every segment of every track are returned in document
    order as one sequence. Points without a usable ``lat``/``lon`` attribute,
    or with coordinates outside the valid degree range, are skipped.

    Raises:
        FormatError: the content is not well-formed XML or has no ``<trk>``.
    """
    try:
        root = decode_gpx(content)
    except DecodeError as e:
        raise FormatError(f"malformed GPX document: {e}", filename) from e

    ns = _namespace(root)

    def q(tag: str) -> str:
        return f"{{{ns}}}{tag}" if ns else tag

    track = root.find(q("trk"))
    if track is None:
        raise FormatError("no track found in GPX", filename)

    name = _child_text(track, q("name")) or filename
    sport_label = _child_text(track, q("type")) or None

    points: list[GeoPoint] = []
    skipped = 0
    for trkpt in root.iter(q("trkpt")):
        lat_attr = trkpt.get("lat")
        lon_attr = trkpt.get("lon")
        if not lat_attr or not lon_attr:
            skipped += 1
            continue
        try:
            lat = float(lat_attr)
            lon = float(lon_attr)
        except ValueError:
            skipped += 1
            continue
        if not is_valid_coordinate(lat, lon):
            skipped += 1
            continue
        points.append(
            GeoPoint(
                lat=lat,
                lon=lon,
                ele=_parse_elevation(_child_text(trkpt, q("ele"))),
                time=_parse_time(_child_text(trkpt, q("time"))),
            )
        )

    if skipped:
        logger.debug("%s: skipped %d track points without valid coordinates", filename, skipped)
    return ParsedTrack(name=name, sport_label=sport_label, points=points)
