"""This is the init module for trailmap"""

from .activity import Activity, ActivityStats, GeoPoint
from .aggregate import build_activity
from .errors import DecodeError, FormatError, TrailmapError
from .ingest import InputFile, parse_files
from .sport import SportType, classify

__version__ = "0.0.1"
__all__ = [
    "Activity",
    "ActivityStats",
    "DecodeError",
    "FormatError",
    "GeoPoint",
    "InputFile",
    "SportType",
    "TrailmapError",
    "build_activity",
    "classify",
    "parse_files",
]
