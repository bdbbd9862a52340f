"""Shared types for the activity file parsers."""

from dataclasses import dataclass, field
from typing import Protocol

from trailmap.activity import GeoPoint


@dataclass
class ParsedTrack:
    """What a format parser hands to the aggregator."""

    name: str
    sport_label: str | None = None
    points: list[GeoPoint] = field(default_factory=list)


class FormatParser(Protocol):
    """Callable turning one file's raw content into a :class:`ParsedTrack`."""

    def __call__(self, content: bytes, filename: str) -> ParsedTrack: ...
