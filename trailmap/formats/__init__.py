"""File format handlers for activity data files (GPX, FIT)."""

from .base import FormatParser, ParsedTrack
from .fit import parse_fit
from .gpx import parse_gpx

# The file extension is the only format signal; content is never sniffed.
PARSERS: dict[str, FormatParser] = {
    ".gpx": parse_gpx,
    ".fit": parse_fit,
}

SUPPORTED_EXTENSIONS = tuple(PARSERS)


def parser_for(filename: str) -> FormatParser | None:
    """Return the parser for *filename* by its extension, or ``None`` if unsupported."""
    file_lower = filename.lower()
    for extension, parser in PARSERS.items():
        if file_lower.endswith(extension):
            return parser
    return None


__all__ = ["PARSERS", "SUPPORTED_EXTENSIONS", "FormatParser", "ParsedTrack", "parse_fit", "parse_gpx", "parser_for"]
