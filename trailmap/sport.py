"""Sport type classification for activity files.

GPX ``<type>`` elements and FIT session ``sport``/``sub_sport`` fields are free
text ("running", "Ride", "mountain_biking", "generic", ...). They are mapped to
the closed :class:`SportType` enumeration by substring matching.
"""

from enum import Enum


class SportType(Enum):
    """Supported sport types. Values are the display labels."""

    RUNNING = "Running"
    CYCLING = "Cycling"
    MOUNTAIN_BIKING = "Mountain Biking"
    GRAVEL_CYCLING = "Gravel Cycling"
    HIKING = "Hiking"
    TRAIL_RUNNING = "Trail Running"
    SKIING = "Skiing"
    SNOWBOARDING = "Snowboarding"
    OTHER = "Other"


# Evaluated in order, first substring hit wins. Compound tokens come before the
# generic ones they contain ("trail_run" before "run").
SPORT_TOKENS: tuple[tuple[str, SportType], ...] = (
    ("trail_run", SportType.TRAIL_RUNNING),
    ("mountain_biking", SportType.MOUNTAIN_BIKING),
    ("mtb", SportType.MOUNTAIN_BIKING),
    ("gravel", SportType.GRAVEL_CYCLING),
    ("snowboard", SportType.SNOWBOARDING),
    ("run", SportType.RUNNING),
    ("running", SportType.RUNNING),
    ("ride", SportType.CYCLING),
    ("cycling", SportType.CYCLING),
    ("hike", SportType.HIKING),
    ("hiking", SportType.HIKING),
    ("walk", SportType.HIKING),
    ("ski", SportType.SKIING),
)

# One colour per sport so activities of the same sport render alike.
SPORT_COLORS: dict[SportType, str] = {
    SportType.RUNNING: "#f97316",
    SportType.TRAIL_RUNNING: "#0d9488",
    SportType.CYCLING: "#0891b2",
    SportType.GRAVEL_CYCLING: "#9333ea",
    SportType.MOUNTAIN_BIKING: "#7e22ce",
    SportType.HIKING: "#65a30d",
    SportType.SKIING: "#2563eb",
    SportType.SNOWBOARDING: "#4f46e5",
    SportType.OTHER: "#6b7280",
}


def classify(raw_label: str | None) -> SportType:
    """Map a free-text sport label to a :class:`SportType`.

    Never raises: ``None``, an empty string or an unknown label all give
    :attr:`SportType.OTHER`.
    """
    if not raw_label:
        return SportType.OTHER
    lower = str(raw_label).lower()
    for token, sport in SPORT_TOKENS:
        if token in lower:
            return sport
    return SportType.OTHER


def sport_color(sport: SportType) -> str:
    """Return the display colour for *sport*."""
    return SPORT_COLORS[sport]


def parse_sport(value: str) -> SportType:
    """Resolve a user-supplied sport name (enum name or display label).

    Used by the CLI ``--sport`` option; unlike :func:`classify` this is strict.
    """
    normalized = value.strip().replace("-", " ").replace("_", " ").lower()
    for sport in SportType:
        if normalized in (sport.value.lower(), sport.name.replace("_", " ").lower()):
            return sport
    raise ValueError(f"Unknown sport type: {value}")
