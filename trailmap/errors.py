"""Exception types raised while ingesting activity files."""


class TrailmapError(Exception):
    """Base class for all trailmap errors."""


class DecodeError(TrailmapError):
    """Low-level XML or FIT decoding failure reported by a parsing library."""


class FormatError(TrailmapError):
    """A file does not conform to the format its extension claims.

    Always scoped to a single file. When the failure came from a decoding
    library the original :class:`DecodeError` is chained as ``__cause__``.
    """

    def __init__(self, message: str, filename: str | None = None):
        super().__init__(message)
        self.filename = filename

    def __str__(self) -> str:
        message = super().__str__()
        if self.filename:
            return f"{self.filename}: {message}"
        return message
