"""Batch ingestion of activity files.

Files are parsed one at a time, in the order given. A file that fails to
parse is logged and skipped; the rest of the batch carries on, so the result
is always the list of activities that could be built.

Drop any supported activity file (.gpx, .fit, in any letter case) into the
data folder and :func:`collect_activity_files` will find it.
"""

import glob
import logging
import os
import threading
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from trailmap.activity import Activity
from trailmap.aggregate import build_activity
from trailmap.errors import FormatError, TrailmapError
from trailmap.formats import parser_for
from trailmap.sport import classify

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, str], None]


@dataclass(frozen=True)
class InputFile:
    """One file handed to the batch.

    Either *content* holds the raw bytes, or *path* points at the file on disk
    and it is read only when the batch reaches it.
    """

    name: str
    content: bytes | None = None
    path: str | None = None

    def __post_init__(self):
        if self.content is None and self.path is None:
            raise ValueError(f"InputFile {self.name!r} needs either content or a path")

    def read(self) -> bytes:
        if self.content is not None:
            return self.content
        with open(self.path, "rb") as f:
            return f.read()


def parse_file(input_file: InputFile) -> Activity | None:
    """Parse one file into an Activity.

    Returns ``None`` when the extension is not a supported format.

    Raises:
        FormatError: the content does not match the format.
    """
    parser = parser_for(input_file.name)
    if parser is None:
        return None
    track = parser(input_file.read(), input_file.name)
    try:
        return build_activity(track.points, track.name, classify(track.sport_label))
    except FormatError as e:
        if e.filename is None:
            e.filename = input_file.name
        raise


def parse_files(
    files: Sequence[InputFile],
    on_progress: ProgressCallback | None = None,
    cancel: threading.Event | None = None,
) -> list[Activity]:
    """Parse a batch of files sequentially and return the activities that succeeded.

    Args:
        files: Files to parse, processed strictly in this order.
        on_progress: Called as ``on_progress(index, total, filename)`` before
            each file, with a 1-based index.
        cancel: When set, no further files are started and the activities
            parsed so far are returned.

    Returns:
        Activities in processing order. Unsupported extensions are ignored and
        files that fail to parse are skipped.
    """
    activities: list[Activity] = []
    total = len(files)

    for index, input_file in enumerate(files, start=1):
        if cancel is not None and cancel.is_set():
            logger.info("Batch cancelled after %d of %d files", index - 1, total)
            break

        if on_progress:
            on_progress(index, total, input_file.name)

        try:
            activity = parse_file(input_file)
        except (TrailmapError, OSError) as e:
            logger.warning("Failed to parse %s: %s", input_file.name, e)
            continue

        if activity is None:
            logger.debug("Ignoring unsupported file %s", input_file.name)
            continue
        activities.append(activity)

    return activities


def collect_activity_files(folder: str) -> list[str]:
    """Return every supported activity file found anywhere under *folder*."""
    pattern = os.path.join(folder, "**", "*")
    found = [
        path
        for path in glob.glob(pattern, recursive=True)
        if os.path.isfile(path) and parser_for(path) is not None
    ]
    return sorted(found)


def input_files_from_paths(paths: Iterable[str]) -> list[InputFile]:
    """Build lazily-read input files from file and folder paths.

    Folders are expanded to the supported files under them. Nothing is read
    until :func:`parse_files` reaches the file, and each handle is closed as
    soon as its bytes are read.
    """
    files: list[InputFile] = []
    for path in paths:
        if os.path.isdir(path):
            files.extend(input_files_from_paths(collect_activity_files(path)))
        else:
            files.append(InputFile(name=os.path.basename(path), path=path))
    return files
