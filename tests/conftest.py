import datetime

import pytest

from trailmap.activity import GeoPoint


def utc(*args) -> datetime.datetime:
    return datetime.datetime(*args, tzinfo=datetime.UTC)


def gpx_document(points, name="Morning Run", sport="running", segments=1) -> str:
    """Build a GPX 1.1 document; *points* are (lat, lon, ele, iso_time) tuples split over *segments*."""
    per_segment = max(1, -(-len(points) // segments))
    chunks = [points[i : i + per_segment] for i in range(0, len(points), per_segment)] or [[]]
    body = []
    for chunk in chunks:
        body.append("    <trkseg>")
        for lat, lon, ele, time in chunk:
            children = ""
            if ele is not None:
                children += f"<ele>{ele}</ele>"
            if time is not None:
                children += f"<time>{time}</time>"
            body.append(f'      <trkpt lat="{lat}" lon="{lon}">{children}</trkpt>')
        body.append("    </trkseg>")
    name_tag = f"<name>{name}</name>" if name is not None else ""
    type_tag = f"<type>{sport}</type>" if sport is not None else ""
    return f"""<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="pytest" xmlns="http://www.topografix.com/GPX/1/1">
  <trk>
    {name_tag}{type_tag}
{chr(10).join(body)}
  </trk>
</gpx>
"""


@pytest.fixture
def morning_run_gpx() -> str:
    return gpx_document(
        [
            (0, 0, 10, "2024-05-27T12:00:00Z"),
            (0, 0.001, 12, "2024-05-27T12:00:01Z"),
        ]
    )


@pytest.fixture
def square_points() -> list[GeoPoint]:
    return [
        GeoPoint(lat=45.0, lon=7.0, ele=300.0, time=utc(2024, 6, 1, 8, 0, 0)),
        GeoPoint(lat=45.001, lon=7.0, ele=320.0, time=utc(2024, 6, 1, 8, 1, 0)),
        GeoPoint(lat=45.001, lon=7.001, ele=290.0, time=utc(2024, 6, 1, 8, 2, 0)),
        GeoPoint(lat=45.0, lon=7.001, ele=None, time=utc(2024, 6, 1, 8, 3, 0)),
    ]


@pytest.fixture
def make_gpx():
    return gpx_document
