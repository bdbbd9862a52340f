import datetime
import struct

import pytest

import trailmap.formats.fit as fit_module
from trailmap.errors import DecodeError, FormatError
from trailmap.formats.fit import FitData, decode_fit, normalize_coordinate, parse_fit


@pytest.fixture
def fake_decoder(monkeypatch):
    """Replace the fitparse-backed decoder with one returning the given FitData."""

    def install(data: FitData):
        monkeypatch.setattr(fit_module, "decode_fit", lambda content: data)

    return install


def record(lat, lon, **extra):
    values = {"position_lat": lat, "position_long": lon}
    values.update(extra)
    return values


def test_semicircles_are_converted_and_out_of_range_points_dropped(fake_decoder):
    fake_decoder(
        FitData(
            sessions=[{"sport": "running"}],
            records=[
                record(900_000_000, 100_000_000),
                record(3_000_000_000, 100_000_000),
            ],
        )
    )
    result = parse_fit(b"", "run.fit")
    assert len(result.points) == 1
    assert result.points[0].lat == pytest.approx(75.437, abs=0.01)
    assert result.points[0].lon == pytest.approx(8.382, abs=0.01)


def test_degrees_are_kept_as_is():
    assert normalize_coordinate(45.5) == 45.5
    assert normalize_coordinate(-180) == -180
    assert normalize_coordinate(2**30) == pytest.approx(90.0)


def test_normalized_latitude_within_range_or_dropped(fake_decoder):
    raw_values = [181, 2**29, -(2**30), 2**30 + 1, 2**31 - 1, -(2**31)]
    fake_decoder(FitData(records=[record(v, 0) for v in raw_values]))
    result = parse_fit(b"", "x.fit")
    assert result.points
    for point in result.points:
        assert -90 <= point.lat <= 90


def test_alternate_position_fields(fake_decoder):
    fake_decoder(FitData(records=[{"lat": 12.5, "long": 99.25}, {"position_lat": None, "lat": 1, "long": 2}]))
    result = parse_fit(b"", "x.fit")
    assert [(p.lat, p.lon) for p in result.points] == [(12.5, 99.25), (1.0, 2.0)]


def test_records_without_position_are_skipped(fake_decoder):
    fake_decoder(FitData(records=[{"heart_rate": 120}, record(None, None), record(10.0, 10.0)]))
    result = parse_fit(b"", "x.fit")
    assert len(result.points) == 1


def test_elevation_and_timestamp_fields(fake_decoder):
    stamp = datetime.datetime(2024, 3, 1, 7, 30)
    fake_decoder(
        FitData(
            records=[
                record(10.0, 10.0, altitude=250.5, timestamp=stamp),
                record(10.0, 10.001, enhanced_altitude=260.0),
                record(10.0, 10.002),
            ]
        )
    )
    points = parse_fit(b"", "x.fit").points
    assert [p.ele for p in points] == [250.5, 260.0, 0.0]
    assert points[0].time == datetime.datetime(2024, 3, 1, 7, 30, tzinfo=datetime.UTC)
    assert points[1].time is None


def test_name_is_filename_and_sport_from_session(fake_decoder):
    fake_decoder(FitData(sessions=[{"sport": "cycling", "sub_sport": "mountain"}], records=[record(1.0, 1.0)]))
    result = parse_fit(b"", "Evening.fit")
    assert result.name == "Evening.fit"
    assert result.sport_label == "cycling"


def test_sub_sport_used_when_sport_is_unrecognised(fake_decoder):
    fake_decoder(FitData(sessions=[{"sport": "generic", "sub_sport": "trail_run"}], records=[record(1.0, 1.0)]))
    assert parse_fit(b"", "x.fit").sport_label == "trail_run"


def test_no_sessions_gives_no_sport_label(fake_decoder):
    fake_decoder(FitData(records=[record(1.0, 1.0)]))
    assert parse_fit(b"", "x.fit").sport_label is None


def test_no_valid_points_raises(fake_decoder):
    fake_decoder(FitData(sessions=[{"sport": "running"}], records=[record(3_000_000_000, 3_000_000_000)]))
    with pytest.raises(FormatError, match="no track points"):
        parse_fit(b"", "empty.fit")


def test_decoder_failure_is_wrapped(monkeypatch):
    def broken(content):
        raise DecodeError("FIT header mismatch")

    monkeypatch.setattr(fit_module, "decode_fit", broken)
    with pytest.raises(FormatError, match="FIT header mismatch") as excinfo:
        parse_fit(b"\x00", "bad.fit")
    assert isinstance(excinfo.value.__cause__, DecodeError)


def test_garbage_bytes_fail_to_decode():
    with pytest.raises(FormatError) as excinfo:
        parse_fit(b"this is not a FIT file at all", "garbage.fit")
    assert isinstance(excinfo.value.__cause__, DecodeError)


# Minimal FIT writer: 12-byte header, definition and data messages, file CRC.
_CRC_TABLE = (
    0x0000, 0xCC01, 0xD801, 0x1400, 0xF001, 0x3C00, 0x2800, 0xE401,
    0xA001, 0x6C00, 0x7800, 0xB401, 0x5000, 0x9C01, 0x8801, 0x4400,
)
FIT_EPOCH = datetime.datetime(1989, 12, 31, tzinfo=datetime.UTC)
INVALID_SINT32 = 0x7FFFFFFF


def fit_crc(data: bytes) -> int:
    crc = 0
    for byte in data:
        for nibble in (byte & 0xF, (byte >> 4) & 0xF):
            tmp = _CRC_TABLE[crc & 0xF]
            crc = (crc >> 4) & 0x0FFF
            crc = crc ^ tmp ^ _CRC_TABLE[nibble]
    return crc


def fit_document(records, sport=1, sub_sport=0) -> bytes:
    """Build a FIT activity with one session and one record per (lat, lon, altitude, time)."""
    body = b""
    # session (global 18): sport, sub_sport
    body += struct.pack("<BBBHB", 0x41, 0, 0, 18, 2) + bytes([5, 1, 0x00, 6, 1, 0x00])
    body += struct.pack("<BBB", 0x01, sport, sub_sport)
    # record (global 20): timestamp, position_lat, position_long, altitude
    body += struct.pack("<BBBHB", 0x40, 0, 0, 20, 4)
    body += bytes([253, 4, 0x86, 0, 4, 0x85, 1, 4, 0x85, 2, 2, 0x84])
    for lat, lon, altitude, time in records:
        timestamp = int((time - FIT_EPOCH).total_seconds())
        raw_altitude = int(round((altitude + 500) * 5))
        body += struct.pack("<BIiiH", 0x00, timestamp, lat, lon, raw_altitude)
    header = struct.pack("<BBHI4s", 12, 0x10, 2132, len(body), b".FIT")
    content = header + body
    return content + struct.pack("<H", fit_crc(content))


def test_parse_fit_sample():
    start = datetime.datetime(2024, 3, 1, 7, 30, tzinfo=datetime.UTC)
    content = fit_document(
        [
            (900_000_000, 100_000_000, 250.0, start),
            (INVALID_SINT32, INVALID_SINT32, 255.0, start + datetime.timedelta(seconds=5)),
            (900_010_000, 100_000_000, 260.0, start + datetime.timedelta(seconds=10)),
        ]
    )
    result = parse_fit(content, "morning.fit")

    assert result.name == "morning.fit"
    assert result.sport_label == "running"
    assert len(result.points) == 2
    first, last = result.points
    assert first.lat == pytest.approx(75.437, abs=0.01)
    assert first.lon == pytest.approx(8.382, abs=0.01)
    assert first.ele == pytest.approx(250.0)
    assert last.ele == pytest.approx(260.0)
    assert first.time == start
    assert last.time == start + datetime.timedelta(seconds=10)


def test_decode_fit_splits_sessions_and_records():
    start = datetime.datetime(2024, 3, 1, 7, 30, tzinfo=datetime.UTC)
    data = decode_fit(fit_document([(900_000_000, 100_000_000, 250.0, start)], sport=2))
    assert [s["sport"] for s in data.sessions] == ["cycling"]
    assert len(data.records) == 1
    assert data.records[0]["position_lat"] == 900_000_000


def test_corrupted_crc_fails_to_decode():
    start = datetime.datetime(2024, 3, 1, 7, 30, tzinfo=datetime.UTC)
    content = bytearray(fit_document([(900_000_000, 100_000_000, 250.0, start)]))
    content[-1] ^= 0xFF
    with pytest.raises(DecodeError):
        decode_fit(bytes(content))
