import pytest
from pathlib import Path

from clipwork.core.errors import MediaIOError, ValidationError
from clipwork.core.shared_types import (
    FilterKind, MediaClip, MediaFile, SpeedFactor, TimeRange, format_timestamp, parse_timestamp
)


def _clip(duration=20.0, fps=30.0):
    return MediaClip(path=Path("/tmp/main.mp4"), duration_seconds=duration, frame_rate=fps,
                     resolution=(320, 240), video_codec_tag="h264")


def test_time_range_rejects_inverted_and_negative():
    with pytest.raises(ValidationError):
        TimeRange(5, 5)
    with pytest.raises(ValidationError):
        TimeRange(6, 2)
    with pytest.raises(ValidationError):
        TimeRange(-1, 2)


def test_time_range_must_fit_inside_clip():
    clip = _clip(duration=10.0)

    assert TimeRange.for_clip(clip, 0, 10).duration == 10

    with pytest.raises(ValidationError):
        TimeRange.for_clip(clip, 0, 11)


def test_speed_factor_only_allows_fixed_set():
    assert SpeedFactor.from_value(0.5) is SpeedFactor.HALF
    assert SpeedFactor.from_value("1.25") is SpeedFactor.FIVE_QUARTERS

    with pytest.raises(ValidationError):
        SpeedFactor.from_value(2.0)
    with pytest.raises(ValidationError):
        SpeedFactor.from_value("fast")


def test_filter_kind_parsing():
    assert FilterKind.from_value("Sepia") is FilterKind.SEPIA
    assert FilterKind.from_value(FilterKind.BLUR) is FilterKind.BLUR

    with pytest.raises(ValidationError):
        FilterKind.from_value("vintage")


def test_media_file_source_checks(tmp_path):
    with pytest.raises(ValidationError):
        MediaFile(tmp_path / "clip.mkv").require_readable_source()

    with pytest.raises(MediaIOError):
        MediaFile(tmp_path / "missing.mp4").require_readable_source()

    real = tmp_path / "real.MOV"
    real.write_bytes(b"\x00")
    MediaFile(real).require_readable_source()


@pytest.mark.parametrize("raw, expected", [
    ("00:10", 10),
    ("01:05", 65),
    ("1:00:00", 3600),
    ("90", 90),
    (15, 15),
])
def test_parse_timestamp(raw, expected):
    assert parse_timestamp(raw) == expected


@pytest.mark.parametrize("raw", ["", "ab:cd", "00:75", "1.5", "1:2:3:4"])
def test_parse_timestamp_rejects_malformed(raw):
    with pytest.raises(ValidationError):
        parse_timestamp(raw)


def test_format_timestamp():
    assert format_timestamp(125) == "02:05"
    assert format_timestamp(parse_timestamp("03:07")) == "03:07"
