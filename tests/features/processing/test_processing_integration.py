import pytest

from clipwork.core.errors import MediaIOError, ValidationError
from clipwork.features.processing.service.api import process_video


@pytest.mark.parametrize("speed", [0.5, 1.0])
def test_trim_retime_and_mux(make_clip, isolated_temp_root, tmp_path, speed):
    source = make_clip("src.mp4", duration=4)
    out = tmp_path / "processed.mp4"

    result = process_video(source, 1, 3, out, speed=speed, filter="sepia")

    assert out.exists()
    assert result.has_audio
    assert result.frame_rate == pytest.approx(30.0 * speed, rel=1e-3)
    assert result.duration_seconds == pytest.approx(2.0 / speed, abs=0.1)
    assert list(isolated_temp_root.iterdir()) == []


def test_muted_output_is_video_only(make_clip, isolated_temp_root, tmp_path):
    source = make_clip("src.mp4", duration=3)
    out = tmp_path / "muted.mp4"

    result = process_video(source, 0, 2, out, speed=1.5, filter="grayscale", mute_audio=True)

    assert not result.has_audio
    assert result.duration_seconds == pytest.approx(2.0 / 1.5, abs=0.1)
    assert list(isolated_temp_root.iterdir()) == []


def test_missing_source_is_reported(isolated_temp_root, tmp_path):
    with pytest.raises(MediaIOError):
        process_video(tmp_path / "nope.mp4", 0, 2, tmp_path / "out.mp4")


def test_bad_speed_is_rejected_before_probing(isolated_temp_root, tmp_path):
    with pytest.raises(ValidationError):
        process_video(tmp_path / "nope.mp4", 0, 2, tmp_path / "out.mp4", speed=2.0)
