from pathlib import Path

import pytest

from clipwork.core.errors import MediaIOError, ProcessFailure
from clipwork.core.shared_types import MediaClip, SpeedFactor, TimeRange
from clipwork.features.audio_retiming.data import ffmpeg_adapter
from clipwork.features.audio_retiming.data.ffmpeg_adapter import FFmpegAudioRetimer
from clipwork.features.audio_retiming.domain.models import AudioTrack


@pytest.fixture
def fake_tools(monkeypatch):
    """Records every command and writes a placeholder output file."""
    calls = []

    def fake_run_tool(cmd, stage, timeout=None):
        calls.append((stage, cmd))
        Path(cmd[-1]).write_bytes(b"audio")

    monkeypatch.setattr(ffmpeg_adapter, "run_tool", fake_run_tool)
    monkeypatch.setattr(ffmpeg_adapter, "verify_audio_artifact", lambda path, stage, error_cls: 4.0)
    return calls


def _clip(has_audio=True):
    return MediaClip(path=Path("/videos/src.mp4"), duration_seconds=10.0, frame_rate=30.0,
                     resolution=(320, 240), video_codec_tag="h264",
                     has_audio=has_audio, audio_codec_tag="aac" if has_audio else None)


def test_extract_without_audio_never_runs_a_tool(fake_tools, tmp_path):
    with pytest.raises(MediaIOError):
        FFmpegAudioRetimer().extract(_clip(has_audio=False), tmp_path / "a.mka")

    assert fake_tools == []


def test_extract_is_a_stream_copy(fake_tools, tmp_path):
    track = FFmpegAudioRetimer().extract(_clip(), tmp_path / "a.mka")

    stage, cmd = fake_tools[0]
    assert stage == "audio_extract"
    assert cmd[cmd.index("-c:a") + 1] == "copy"
    assert "-vn" in cmd
    assert track.duration_seconds == 4.0


def test_retime_trims_then_applies_tempo(fake_tools, tmp_path):
    track = AudioTrack(path=tmp_path / "a.mka", duration_seconds=10.0)

    retimed = FFmpegAudioRetimer().retime(track, TimeRange(2, 6), SpeedFactor.HALF, tmp_path / "r.wav")

    _, cmd = fake_tools[0]
    assert cmd[cmd.index("-ss") + 1] == "2.000"
    assert cmd[cmd.index("-t") + 1] == "4.000"
    assert cmd[cmd.index("-filter:a") + 1] == "atempo=0.5"
    # Duration comes from the request, not from probing
    assert retimed.duration_seconds == pytest.approx(8.0)


def test_retime_at_normal_speed_has_no_tempo_filter(fake_tools, tmp_path):
    track = AudioTrack(path=tmp_path / "a.mka", duration_seconds=10.0)

    retimed = FFmpegAudioRetimer().retime(track, TimeRange(0, 3), SpeedFactor.NORMAL, tmp_path / "r.wav")

    _, cmd = fake_tools[0]
    assert "-filter:a" not in cmd
    assert retimed.duration_seconds == pytest.approx(3.0)


def test_failed_retime_removes_partial_output(monkeypatch, tmp_path):
    out = tmp_path / "r.wav"

    def failing_run_tool(cmd, stage, timeout=None):
        Path(cmd[-1]).write_bytes(b"half")
        raise ProcessFailure(stage, cmd, exit_code=1)

    monkeypatch.setattr(ffmpeg_adapter, "run_tool", failing_run_tool)

    with pytest.raises(ProcessFailure):
        FFmpegAudioRetimer().retime(AudioTrack(tmp_path / "a.mka", 10.0), TimeRange(0, 2), SpeedFactor.ONE_AND_HALF, out)

    assert not out.exists()
