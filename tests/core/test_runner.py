import subprocess

import pytest

from clipwork.core.errors import MediaIOError, ProcessFailure
from clipwork.core.process import runner
from clipwork.core.process.command import FFmpegCommand


def test_command_builder_keeps_paths_as_single_arguments():
    cmd = (
        FFmpegCommand(binary="ffmpeg")
        .input("/videos/it's a clip.mp4", seek=10, duration=5)
        .option("-c", "copy")
        .output("/out/my clip.mp4")
    )

    assert cmd[0] == "ffmpeg"
    assert "/videos/it's a clip.mp4" in cmd
    assert cmd[-1] == "/out/my clip.mp4"
    # Seek and duration belong to the input that follows them
    i = cmd.index("-i")
    assert cmd[i - 4:i] == ["-ss", "10.000", "-t", "5.000"]


def test_nonzero_exit_becomes_process_failure(monkeypatch):
    def fake_run(cmd, **kwargs):
        raise subprocess.CalledProcessError(1, cmd, stderr="Invalid data found when processing input")

    monkeypatch.setattr(runner.subprocess, "run", fake_run)

    with pytest.raises(ProcessFailure) as exc:
        runner.run_tool(["ffmpeg", "-i", "broken.mp4", "out.mp4"], stage="transcode")

    assert exc.value.stage == "transcode"
    assert exc.value.exit_code == 1
    assert exc.value.command == ["ffmpeg", "-i", "broken.mp4", "out.mp4"]
    assert "Invalid data" in exc.value.stderr
    assert not exc.value.timed_out


def test_timeout_is_reported(monkeypatch):
    def fake_run(cmd, **kwargs):
        assert kwargs["timeout"] == 3
        raise subprocess.TimeoutExpired(cmd, 3)

    monkeypatch.setattr(runner.subprocess, "run", fake_run)

    with pytest.raises(ProcessFailure) as exc:
        runner.run_tool(["ffmpeg", "-i", "slow.mp4"], stage="concat", timeout=3)

    assert exc.value.timed_out
    assert exc.value.exit_code is None


def test_missing_binary_is_media_io_error():
    with pytest.raises(MediaIOError):
        runner.run_tool(["clipwork-no-such-binary", "-version"], stage="probe")


def test_never_uses_a_shell(monkeypatch):
    seen = {}

    def fake_run(cmd, **kwargs):
        seen.update(kwargs)
        return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")

    monkeypatch.setattr(runner.subprocess, "run", fake_run)
    runner.run_tool(["ffprobe", "x.mp4"], stage="probe")

    assert not seen.get("shell", False)
    assert seen["check"] is True
