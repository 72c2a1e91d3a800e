# File: tests/conftest.py

import os
import shutil
import subprocess
import sys
from pathlib import Path

import pytest
import sqlalchemy
from sqlalchemy import text

# 1. Add project root to path
sys.path.append(os.getcwd())

# 2. Point the ledger and the workspaces at test locations before settings is imported
TEST_DIR = Path(__file__).parent / "temp_artifacts"
TEST_DIR.mkdir(parents=True, exist_ok=True)
os.environ.setdefault("DATABASE_URL", f"sqlite:///{(TEST_DIR / 'test_clipwork.db').as_posix()}")
os.environ.setdefault("CLIPWORK_TEMP_ROOT", str(TEST_DIR / "workspaces"))

from clipwork.core.database.connection import engine  # noqa: E402

HAS_FFMPEG = shutil.which("ffmpeg") is not None and shutil.which("ffprobe") is not None


@pytest.fixture(scope="session", autouse=True)
def global_setup():
    """
    Runs once per test session.
    Creates the ledger tables.
    """
    from clipwork.core.database.base import Base
    import clipwork.core.jobs.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def clean_db(global_setup):
    """
    Runs before EVERY test.
    Empties every ledger table.
    """
    with engine.connect() as conn:
        trans = conn.begin()
        for table in sqlalchemy.inspect(engine).get_table_names():
            conn.execute(text(f'DELETE FROM "{table}";'))
        trans.commit()

    yield


@pytest.fixture
def make_clip(tmp_path):
    """
    Factory generating short synthetic clips with FFmpeg's lavfi sources.
    One keyframe per second, so stream-copy cuts on whole seconds are exact.

    Usage: make_clip("main.mp4", duration=20, color="red")
    """
    if not HAS_FFMPEG:
        pytest.skip("ffmpeg/ffprobe not installed")

    def _make(name: str,
              duration: int = 5,
              size: str = "320x240",
              rate: int = 30,
              color: str = None,
              audio: bool = True) -> Path:
        path = tmp_path / name
        if color:
            video_src = f"color=c={color}:size={size}:rate={rate}:duration={duration}"
        else:
            video_src = f"testsrc=duration={duration}:size={size}:rate={rate}"

        cmd = ["ffmpeg", "-y", "-f", "lavfi", "-i", video_src]
        if audio:
            cmd += ["-f", "lavfi", "-i", f"sine=frequency=440:duration={duration}:sample_rate=48000"]
        cmd += ["-c:v", "libx264", "-pix_fmt", "yuv420p", "-g", str(rate), "-keyint_min", str(rate),
                "-sc_threshold", "0"]
        if audio:
            cmd += ["-c:a", "aac", "-shortest"]
        cmd.append(str(path))

        subprocess.run(cmd, check=True, capture_output=True)
        return path

    return _make


@pytest.fixture
def isolated_temp_root(tmp_path, monkeypatch):
    """Routes every TempWorkspace of the test into an empty directory."""
    from clipwork.core.config.settings import settings

    root = tmp_path / "workspaces"
    root.mkdir()
    monkeypatch.setattr(settings, "TEMP_ROOT", root)
    return root


@pytest.fixture
def color_at():
    """
    Reads one frame at a timestamp and names its dominant channel
    ("blue", "green" or "red"). Pairs with make_clip(color=...).
    """
    import cv2
    import numpy as np

    def _color(path: Path, seconds: float) -> str:
        cap = cv2.VideoCapture(str(path))
        try:
            cap.set(cv2.CAP_PROP_POS_MSEC, seconds * 1000.0)
            ok, frame = cap.read()
        finally:
            cap.release()
        assert ok, f"No frame at {seconds}s in {path}"
        means = frame.reshape(-1, 3).mean(axis=0)
        return ("blue", "green", "red")[int(np.argmax(means))]

    return _color
