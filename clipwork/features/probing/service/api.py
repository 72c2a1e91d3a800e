from pathlib import Path
from typing import Type, Union

from clipwork.core.errors import ClipworkError
from clipwork.core.shared_types import MediaClip, MediaFile
from ..data.ffprobe_adapter import FFprobeAdapter

_prober = FFprobeAdapter()


def probe_clip(source_path: Union[str, Path]) -> MediaClip:
    """
    Public Service API: validate a source file and read its stream facts.
    Blocks on ffprobe.
    """
    source = MediaFile(Path(source_path))
    source.require_readable_source()
    return _prober.probe_clip(source.path)


def verify_video_artifact(path: Path, stage: str, error_cls: Type[ClipworkError]) -> MediaClip:
    """
    Confirms a generated video artifact is openable and non-empty before its
    stage counts as complete.
    """
    if not path.exists() or path.stat().st_size == 0:
        raise error_cls(f"Stage produced no output: {path}", stage=stage, path=str(path))
    try:
        clip = _prober.probe_clip(path)
    except ClipworkError as e:
        raise error_cls(f"Output is not a readable video: {path} ({e.message})", stage=stage, path=str(path)) from e
    if clip.duration_seconds <= 0:
        raise error_cls(f"Output has zero duration: {path}", stage=stage, path=str(path))
    return clip


def verify_audio_artifact(path: Path, stage: str, error_cls: Type[ClipworkError]) -> float:
    """Same as verify_video_artifact for audio-only files; returns the duration."""
    if not path.exists() or path.stat().st_size == 0:
        raise error_cls(f"Stage produced no output: {path}", stage=stage, path=str(path))
    try:
        duration = _prober.probe_duration(path)
    except ClipworkError as e:
        raise error_cls(f"Output is not a readable audio file: {path} ({e.message})", stage=stage, path=str(path)) from e
    if duration <= 0:
        raise error_cls(f"Output has zero duration: {path}", stage=stage, path=str(path))
    return duration
