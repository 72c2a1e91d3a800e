import json
import logging
from fractions import Fraction
from pathlib import Path
from typing import Any, Dict, Optional

from clipwork.core.errors import MediaIOError
from clipwork.core.process.command import ffprobe_json_command
from clipwork.core.process.runner import run_tool
from clipwork.core.shared_types import MediaClip
from ..domain.interfaces import IMediaProber

logger = logging.getLogger(__name__)

STAGE = "probe"


def parse_rate(value: Optional[str]) -> float:
    """'30000/1001' -> 29.97; '0/0' or garbage -> 0.0"""
    if not value:
        return 0.0
    try:
        rate = Fraction(value)
    except (ValueError, ZeroDivisionError):
        return 0.0
    return float(rate)


def _to_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


class FFprobeAdapter(IMediaProber):
    """
    Concrete implementation of IMediaProber using ffprobe's JSON writer.
    """

    def _read(self, path: Path) -> Dict[str, Any]:
        if not path.exists():
            raise MediaIOError(f"Media file not found: {path}", stage=STAGE, path=str(path))

        proc = run_tool(ffprobe_json_command(path), stage=STAGE)
        try:
            return json.loads(proc.stdout or "{}")
        except json.JSONDecodeError as e:
            raise MediaIOError(f"Unreadable probe output for {path}", stage=STAGE, path=str(path)) from e

    def probe_clip(self, path: Path) -> MediaClip:
        info = self._read(path)
        streams = info.get("streams") or []

        video = next((s for s in streams if s.get("codec_type") == "video"), None)
        audio = next((s for s in streams if s.get("codec_type") == "audio"), None)

        if video is None:
            raise MediaIOError(f"No video stream in {path}", stage=STAGE, path=str(path))

        # r_frame_rate is the container's base rate; avg is the fallback for VFR files
        frame_rate = parse_rate(video.get("r_frame_rate")) or parse_rate(video.get("avg_frame_rate"))

        duration = _to_float((info.get("format") or {}).get("duration"))
        if duration <= 0:
            duration = _to_float(video.get("duration"))

        clip = MediaClip(
            path=path,
            duration_seconds=duration,
            frame_rate=frame_rate,
            resolution=(int(video.get("width") or 0), int(video.get("height") or 0)),
            video_codec_tag=str(video.get("codec_name") or video.get("codec_tag_string") or "unknown"),
            has_audio=audio is not None,
            audio_codec_tag=str(audio.get("codec_name")) if audio else None,
            video_duration_seconds=_to_float(video.get("duration")) or None
        )
        logger.debug(f"Probed {path}: {clip}")
        return clip

    def probe_duration(self, path: Path) -> float:
        info = self._read(path)
        duration = _to_float((info.get("format") or {}).get("duration"))
        if duration <= 0:
            # Some muxers only write per-stream durations
            streams = info.get("streams") or []
            duration = max((_to_float(s.get("duration")) for s in streams), default=0.0)
        return duration
