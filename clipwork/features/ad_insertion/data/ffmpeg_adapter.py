import logging
from pathlib import Path
from typing import Optional

from clipwork.core.errors import EncodeError, ProcessFailure
from clipwork.core.process.command import FFmpegCommand
from clipwork.core.process.runner import run_tool
from clipwork.core.shared_types import MediaClip
from clipwork.features.probing.service.api import verify_video_artifact
from ..domain.interfaces import IStreamTrimmer

logger = logging.getLogger(__name__)


class FFmpegStreamTrimmer(IStreamTrimmer):
    """
    Concrete implementation of IStreamTrimmer using FFmpeg stream copy.
    """

    def trim(self, clip: MediaClip, start_seconds: float, end_seconds: Optional[float], output_path: Path) -> MediaClip:
        duration = None if end_seconds is None else end_seconds - start_seconds
        seek = start_seconds if start_seconds > 0 else None

        # -avoid_negative_ts: Rebase timestamps so every part starts at zero
        cmd = (
            FFmpegCommand()
            .input(clip.path, seek=seek, duration=duration)
            .option("-map", "0:v:0", "-map", "0:a:0?", "-c", "copy", "-avoid_negative_ts", "make_zero")
            .output(output_path)
        )

        span = "end" if end_seconds is None else f"{end_seconds:g}s"
        logger.info(f"Trimming {clip.path.name} [{start_seconds:g}s, {span}) -> {output_path.name}")
        try:
            run_tool(cmd, stage="trim")
        except ProcessFailure:
            if output_path.exists():
                output_path.unlink()
            raise

        return verify_video_artifact(output_path, "trim", EncodeError)
