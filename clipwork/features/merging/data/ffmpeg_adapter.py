import logging
from pathlib import Path
from typing import Optional, Sequence

from clipwork.core.config.settings import settings
from clipwork.core.process.command import FFmpegCommand
from clipwork.core.process.runner import run_tool
from clipwork.core.shared_types import MediaClip
from ..domain.interfaces import IConcatenator

logger = logging.getLogger(__name__)


def _concat_escape(path: Path) -> str:
    # ffconcat quoting: close the quote, emit an escaped quote, reopen
    return str(path.resolve().as_posix()).replace("'", "'\\''")


class FFmpegConcatenator(IConcatenator):
    """
    Concrete implementation of IConcatenator using FFmpeg's concat demuxer.
    """

    def write_concat_list(self, parts: Sequence[Path], list_path: Path,
                          durations: Optional[Sequence[Optional[float]]] = None) -> Path:
        with open(list_path, "w", encoding="utf-8") as f:
            f.write("ffconcat version 1.0\n")
            for idx, part in enumerate(parts):
                f.write(f"file '{_concat_escape(Path(part))}'\n")
                length = durations[idx] if durations else None
                if length:
                    # Next part starts where this video ends; the audio tail past it is dropped
                    f.write(f"duration {length:.6f}\n")
                    f.write(f"outpoint {length:.6f}\n")
        return list_path

    def concat_copy(self, list_path: Path, output_path: Path) -> None:
        # -safe 0: The list holds absolute paths
        # -c copy: No re-encode; inputs share one profile
        cmd = (
            FFmpegCommand()
            .input(list_path, fmt="concat", options=("-safe", "0"))
            .option("-map", "0:v:0", "-map", "0:a:0?", "-c", "copy")
            .output(output_path)
        )
        run_tool(cmd, stage="concat")

    def normalize(self, clip: MediaClip, reference: MediaClip, with_audio: bool, output_path: Path) -> None:
        width, height = reference.resolution
        vf = (
            f"scale={width}:{height}:force_original_aspect_ratio=decrease,"
            f"pad={width}:{height}:(ow-iw)/2:(oh-ih)/2,setsar=1,"
            f"fps={reference.frame_rate:.6g},format=yuv420p"
        )

        builder = FFmpegCommand().input(clip.path)
        if with_audio and not clip.has_audio:
            # Silent track so every part has the same stream layout
            builder.input(f"anullsrc=channel_layout=stereo:sample_rate={settings.AUDIO_SAMPLE_RATE}", fmt="lavfi")
            builder.option("-map", "0:v:0", "-map", "1:a:0", "-shortest")
        elif with_audio:
            # Padded audio never ends before the video; -shortest cuts it at the last frame
            builder.option("-map", "0:v:0", "-map", "0:a:0", "-af", "apad", "-shortest")
        else:
            builder.option("-map", "0:v:0", "-an")

        builder.option("-vf", vf, "-c:v", "libx264", "-preset", "veryfast", "-crf", "20")
        if with_audio:
            builder.option(
                "-c:a", settings.AUDIO_CODEC,
                "-b:a", settings.AUDIO_BITRATE,
                "-ar", str(settings.AUDIO_SAMPLE_RATE),
                "-ac", "2",
            )

        logger.info(f"Normalizing {clip.path.name} to {width}x{height}@{reference.frame_rate:.3f}")
        run_tool(builder.output(output_path), stage="normalize")
