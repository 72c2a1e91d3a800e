import logging
from pathlib import Path

from clipwork.core.errors import MediaIOError, ProcessFailure
from clipwork.core.process.command import FFmpegCommand
from clipwork.core.process.runner import run_tool
from clipwork.core.shared_types import MediaClip, SpeedFactor, TimeRange
from clipwork.features.probing.service.api import verify_audio_artifact
from ..domain.interfaces import IAudioRetimer
from ..domain.models import AudioTrack, atempo_filter

logger = logging.getLogger(__name__)


class FFmpegAudioRetimer(IAudioRetimer):
    """
    Concrete implementation of IAudioRetimer using FFmpeg.
    Extraction is a stream copy into Matroska audio (accepts any codec);
    retiming decodes, filters with atempo and writes PCM WAV so the muxer
    does the only lossy encode.
    """

    def extract(self, clip: MediaClip, output_path: Path) -> AudioTrack:
        stage = "audio_extract"
        if not clip.has_audio:
            raise MediaIOError(f"No audio stream in {clip.path}", stage=stage, path=str(clip.path))

        # -vn: Disable video
        # -c:a copy: Keep the encoded audio as-is
        cmd = (
            FFmpegCommand()
            .input(clip.path)
            .option("-map", "0:a:0", "-vn", "-c:a", "copy")
            .output(output_path)
        )
        self._run(cmd, stage, output_path)

        duration = verify_audio_artifact(output_path, stage, MediaIOError)
        logger.info(f"Extracted audio track {output_path} ({duration:.3f}s)")
        return AudioTrack(path=output_path, duration_seconds=duration)

    def retime(self, track: AudioTrack, time_range: TimeRange, speed: SpeedFactor, output_path: Path) -> AudioTrack:
        stage = "audio_retime"
        factor = float(speed)

        builder = FFmpegCommand().input(track.path, seek=time_range.start_seconds, duration=time_range.duration)
        builder.option("-map", "0:a:0")
        if factor != 1.0:
            builder.option("-filter:a", atempo_filter(factor))
        cmd = builder.option("-c:a", "pcm_s16le").output(output_path)
        self._run(cmd, stage, output_path)

        verify_audio_artifact(output_path, stage, MediaIOError)

        # Derived from the request, not from re-probing the video output
        expected = time_range.duration / factor
        logger.info(f"Retimed audio {output_path} to {expected:.3f}s (x{factor})")
        return AudioTrack(path=output_path, duration_seconds=expected)

    @staticmethod
    def _run(cmd, stage: str, output_path: Path) -> None:
        try:
            run_tool(cmd, stage=stage)
        except ProcessFailure:
            output_path.unlink(missing_ok=True)
            raise
