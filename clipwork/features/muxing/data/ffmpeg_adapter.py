import logging

from clipwork.core.config.settings import settings
from clipwork.core.errors import MuxError, ProcessFailure
from clipwork.core.process.command import FFmpegCommand
from clipwork.core.process.runner import run_tool
from clipwork.core.shared_types import MediaClip
from clipwork.features.probing.service.api import verify_audio_artifact, verify_video_artifact
from ..domain.interfaces import IMuxer
from ..domain.models import MuxRequest

logger = logging.getLogger(__name__)

STAGE = "mux"


class FFmpegMuxer(IMuxer):
    """
    Concrete implementation of IMuxer using FFmpeg.
    """

    def combine(self, request: MuxRequest) -> MediaClip:
        audio_duration = verify_audio_artifact(request.audio.path, STAGE, MuxError)
        video_duration = request.video.duration_seconds

        drift = abs(video_duration - audio_duration)
        if drift > request.max_drift_seconds:
            raise MuxError(
                f"Track durations differ by {drift:.3f}s (video {video_duration:.3f}s, "
                f"audio {audio_duration:.3f}s, allowed {request.max_drift_seconds:.3f}s)",
                stage=STAGE,
                video=str(request.video.path),
                audio=str(request.audio.path)
            )

        request.output_video.ensure_parent_dir()
        output_path = request.output_video.path

        # -c:v copy: The transcoder already encoded the frames
        # -c:a aac: Standard audio codec for every output container
        cmd = (
            FFmpegCommand()
            .input(request.video.path)
            .input(request.audio.path)
            .option(
                "-map", "0:v:0",
                "-map", "1:a:0",
                "-c:v", "copy",
                "-c:a", settings.AUDIO_CODEC,
                "-b:a", settings.AUDIO_BITRATE,
                "-ar", str(settings.AUDIO_SAMPLE_RATE),
            )
            .output(output_path)
        )

        try:
            run_tool(cmd, stage=STAGE)
        except ProcessFailure as e:
            output_path.unlink(missing_ok=True)
            raise MuxError(f"Muxing failed: {e.message}", stage=STAGE,
                           command=e.command, exit_code=e.exit_code) from e

        result = verify_video_artifact(output_path, STAGE, MuxError)
        logger.info(f"Muxed {request.video.path.name} + {request.audio.path.name} -> {output_path}")
        return result
