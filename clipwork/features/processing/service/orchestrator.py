import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Optional, Tuple

from clipwork.core.cancellation import CancellationToken, check_cancelled
from clipwork.core.config.settings import settings
from clipwork.core.shared_types import MediaClip
from clipwork.core.workspace import TempWorkspace
from clipwork.features.audio_retiming.domain.models import AudioTrack
from clipwork.features.audio_retiming.service.api import retime_audio
from clipwork.features.muxing.service.api import combine
from clipwork.features.transcoding.service.api import transcode
from ..domain.models import ProcessingRequest

logger = logging.getLogger(__name__)


class ProcessingOrchestrator:
    """
    Transcoder and Audio Retimer on the same source, then the Muxer.

    The stage functions are injectable so the flow can be exercised
    without ffmpeg or OpenCV.
    """

    def __init__(self,
                 transcode_fn: Callable[..., MediaClip] = transcode,
                 retime_fn: Callable[..., AudioTrack] = retime_audio,
                 combine_fn: Callable[..., MediaClip] = combine,
                 parallel: Optional[bool] = None):
        self.transcode_fn = transcode_fn
        self.retime_fn = retime_fn
        self.combine_fn = combine_fn
        self.parallel = settings.PARALLEL_STAGES if parallel is None else parallel

    def run(self, request: ProcessingRequest, workspace: TempWorkspace, suffix: str = ".mp4",
            cancel_token: Optional[CancellationToken] = None) -> MediaClip:
        """Returns the final artifact, still inside the workspace."""
        if not request.mute_audio and not request.clip.has_audio:
            logger.warning(f"{request.clip.path.name} has no audio stream; output will be video-only")

        video_path = workspace.new_path("transcode", suffix)
        check_cancelled(cancel_token, "transcode")

        if not request.wants_audio:
            # Muted: the Audio Retimer is never invoked
            return self._transcode(request, video_path)

        video, audio = self._run_stages(request, workspace, video_path, cancel_token)

        check_cancelled(cancel_token, "mux")
        muxed = self.combine_fn(video, audio, workspace.new_path("mux", suffix))
        workspace.discard(video.path)
        workspace.discard(audio.path)
        return muxed

    def _run_stages(self, request: ProcessingRequest, workspace: TempWorkspace, video_path: Path,
                    cancel_token: Optional[CancellationToken]) -> Tuple[MediaClip, AudioTrack]:
        if self.parallel:
            # Both stages read the same immutable source and write disjoint files
            with ThreadPoolExecutor(max_workers=2) as pool:
                video_future = pool.submit(self._transcode, request, video_path)
                audio_future = pool.submit(self._retime, request, workspace)
                # result() re-raises the stage's own error
                return video_future.result(), audio_future.result()

        video = self._transcode(request, video_path)
        check_cancelled(cancel_token, "audio_retime")
        return video, self._retime(request, workspace)

    def _transcode(self, request: ProcessingRequest, video_path: Path) -> MediaClip:
        logger.info(f"[transcode] {request.clip.path.name} {request.time_range.start_seconds:g}-"
                    f"{request.time_range.end_seconds:g}s x{float(request.speed):g} filter={request.filter.value}")
        return self.transcode_fn(request.clip, request.time_range, request.speed, request.filter, video_path)

    def _retime(self, request: ProcessingRequest, workspace: TempWorkspace) -> AudioTrack:
        logger.info(f"[audio_retime] {request.clip.path.name} x{float(request.speed):g}")
        return self.retime_fn(request.clip, request.time_range, request.speed, workspace)
