import logging

import cv2
import numpy as np

from clipwork.core.config.settings import settings
from clipwork.core.errors import EncodeError, MediaIOError
from clipwork.core.shared_types import MediaClip
from clipwork.features.filters.domain.models import output_channels
from clipwork.features.filters.service.api import get_kernel
from clipwork.features.probing.service.api import verify_video_artifact
from ..domain.interfaces import IFrameTranscoder
from ..domain.models import TranscodeRequest

logger = logging.getLogger(__name__)

STAGE = "transcode"


class OpenCVTranscoder(IFrameTranscoder):
    """
    Concrete implementation of IFrameTranscoder using OpenCV's
    VideoCapture/VideoWriter. Speed changes are realized purely by writing
    every source frame at a scaled frame rate; no frames are dropped or
    duplicated.
    """

    def transcode(self, request: TranscodeRequest) -> MediaClip:
        request.output_video.ensure_parent_dir()
        output_path = request.output_video.path

        try:
            written, expected = self._run(request)
        except Exception:
            # Never leave a partial artifact behind
            output_path.unlink(missing_ok=True)
            raise

        # A premature end-of-stream is a failure, not a truncated success.
        # One frame of slack absorbs container durations that round up.
        if expected - written > 1:
            output_path.unlink(missing_ok=True)
            raise MediaIOError(
                f"Source ended after {written} of {expected} frames",
                stage=STAGE, path=str(request.clip.path)
            )

        result = verify_video_artifact(output_path, STAGE, EncodeError)

        drift = abs(result.duration_seconds - request.expected_duration)
        if drift > 1.0 / request.output_frame_rate:
            logger.warning(
                f"Transcoded duration {result.duration_seconds:.3f}s differs from "
                f"expected {request.expected_duration:.3f}s by more than one frame"
            )

        logger.info(f"Transcoded {written} frames -> {output_path} @ {request.output_frame_rate:.3f} fps")
        return result

    def _run(self, request: TranscodeRequest):
        clip = request.clip
        cap = cv2.VideoCapture(str(clip.path))
        if not cap.isOpened():
            raise MediaIOError(f"Could not open video: {clip.path}", stage=STAGE, path=str(clip.path))

        try:
            src_fps = clip.frame_rate or cap.get(cv2.CAP_PROP_FPS)
            if not src_fps or src_fps <= 0:
                raise MediaIOError(f"Unknown frame rate for {clip.path}", stage=STAGE, path=str(clip.path))

            start_frame = int(round(request.time_range.start_seconds * src_fps))
            end_frame = int(round(request.time_range.end_seconds * src_fps))
            expected = end_frame - start_frame

            if start_frame > 0:
                cap.set(cv2.CAP_PROP_POS_FRAMES, start_frame)

            width = int(cap.get(cv2.CAP_PROP_FRAME_WIDTH)) or clip.width
            height = int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT)) or clip.height
            channels = output_channels(request.filter)
            kernel = get_kernel(request.filter)

            writer = self._open_writer(request, src_fps * float(request.speed), width, height, channels)
            written = 0
            try:
                while written < expected:
                    ok, frame = cap.read()
                    if not ok:
                        break
                    out_frame = kernel(frame)
                    self._check_frame(out_frame, width, height, channels)
                    writer.write(out_frame)
                    written += 1
            finally:
                writer.release()

            return written, expected
        finally:
            cap.release()

    @staticmethod
    def _open_writer(request: TranscodeRequest, fps: float, width: int, height: int, channels: int) -> cv2.VideoWriter:
        fourcc = cv2.VideoWriter_fourcc(*settings.VIDEO_FOURCC)
        # Grayscale frames need a single-channel writer
        writer = cv2.VideoWriter(str(request.output_video.path), fourcc, fps, (width, height), channels == 3)
        if not writer.isOpened():
            raise EncodeError(
                f"Could not open {settings.VIDEO_FOURCC} writer for {request.output_video.path} "
                f"({width}x{height}, {channels} channel(s), {fps:.3f} fps)",
                stage=STAGE, path=str(request.output_video.path)
            )
        return writer

    @staticmethod
    def _check_frame(frame: np.ndarray, width: int, height: int, channels: int) -> None:
        # cv2.VideoWriter silently drops frames of the wrong shape
        frame_channels = 1 if frame.ndim == 2 else frame.shape[2]
        if frame.shape[0] != height or frame.shape[1] != width or frame_channels != channels:
            raise EncodeError(
                f"Frame {frame.shape} does not match writer {height}x{width}x{channels}",
                stage=STAGE
            )
