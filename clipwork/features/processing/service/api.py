from dataclasses import replace
from pathlib import Path
from typing import Optional, Union

from clipwork.core.cancellation import CancellationToken, check_cancelled
from clipwork.core.shared_types import FilterKind, MediaClip, MediaFile, SpeedFactor, TimeRange
from clipwork.core.workspace import TempWorkspace
from clipwork.features.probing.service.api import probe_clip
from ..domain.models import ProcessingRequest
from .orchestrator import ProcessingOrchestrator


def process_clip(request: ProcessingRequest,
                 output_path: Union[str, Path],
                 cancel_token: Optional[CancellationToken] = None,
                 orchestrator: Optional[ProcessingOrchestrator] = None) -> MediaClip:
    """
    Public Service API: trim, retime and filter one clip into output_path.

    Every intermediate file lives in a temp workspace that is removed
    before this returns, on success and on failure. Blocks for the whole
    pipeline; offload it from UI threads.
    """
    output = MediaFile(Path(output_path))
    orchestrator = orchestrator or ProcessingOrchestrator()

    with TempWorkspace("process") as workspace:
        result = orchestrator.run(request, workspace, suffix=output.path.suffix or ".mp4",
                                  cancel_token=cancel_token)
        check_cancelled(cancel_token, "publish")
        published = workspace.publish(result.path, output.path)

    return replace(result, path=published)


def process_video(source_path: Union[str, Path],
                  start: float,
                  end: float,
                  dest_path: Union[str, Path],
                  speed: float = 1.0,
                  filter: str = "none",
                  mute_audio: bool = False,
                  cancel_token: Optional[CancellationToken] = None) -> MediaClip:
    """
    Public Service API: Process a segment of a video file.

    Args:
        source_path: Path to the source video (.mp4, .avi or .mov).
        start: Start timestamp in seconds.
        end: End timestamp in seconds.
        dest_path: Path where the processed clip should be saved.
        speed: One of 0.5, 0.75, 1.0, 1.25, 1.5.
        filter: none, sepia, grayscale, edge_detect or blur.
        mute_audio: Drop the audio track instead of retiming it.
    """
    # Cheap checks first: nothing is probed for a malformed request
    time_range = TimeRange(start_seconds=start, end_seconds=end)
    speed = SpeedFactor.from_value(speed)
    kind = FilterKind.from_value(filter)

    clip = probe_clip(source_path)
    request = ProcessingRequest(clip=clip, time_range=time_range, speed=speed, filter=kind, mute_audio=mute_audio)
    return process_clip(request, dest_path, cancel_token)
