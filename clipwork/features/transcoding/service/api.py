from pathlib import Path

from clipwork.core.shared_types import FilterKind, MediaClip, MediaFile, SpeedFactor, TimeRange
from ..domain.models import TranscodeRequest
from ..data.opencv_transcoder import OpenCVTranscoder


def transcode(clip: MediaClip,
              time_range: TimeRange,
              speed: SpeedFactor,
              filter: FilterKind,
              output_path: Path) -> MediaClip:
    """
    Public Service API: decode a range of a clip, filter each frame and
    write a video-only stream at the speed-scaled frame rate.

    Blocks for the whole decode/encode; offload it from UI threads.
    """
    time_range.check_within(clip)

    request = TranscodeRequest(
        clip=clip,
        time_range=time_range,
        speed=SpeedFactor.from_value(speed),
        filter=FilterKind.from_value(filter),
        output_video=MediaFile(Path(output_path))
    )

    return OpenCVTranscoder().transcode(request)
