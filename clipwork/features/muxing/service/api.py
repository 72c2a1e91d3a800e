from pathlib import Path

from clipwork.core.shared_types import MediaClip, MediaFile
from clipwork.features.audio_retiming.domain.models import AudioTrack
from ..domain.models import MuxRequest
from ..data.ffmpeg_adapter import FFmpegMuxer


def combine(video_only: MediaClip, audio_track: AudioTrack, output_path: Path) -> MediaClip:
    """
    Public Service API: stream-copy the video, re-encode the audio, write
    one container. Blocks on ffmpeg.
    """
    request = MuxRequest(
        video=video_only,
        audio=audio_track,
        output_video=MediaFile(Path(output_path))
    )
    return FFmpegMuxer().combine(request)
