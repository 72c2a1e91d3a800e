from clipwork.core.shared_types import MediaClip, SpeedFactor, TimeRange
from clipwork.core.workspace import TempWorkspace
from ..domain.models import AudioTrack
from ..data.ffmpeg_adapter import FFmpegAudioRetimer


def retime_audio(clip: MediaClip,
                 time_range: TimeRange,
                 speed: SpeedFactor,
                 workspace: TempWorkspace) -> AudioTrack:
    """
    Public Service API: extract the clip's audio and retime it to match a
    transcoded range. Both artifacts are owned by the workspace.

    Blocks on two ffmpeg runs; offload it from UI threads.
    """
    adapter = FFmpegAudioRetimer()

    extracted = adapter.extract(clip, workspace.new_path("audio_extract", ".mka"))
    retimed = adapter.retime(extracted, time_range, speed, workspace.new_path("audio_retime", ".wav"))

    # The stream-copied track is no longer needed once retimed
    workspace.discard(extracted.path)
    return retimed
