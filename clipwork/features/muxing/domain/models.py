from dataclasses import dataclass

from clipwork.core.shared_types import MediaClip, MediaFile
from clipwork.features.audio_retiming.domain.models import AudioTrack


@dataclass(frozen=True)
class MuxRequest:
    video: MediaClip      # video-only stream, copied as-is
    audio: AudioTrack     # re-encoded into the standard audio codec
    output_video: MediaFile

    @property
    def max_drift_seconds(self) -> float:
        """Tracks may differ by at most one video frame interval."""
        return self.video.frame_interval
