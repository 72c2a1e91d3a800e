from dataclasses import dataclass

from clipwork.core.shared_types import FilterKind, MediaClip, MediaFile, SpeedFactor, TimeRange


@dataclass(frozen=True)
class TranscodeRequest:
    """
    Decode [time_range) of a clip, filter every frame, and write a
    video-only stream at clip.frame_rate * speed.
    """
    clip: MediaClip
    time_range: TimeRange
    speed: SpeedFactor
    filter: FilterKind
    output_video: MediaFile

    @property
    def output_frame_rate(self) -> float:
        return self.clip.frame_rate * float(self.speed)

    @property
    def expected_duration(self) -> float:
        return self.time_range.duration / float(self.speed)
