from dataclasses import dataclass

from clipwork.core.shared_types import FilterKind, MediaClip, SpeedFactor, TimeRange


@dataclass(frozen=True)
class ProcessingRequest:
    """
    One trim/speed/filter job on a single clip.
    Consumed by the pipeline, never retained.
    """
    clip: MediaClip
    time_range: TimeRange
    speed: SpeedFactor = SpeedFactor.NORMAL
    filter: FilterKind = FilterKind.NONE
    mute_audio: bool = False

    def __post_init__(self):
        object.__setattr__(self, "speed", SpeedFactor.from_value(self.speed))
        object.__setattr__(self, "filter", FilterKind.from_value(self.filter))
        self.time_range.check_within(self.clip)

    @property
    def wants_audio(self) -> bool:
        return not self.mute_audio and self.clip.has_audio

    @property
    def expected_duration(self) -> float:
        return self.time_range.duration / float(self.speed)
