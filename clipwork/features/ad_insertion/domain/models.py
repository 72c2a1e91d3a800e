from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from clipwork.core.errors import ClipworkError, ValidationError
from clipwork.core.shared_types import MediaClip

STAGE = "ad_validate"


class SpliceState(str, Enum):
    PENDING = "pending"
    SPLIT = "split"
    TRIM = "trim"
    CONCAT = "concat"
    COMPLETED = "completed"
    FAILED = "failed"


def _require_whole_seconds(name: str, value: float) -> None:
    if float(value) != int(value):
        raise ValidationError(f"{name} must be whole seconds, got {value}", stage=STAGE)


@dataclass(frozen=True)
class AdInsertionJob:
    """
    Insert ad_clip[0, ad_duration) into main_clip after insert_after seconds.

    ad_duration defaults to the full ad length. With repeat=True the ad is
    inserted after every insert_after interval of the main clip.
    """
    main_clip: MediaClip
    ad_clip: MediaClip
    insert_after_seconds: int
    ad_duration_seconds: Optional[float] = None
    repeat: bool = False
    allow_normalize: bool = True

    def __post_init__(self):
        if self.ad_duration_seconds is None:
            object.__setattr__(self, "ad_duration_seconds", self.ad_clip.duration_seconds)
        else:
            _require_whole_seconds("ad_duration_seconds", self.ad_duration_seconds)
        _require_whole_seconds("insert_after_seconds", self.insert_after_seconds)

        if not 0 < self.insert_after_seconds < self.main_clip.duration_seconds:
            raise ValidationError(
                f"insert_after_seconds must be inside (0, {self.main_clip.duration_seconds:.3f}), "
                f"got {self.insert_after_seconds}", stage=STAGE
            )
        if not 0 < self.ad_duration_seconds <= self.ad_clip.duration_seconds:
            raise ValidationError(
                f"ad_duration_seconds must be inside (0, {self.ad_clip.duration_seconds:.3f}], "
                f"got {self.ad_duration_seconds}", stage=STAGE
            )

    def cut_points(self) -> List[int]:
        """Seconds of the main clip after which the ad is played."""
        points = [int(self.insert_after_seconds)]
        if self.repeat:
            step = int(self.insert_after_seconds)
            # Keep at least one whole second of main content after every cut
            while points[-1] + step + 1 <= self.main_clip.duration_seconds:
                points.append(points[-1] + step)
        return points

    @property
    def expected_duration(self) -> float:
        return self.main_clip.duration_seconds + self.ad_duration_seconds * len(self.cut_points())

    def swapped(self) -> "AdInsertionJob":
        """Exchanges the main and ad roles; the ad length resets to the full new ad."""
        return AdInsertionJob(
            main_clip=self.ad_clip,
            ad_clip=self.main_clip,
            insert_after_seconds=self.insert_after_seconds,
            repeat=self.repeat,
            allow_normalize=self.allow_normalize
        )


@dataclass
class SpliceOutcome:
    """
    Terminal result of the splice state machine: COMPLETED with an output,
    or FAILED with the error that stopped it.
    """
    state: SpliceState = SpliceState.PENDING
    output: Optional[MediaClip] = None
    error: Optional[ClipworkError] = None
    history: List[SpliceState] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.state == SpliceState.COMPLETED

    def enter(self, state: SpliceState) -> None:
        self.state = state
        self.history.append(state)
