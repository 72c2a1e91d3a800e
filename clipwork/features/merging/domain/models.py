from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from clipwork.core.config.settings import settings
from clipwork.core.errors import ValidationError
from clipwork.core.shared_types import MediaClip


def check_unique_orders(orders: Iterable[int]) -> bool:
    """True when no two clips were given the same order value."""
    seen = set()
    for order in orders:
        if order in seen:
            return False
        seen.add(order)
    return True


def validate_orders(orders: Sequence[int]) -> None:
    """
    Orders must be a dense permutation of 1..N.
    Duplicates are rejected, never resolved.
    """
    if not check_unique_orders(orders):
        raise ValidationError("Each video must have a unique order.", stage="merge_validate",
                              orders=list(orders))
    if sorted(orders) != list(range(1, len(orders) + 1)):
        raise ValidationError(f"Orders must be exactly 1..{len(orders)}, got {sorted(orders)}",
                              stage="merge_validate", orders=list(orders))


def validate_clip_count(count: int) -> None:
    if count < 2:
        raise ValidationError("Merging needs at least two clips.", stage="merge_validate")
    if count > settings.MAX_MERGE_CLIPS:
        raise ValidationError(f"At most {settings.MAX_MERGE_CLIPS} clips can be merged, got {count}",
                              stage="merge_validate")


@dataclass(frozen=True)
class MergeEntry:
    clip: MediaClip
    order: int


@dataclass(frozen=True)
class MergeJob:
    """
    Ordered set of clips to concatenate. Validated at construction so an
    invalid job never reaches an external process.
    """
    entries: Tuple[MergeEntry, ...]
    allow_normalize: bool = True

    def __post_init__(self):
        object.__setattr__(self, "entries", tuple(self.entries))
        validate_clip_count(len(self.entries))
        validate_orders([e.order for e in self.entries])

    @classmethod
    def from_clips(cls, clips: Sequence[MediaClip], orders: Optional[Sequence[int]] = None,
                   allow_normalize: bool = True) -> "MergeJob":
        """Default order is the position in the list (1-based)."""
        if orders is None:
            orders = list(range(1, len(clips) + 1))
        if len(orders) != len(clips):
            raise ValidationError(f"Got {len(clips)} clips but {len(orders)} orders", stage="merge_validate")
        return cls(tuple(MergeEntry(c, o) for c, o in zip(clips, orders)), allow_normalize)

    def ordered_clips(self) -> List[MediaClip]:
        return [e.clip for e in sorted(self.entries, key=lambda e: e.order)]


@dataclass(frozen=True)
class ConcatProfile:
    """
    The stream parameters that must match for a stream-copy concat.
    """
    video_codec: str
    resolution: Tuple[int, int]
    frame_rate: float
    has_audio: bool
    audio_codec: Optional[str]

    @classmethod
    def of(cls, clip: MediaClip) -> "ConcatProfile":
        return cls(
            video_codec=clip.video_codec_tag,
            resolution=clip.resolution,
            frame_rate=round(clip.frame_rate, 3),
            has_audio=clip.has_audio,
            audio_codec=clip.audio_codec_tag if clip.has_audio else None
        )


def find_incompatibilities(clips: Sequence[MediaClip]) -> List[str]:
    """
    Describes every way a clip differs from the first one.
    Empty list means the fast stream-copy path is safe.
    """
    if not clips:
        return []

    reference = ConcatProfile.of(clips[0])
    problems: List[str] = []
    for clip in clips[1:]:
        profile = ConcatProfile.of(clip)
        for field_name in ("video_codec", "resolution", "frame_rate", "has_audio", "audio_codec"):
            expected = getattr(reference, field_name)
            actual = getattr(profile, field_name)
            if expected != actual:
                problems.append(f"{clip.path.name}: {field_name} {actual!r} != {expected!r}")
    return problems
