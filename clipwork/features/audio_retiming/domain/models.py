from dataclasses import dataclass
from pathlib import Path
from typing import List

from clipwork.core.errors import ValidationError

# Valid factor range of a single ffmpeg atempo stage
ATEMPO_MIN = 0.5
ATEMPO_MAX = 2.0


@dataclass(frozen=True)
class AudioTrack:
    """
    An audio-only artifact inside a job workspace.
    """
    path: Path
    duration_seconds: float


def build_atempo_chain(factor: float) -> List[float]:
    """
    Decomposes a tempo factor into atempo stages that each lie in
    [0.5, 2.0] and whose product equals the factor.

    3.0 -> [2.0, 1.5]; 0.2 -> [0.5, 0.5, 0.8]
    """
    if factor <= 0:
        raise ValidationError(f"Tempo factor must be positive, got {factor}")

    stages: List[float] = []
    remaining = float(factor)

    while remaining > ATEMPO_MAX:
        stages.append(ATEMPO_MAX)
        remaining /= ATEMPO_MAX

    while remaining < ATEMPO_MIN:
        stages.append(ATEMPO_MIN)
        remaining /= ATEMPO_MIN

    stages.append(remaining)
    return stages


def atempo_filter(factor: float) -> str:
    """'atempo=2.0,atempo=1.5' style filter graph for -filter:a"""
    return ",".join(f"atempo={stage:.6g}" for stage in build_atempo_chain(factor))
