from dataclasses import dataclass
from enum import Enum, unique
from pathlib import Path
from typing import Optional, Tuple

from clipwork.core.config.settings import settings
from clipwork.core.errors import MediaIOError, ValidationError


@unique
class FilterKind(str, Enum):
    NONE = "none"
    SEPIA = "sepia"
    GRAYSCALE = "grayscale"
    EDGE_DETECT = "edge_detect"
    BLUR = "blur"

    @classmethod
    def from_value(cls, value) -> "FilterKind":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            allowed = ", ".join(k.value for k in cls)
            raise ValidationError(f"Unknown filter {value!r}; allowed: {allowed}")


@unique
class SpeedFactor(float, Enum):
    """
    Playback speeds offered to the user.
    Drives both the output frame rate and the audio tempo.
    """
    HALF = 0.5
    THREE_QUARTERS = 0.75
    NORMAL = 1.0
    FIVE_QUARTERS = 1.25
    ONE_AND_HALF = 1.5

    @classmethod
    def from_value(cls, value) -> "SpeedFactor":
        try:
            return cls(float(value))
        except (TypeError, ValueError):
            allowed = ", ".join(str(s.value) for s in cls)
            raise ValidationError(f"Unsupported speed {value!r}; allowed: {allowed}")


@dataclass(frozen=True)
class MediaFile:
    """
    Entity representing a media file on the filesystem.
    Encapsulates path validation and directory creation.
    """
    path: Path

    def __post_init__(self):
        if str(self.path).strip() == "." or str(self.path).strip() == "":
            raise ValidationError("File path cannot be empty.")

    def exists(self) -> bool:
        return self.path.exists()

    def has_allowed_extension(self) -> bool:
        return self.path.suffix.lower() in settings.ALLOWED_EXTENSIONS

    def require_readable_source(self) -> None:
        """Validates a source before any stage begins."""
        if not self.has_allowed_extension():
            allowed = ", ".join(settings.ALLOWED_EXTENSIONS)
            raise ValidationError(f"Unsupported container {self.path.suffix!r} (expected {allowed})",
                                  path=str(self.path))
        if not self.path.exists():
            raise MediaIOError(f"Media file not found: {self.path}", path=str(self.path))
        if not self.path.is_file():
            raise MediaIOError(f"Path is not a file: {self.path}", path=str(self.path))

    def ensure_parent_dir(self) -> None:
        """Creates the directory structure for this file if it doesn't exist."""
        self.path.parent.mkdir(parents=True, exist_ok=True)


@dataclass(frozen=True)
class MediaClip:
    """
    Probed, immutable description of a video file.
    Only the probing feature builds these.
    """
    path: Path
    duration_seconds: float
    frame_rate: float
    resolution: Tuple[int, int]  # (width, height)
    video_codec_tag: str
    has_audio: bool = False
    audio_codec_tag: Optional[str] = None
    video_duration_seconds: Optional[float] = None  # video stream only, when the container reports it

    @property
    def frame_interval(self) -> float:
        return 1.0 / self.frame_rate if self.frame_rate > 0 else 0.0

    @property
    def width(self) -> int:
        return self.resolution[0]

    @property
    def height(self) -> int:
        return self.resolution[1]


@dataclass(frozen=True)
class TimeRange:
    """
    Value Object representing a valid span of time.
    Enforces that start_time is strictly before end_time.
    """
    start_seconds: float
    end_seconds: float

    def __post_init__(self):
        if self.start_seconds < 0 or self.end_seconds < 0:
            raise ValidationError("Timestamps cannot be negative.")
        if self.start_seconds >= self.end_seconds:
            raise ValidationError(f"Start time ({self.start_seconds}) must be before end time ({self.end_seconds}).")

    @classmethod
    def for_clip(cls, clip: MediaClip, start_seconds: float, end_seconds: float) -> "TimeRange":
        time_range = cls(start_seconds, end_seconds)
        time_range.check_within(clip)
        return time_range

    def check_within(self, clip: MediaClip) -> None:
        # Container durations are rarely an exact multiple of the frame interval
        if self.end_seconds > clip.duration_seconds + clip.frame_interval:
            raise ValidationError(
                f"End time ({self.end_seconds}) exceeds clip duration ({clip.duration_seconds:.3f}s)",
                path=str(clip.path)
            )

    @property
    def duration(self) -> float:
        return self.end_seconds - self.start_seconds


def parse_timestamp(value: str) -> int:
    """Converts "mm:ss" (or "hh:mm:ss", or plain seconds) to whole seconds."""
    text = str(value).strip()
    if not text:
        raise ValidationError("Timestamp cannot be empty.")

    parts = text.split(":")
    if len(parts) > 3 or not all(p.isdigit() for p in parts):
        raise ValidationError(f"Malformed timestamp: {value!r}")

    seconds = 0
    for part in parts:
        seconds = seconds * 60 + int(part)

    if len(parts) > 1 and int(parts[-1]) >= 60:
        raise ValidationError(f"Seconds field out of range in {value!r}")
    return seconds


def format_timestamp(seconds: float) -> str:
    """Converts 125 -> 02:05"""
    m, s = divmod(int(seconds), 60)
    return "{:02d}:{:02d}".format(m, s)
