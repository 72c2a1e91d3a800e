from abc import ABC, abstractmethod
from pathlib import Path

from clipwork.core.shared_types import MediaClip, SpeedFactor, TimeRange
from .models import AudioTrack


class IAudioRetimer(ABC):
    """
    Contract for extracting and tempo-shifting a clip's audio.
    """

    @abstractmethod
    def extract(self, clip: MediaClip, output_path: Path) -> AudioTrack:
        """
        Stream-copies the first audio stream without re-encoding.

        Raises:
            MediaIOError: If the clip has no audio stream.
            ProcessFailure: If the underlying tool fails.
        """
        pass

    @abstractmethod
    def retime(self, track: AudioTrack, time_range: TimeRange, speed: SpeedFactor, output_path: Path) -> AudioTrack:
        """
        Trims the track to [start, end) of source time and tempo-scales it,
        giving a track of (end - start) / speed seconds.
        """
        pass
