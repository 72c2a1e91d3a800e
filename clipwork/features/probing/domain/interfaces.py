from abc import ABC, abstractmethod
from pathlib import Path
from clipwork.core.shared_types import MediaClip


class IMediaProber(ABC):
    """
    Contract for reading container/stream facts from a media file.
    """

    @abstractmethod
    def probe_clip(self, path: Path) -> MediaClip:
        """
        Reads duration, frame rate, resolution and codecs of a video file.

        Raises:
            MediaIOError: If the file has no decodable video stream.
            ProcessFailure: If the probe tool fails.
        """
        pass

    @abstractmethod
    def probe_duration(self, path: Path) -> float:
        """Returns the container duration in seconds (audio-only files included)."""
        pass
