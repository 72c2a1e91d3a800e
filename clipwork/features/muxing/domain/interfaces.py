from abc import ABC, abstractmethod

from clipwork.core.shared_types import MediaClip
from .models import MuxRequest


class IMuxer(ABC):
    """
    Contract for combining one video-only stream and one audio stream.
    """

    @abstractmethod
    def combine(self, request: MuxRequest) -> MediaClip:
        """
        Raises:
            MuxError: On tool failure or when the tracks' durations differ by
                more than one frame interval. Never truncates silently.
        """
        pass
