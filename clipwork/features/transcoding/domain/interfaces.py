from abc import ABC, abstractmethod

from clipwork.core.shared_types import MediaClip
from .models import TranscodeRequest


class IFrameTranscoder(ABC):
    """
    Contract for the frame-level transcoding engine.
    """

    @abstractmethod
    def transcode(self, request: TranscodeRequest) -> MediaClip:
        """
        Produces the filtered, speed-adjusted, video-only clip.

        Returns:
            The probed output clip.

        Raises:
            MediaIOError: If the source cannot be opened or ends early.
            EncodeError: If the writer cannot be opened or rejects a frame.
        """
        pass
