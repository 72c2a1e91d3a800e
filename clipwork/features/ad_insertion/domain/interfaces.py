from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from clipwork.core.shared_types import MediaClip


class IStreamTrimmer(ABC):
    """
    Contract for cutting a clip without re-encoding.
    """

    @abstractmethod
    def trim(self, clip: MediaClip, start_seconds: float, end_seconds: Optional[float], output_path: Path) -> MediaClip:
        """
        Stream-copies [start, end) of the clip (to the end when end is None).
        Cuts land on the nearest preceding keyframe.

        Returns:
            The probed trimmed clip.
        """
        pass
