from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Sequence

from clipwork.core.shared_types import MediaClip


class IConcatenator(ABC):
    """
    Contract for the low-level concatenation tool.
    """

    @abstractmethod
    def write_concat_list(self, parts: Sequence[Path], list_path: Path,
                          durations: Optional[Sequence[Optional[float]]] = None) -> Path:
        """
        Writes the ordered input list consumed by concat_copy().
        A duration given for a part pins where the next part starts.
        """
        pass

    @abstractmethod
    def concat_copy(self, list_path: Path, output_path: Path) -> None:
        """
        Stream-copy concatenation. Callers must have verified that every
        listed clip shares one ConcatProfile.
        """
        pass

    @abstractmethod
    def normalize(self, clip: MediaClip, reference: MediaClip, with_audio: bool, output_path: Path) -> None:
        """Re-encodes a clip to the common H.264/AAC profile of the reference clip."""
        pass
