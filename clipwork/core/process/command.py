from pathlib import Path
from typing import List, Optional, Sequence, Union

from clipwork.core.config.settings import settings

PathLike = Union[str, Path]


def _fmt_seconds(value: float) -> str:
    return f"{float(value):.3f}"


class FFmpegCommand:
    """
    Argument-list builder for ffmpeg invocations.
    Paths are passed as single arguments, so whitespace and quotes in
    file names never reach a shell.
    """

    def __init__(self, binary: Optional[str] = None):
        self._args: List[str] = [
            binary or settings.FFMPEG_BINARY,
            "-y", "-nostdin", "-hide_banner", "-loglevel", "error",
        ]

    def input(self,
              path: PathLike,
              seek: Optional[float] = None,
              duration: Optional[float] = None,
              fmt: Optional[str] = None,
              options: Sequence[str] = ()) -> "FFmpegCommand":
        """Adds one input. Seek/duration/format options apply to this input only."""
        if fmt:
            self._args += ["-f", fmt]
        self._args += [str(o) for o in options]
        if seek is not None:
            self._args += ["-ss", _fmt_seconds(seek)]
        if duration is not None:
            self._args += ["-t", _fmt_seconds(duration)]
        self._args += ["-i", str(path)]
        return self

    def option(self, *args: str) -> "FFmpegCommand":
        self._args += [str(a) for a in args]
        return self

    def output(self, path: PathLike) -> List[str]:
        """Terminates the command with its output path and returns the argument list."""
        return self._args + [str(path)]


def ffprobe_json_command(path: PathLike, binary: Optional[str] = None) -> List[str]:
    return [
        binary or settings.FFPROBE_BINARY,
        "-v", "error",
        "-show_entries", "format=duration",
        "-show_entries", "stream=index,codec_type,codec_name,codec_tag_string,width,height,r_frame_rate,avg_frame_rate,duration,nb_frames",
        "-of", "json",
        str(path),
    ]
