# File: clipwork/core/errors.py

from typing import Any, Dict, List, Optional


class ClipworkError(Exception):
    """
    Base error for every pipeline failure.
    Carries the stage that failed and enough context to report to a user.
    """

    def __init__(self, message: str, stage: Optional[str] = None, **context: Any):
        super().__init__(message)
        self.message = message
        self.stage = stage
        self.context: Dict[str, Any] = context

    def __str__(self) -> str:
        if self.stage:
            return f"[{self.stage}] {self.message}"
        return self.message


class ValidationError(ClipworkError, ValueError):
    """Malformed request. Raised before any external process runs."""


class MediaIOError(ClipworkError, OSError):
    """Missing or unreadable source, missing audio stream, or missing tool binary."""


class ProcessFailure(ClipworkError):
    """An external tool exited with a nonzero code (or was killed on timeout)."""

    def __init__(self,
                 stage: str,
                 command: List[str],
                 exit_code: Optional[int],
                 stderr: str = "",
                 timed_out: bool = False):
        tool = _tool_name(command)
        if timed_out:
            message = f"{tool} timed out"
        else:
            message = f"{tool} exited with code {exit_code}"
        super().__init__(message, stage=stage, command=list(command), exit_code=exit_code)
        self.command = list(command)
        self.exit_code = exit_code
        self.stderr = stderr
        self.timed_out = timed_out


class EncodeError(ClipworkError):
    """The output writer could not be opened or rejected a frame."""


class MuxError(ClipworkError):
    """Video and audio could not be combined into one container."""


class FormatMismatch(ClipworkError):
    """Clips are not concatenation-compatible and normalization is not allowed."""


class JobCancelled(ClipworkError):
    """A cancellation token was observed between pipeline stages."""


def _tool_name(command: List[str]) -> str:
    # "/usr/bin/ffmpeg" -> "ffmpeg"
    if not command:
        return "process"
    return str(command[0]).replace("\\", "/").rsplit("/", 1)[-1]
