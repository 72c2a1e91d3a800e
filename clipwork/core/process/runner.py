import logging
import subprocess
from typing import List, Optional

from clipwork.core.config.settings import settings
from clipwork.core.errors import MediaIOError, ProcessFailure

logger = logging.getLogger(__name__)

STDERR_TAIL_CHARS = 2000


def run_tool(cmd: List[str], stage: str, timeout: Optional[float] = None) -> subprocess.CompletedProcess:
    """
    Runs an external codec/container tool and blocks until it exits.

    Never call this from a UI or rendering thread; a single invocation can
    run for seconds (up to settings.PROCESS_TIMEOUT_SECONDS).

    Raises:
        MediaIOError: If the tool binary does not exist.
        ProcessFailure: On nonzero exit code or timeout.
    """
    if timeout is None:
        timeout = settings.PROCESS_TIMEOUT_SECONDS or None

    logger.info(f"[{stage}] Executing: {' '.join(cmd)}")

    try:
        return subprocess.run(
            cmd,
            check=True,
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout
        )
    except FileNotFoundError as e:
        raise MediaIOError(f"Tool binary not found: {cmd[0]}", stage=stage, binary=cmd[0]) from e
    except subprocess.TimeoutExpired as e:
        logger.error(f"[{stage}] {cmd[0]} killed after {timeout}s")
        raise ProcessFailure(stage, cmd, exit_code=None, timed_out=True) from e
    except subprocess.CalledProcessError as e:
        stderr_tail = (e.stderr or "")[-STDERR_TAIL_CHARS:]
        logger.error(f"[{stage}] {cmd[0]} failed (code {e.returncode}). STDERR: {stderr_tail}")
        raise ProcessFailure(stage, cmd, exit_code=e.returncode, stderr=stderr_tail) from e
