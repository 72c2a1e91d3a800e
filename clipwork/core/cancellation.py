import threading
from typing import Optional

from clipwork.core.errors import JobCancelled


class CancellationToken:
    """
    Cooperative cancellation flag.
    Pipelines check it between stages; a running external tool is not interrupted.
    """

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    def raise_if_cancelled(self, stage: str) -> None:
        if self._event.is_set():
            raise JobCancelled("Job cancelled before stage started", stage=stage)


def check_cancelled(token: Optional[CancellationToken], stage: str) -> None:
    if token is not None:
        token.raise_if_cancelled(stage)
