import logging
from typing import Optional

from clipwork.core.cancellation import CancellationToken
from clipwork.core.errors import ValidationError
from .api import merge_videos

logger = logging.getLogger(__name__)


class MergeHandler:
    """
    Worker class responsible for executing MERGE jobs.

    Payload:
        sources: list of input paths
        output: destination path
        orders: optional list of unique order values (defaults to list position)
        allow_normalize: optional, re-encode mismatched clips instead of rejecting
    """

    def handle(self, payload: dict, cancel_token: Optional[CancellationToken] = None) -> dict:
        sources = payload.get("sources") or []
        output = payload.get("output")
        if not output:
            raise ValidationError("MERGE payload has no 'output'", stage="merge_validate")

        logger.info(f"Processing Merge of {len(sources)} clips -> {output}")

        result = merge_videos(
            sources,
            output,
            orders=payload.get("orders"),
            allow_normalize=payload.get("allow_normalize", True),
            cancel_token=cancel_token
        )

        return {
            "output": str(result.path),
            "duration_seconds": result.duration_seconds,
            "clip_count": len(sources)
        }
