import logging
from typing import Optional

from clipwork.core.cancellation import CancellationToken
from clipwork.core.errors import ValidationError
from clipwork.core.shared_types import parse_timestamp
from .api import insert_ad_into_video

logger = logging.getLogger(__name__)


class AdInsertionHandler:
    """
    Worker class responsible for executing AD_INSERTION jobs.
    """

    def handle(self, payload: dict, cancel_token: Optional[CancellationToken] = None) -> dict:
        for key in ("main", "ad", "insert_after", "output"):
            if payload.get(key) in (None, ""):
                raise ValidationError(f"AD_INSERTION payload has no '{key}'", stage="ad_validate")

        # Timestamps may arrive as "mm:ss" strings or plain seconds
        insert_after = parse_timestamp(payload["insert_after"])
        ad_duration = payload.get("ad_duration")
        if ad_duration is not None:
            ad_duration = parse_timestamp(ad_duration)

        logger.info(f"Processing Ad Insertion: {payload['ad']} into {payload['main']} at {insert_after}s")

        result = insert_ad_into_video(
            payload["main"],
            payload["ad"],
            insert_after,
            payload["output"],
            ad_duration_seconds=ad_duration,
            repeat=payload.get("repeat", False),
            swap_roles=payload.get("swap_roles", False),
            allow_normalize=payload.get("allow_normalize", True),
            cancel_token=cancel_token
        )

        return {
            "output": str(result.path),
            "duration_seconds": result.duration_seconds
        }
