import logging
from typing import Optional

from clipwork.core.cancellation import CancellationToken
from clipwork.core.errors import ValidationError
from clipwork.core.shared_types import parse_timestamp
from .api import process_video

logger = logging.getLogger(__name__)


class ProcessingHandler:
    """
    Worker class responsible for executing TRANSCODE jobs.
    """

    def handle(self, payload: dict, cancel_token: Optional[CancellationToken] = None) -> dict:
        for key in ("source", "start", "end", "output"):
            if payload.get(key) in (None, ""):
                raise ValidationError(f"TRANSCODE payload has no '{key}'", stage="process_validate")

        start = parse_timestamp(payload["start"])
        end = parse_timestamp(payload["end"])

        logger.info(f"Processing Clip: {payload['source']} [{start}s, {end}s)")

        result = process_video(
            payload["source"],
            start,
            end,
            payload["output"],
            speed=payload.get("speed", 1.0),
            filter=payload.get("filter", "none"),
            mute_audio=payload.get("mute_audio", False),
            cancel_token=cancel_token
        )

        return {
            "output": str(result.path),
            "duration_seconds": result.duration_seconds,
            "frame_rate": result.frame_rate,
            "has_audio": result.has_audio
        }
