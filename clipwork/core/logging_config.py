import logging
from typing import Optional

from clipwork.core.config.settings import settings

_CONFIGURED = False


def setup_logging(level: Optional[str] = None) -> None:
    """
    Configures root logging once.
    Level comes from the argument, else settings.LOG_LEVEL (LOG_LEVEL env).
    """
    global _CONFIGURED
    if _CONFIGURED:
        return

    level_name = (level or settings.LOG_LEVEL or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    _CONFIGURED = True
