from __future__ import annotations

import logging
import time
from typing import Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def with_retry(
    fn: Callable[[], T],
    retries: int = 2,
    delay_sec: float = 0.3,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Call ``fn`` up to ``retries + 1`` times with a fixed pause in between.

    The last exception is re-raised once every attempt has failed.
    """
    attempt = 0
    while True:
        try:
            return fn()
        except Exception as exc:
            attempt += 1
            logger.warning("[ai-retry] attempt=%d failed: %s", attempt, exc)
            if attempt > retries:
                raise
            sleep(delay_sec)
