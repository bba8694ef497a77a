"""Fixed-delay pacing for polite scraping."""

from __future__ import annotations

import logging
import time
from typing import Callable

logger = logging.getLogger(__name__)


class RateLimiter:
    """Sleeps a fixed delay each time it is asked to wait.

    The catalog enforces implicit limits, so callers pause before every
    request after the first one rather than tracking a request budget.

    Args:
        delay_seconds: Pause length per wait() call.
        sleep: Sleep function, injectable for tests.
    """

    def __init__(
        self,
        delay_seconds: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._delay = max(delay_seconds, 0.0)
        self._sleep = sleep

    @property
    def delay_seconds(self) -> float:
        return self._delay

    def wait(self) -> None:
        """Block for the configured delay."""
        if self._delay <= 0:
            return
        logger.debug("Pausing %.1fs before next request", self._delay)
        self._sleep(self._delay)
