import logging
import time
from typing import Callable, Optional

from wordcrawl.domain.frontier import Frontier

logger = logging.getLogger(__name__)


class ProgressReporter:
    """Logs crawl progress every `log_every` processed pages (debug runs only)."""

    def __init__(
        self,
        frontier: Frontier,
        log_every: int,
        enabled: bool = True,
        queue_length: Optional[Callable[[], int]] = None,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self.frontier = frontier
        self.log_every = max(1, int(log_every))
        self.enabled = enabled
        self._queue_length = queue_length or (lambda: 0)
        self._clock = clock
        self._started_at = clock()

    def reset(self) -> None:
        self._started_at = self._clock()

    def elapsed(self) -> float:
        return self._clock() - self._started_at

    def maybe_report(self, processed: int) -> bool:
        if not self.enabled or processed % self.log_every != 0:
            return False
        logger.info(
            "Processed %s pages in %.2f s. Percent complete: %.2f. Total urls in queue: %s, total added: %s",
            processed,
            self.elapsed(),
            self.frontier.percent_complete(),
            self._queue_length(),
            self.frontier.added_count,
        )
        return True
