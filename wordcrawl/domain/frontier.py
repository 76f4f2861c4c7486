import threading
from typing import Iterable, Optional, Set


class Frontier:
    """
    Tracks which URLs have been claimed during a crawl, plus progress counters.

    Shared by every worker, so each operation holds the same lock:
    - `try_claim` is the only admission point; a URL is admitted once per run
    - `start_processing` lets the page pipeline double-check task ownership
    - counters only grow and feed progress reporting

    The claimed set never shrinks for the life of the run.
    """

    def __init__(self, crawled_urls: Optional[Iterable[str]] = None):
        """Create a frontier.

        `crawled_urls` are claimed up front (already crawled in an earlier
        run) and do not count towards `added_count`.
        """
        self._lock = threading.Lock()
        self._claimed: Set[str] = set(crawled_urls or [])
        self._started: Set[str] = set(self._claimed)
        self._added = 0
        self._processed = 0

    def try_claim(self, url: str) -> bool:
        """Claim `url` for processing. True iff this call admitted it."""
        with self._lock:
            if url in self._claimed:
                return False
            self._claimed.add(url)
            self._added += 1
            return True

    def is_claimed(self, url: str) -> bool:
        with self._lock:
            return url in self._claimed

    def start_processing(self, url: str) -> bool:
        """Mark the claimed `url` as being processed.

        Returns False if the URL was never claimed or a task already started it.
        """
        with self._lock:
            if url not in self._claimed or url in self._started:
                return False
            self._started.add(url)
            return True

    def record_processed(self) -> int:
        with self._lock:
            self._processed += 1
            return self._processed

    @property
    def added_count(self) -> int:
        with self._lock:
            return self._added

    @property
    def processed_count(self) -> int:
        with self._lock:
            return self._processed

    def percent_complete(self) -> float:
        """Best-effort progress estimate; may exceed 1 while the frontier grows."""
        with self._lock:
            if self._added == 0:
                return 0.0
            return self._processed / self._added

    def __len__(self) -> int:
        with self._lock:
            return len(self._claimed)

    def __contains__(self, url: str) -> bool:
        return self.is_claimed(url)
