from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional, Tuple

DEFAULT_SIMULTANEOUS_REQUESTS = 20
DEFAULT_REQUEST_TIMEOUT_MS = 10_000
DEFAULT_MINIMUM_WORD_LENGTH = 3
DEFAULT_LOG_EVERY = 100
DEFAULT_TAKE_SCREENSHOTS = False
DEFAULT_SCREENSHOT_PATH = "./screenshots"


def _frozen_words(words: Optional[Iterable[str]]) -> FrozenSet[str]:
    return frozenset(w.strip().lower() for w in (words or []) if w and w.strip())


def _frozen_hosts(hosts: Optional[Iterable[str]]) -> FrozenSet[str]:
    return frozenset(h.strip().lower() for h in (hosts or []) if h and h.strip())


@dataclass(frozen=True)
class CrawlerConfig:
    """Settings for a single crawl run.

    Collections are normalized on construction: dictionary words are
    lowercased, interesting domains are lowercased hostnames, and seeds keep
    their order. The config is read-only for the life of the run.
    """

    dictionary: FrozenSet[str]
    debug: bool = False
    take_screenshots: bool = DEFAULT_TAKE_SCREENSHOTS
    simultaneous_requests: int = DEFAULT_SIMULTANEOUS_REQUESTS
    request_timeout_ms: int = DEFAULT_REQUEST_TIMEOUT_MS
    interesting_domains: FrozenSet[str] = field(default_factory=frozenset)
    crawled_urls: FrozenSet[str] = field(default_factory=frozenset)
    minimum_word_length: int = DEFAULT_MINIMUM_WORD_LENGTH
    log_every: int = DEFAULT_LOG_EVERY
    screenshot_path: str = DEFAULT_SCREENSHOT_PATH
    seeds: Tuple[str, ...] = ()
    name: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "dictionary", _frozen_words(self.dictionary))
        object.__setattr__(self, "interesting_domains", _frozen_hosts(self.interesting_domains))
        object.__setattr__(self, "crawled_urls", frozenset(self.crawled_urls or []))
        object.__setattr__(self, "seeds", tuple(self.seeds or ()))

        if int(self.simultaneous_requests) < 1:
            raise ValueError("simultaneous_requests must be at least 1")
        if int(self.request_timeout_ms) <= 0:
            raise ValueError("request_timeout_ms must be positive")
        if int(self.minimum_word_length) < 0:
            raise ValueError("minimum_word_length must not be negative")
        if int(self.log_every) < 1:
            raise ValueError("log_every must be at least 1")
        if self.take_screenshots and not (self.screenshot_path or "").strip():
            raise ValueError("screenshot_path is required when take_screenshots is enabled")

    def __repr__(self):
        return (
            f"<CrawlerConfig name={self.name} words={len(self.dictionary)} "
            f"domains={sorted(self.interesting_domains)} workers={self.simultaneous_requests}>"
        )
