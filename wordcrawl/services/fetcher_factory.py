from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from wordcrawl.services.fetcher import Fetcher

HEADLESS_CHROMIUM = "headless_chromium"
HTTP = "http"

# Default first
FETCH_MODES = (HEADLESS_CHROMIUM, HTTP)


@dataclass(frozen=True)
class FetcherFactory:
    """Selects the page fetch engine for a run by its `fetch_mode` name."""

    http_fetcher: Fetcher
    headless_fetcher: Fetcher

    def _by_mode(self) -> Dict[str, Fetcher]:
        return {HEADLESS_CHROMIUM: self.headless_fetcher, HTTP: self.http_fetcher}

    def get(self, fetch_mode: str) -> Fetcher:
        if fetch_mode is None or not str(fetch_mode).strip():
            raise ValueError("fetch_mode is required")
        fetcher = self._by_mode().get(str(fetch_mode).strip().lower())
        if fetcher is None:
            raise ValueError(f"Unknown fetch_mode: {fetch_mode!r} (expected one of {', '.join(FETCH_MODES)})")
        return fetcher
