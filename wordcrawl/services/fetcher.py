from __future__ import annotations

from typing import Optional, Protocol

from wordcrawl.domain.fetched_page import FetchedPage
from wordcrawl.services.html_text_extractor import HtmlTextExtractor
from wordcrawl.services.link_extractor import LinkExtractor


class Fetcher(Protocol):
    """Load a URL and return its text and outbound links as a `FetchedPage`.

    This is intentionally small so we can swap implementations
    (requests-based vs headless-browser rendered HTML).

    - `start()` prepares shared resources; failures abort the run
    - `fetch()` must honour `timeout_ms` and release its own resources when
      it raises; on success the caller closes the returned page
    - `release_thread_resources()` runs in each worker thread as it exits
    - `close()` releases whatever is left once all workers are done
    """

    def start(self) -> None: ...

    def fetch(self, url: str, timeout_ms: int) -> FetchedPage: ...

    def release_thread_resources(self) -> None: ...

    def close(self) -> None: ...


class HttpServiceFetcher:
    """Plain HTTP fetcher: no JavaScript rendering and no screenshots."""

    def __init__(
        self,
        http_service,
        text_extractor: Optional[HtmlTextExtractor] = None,
        link_extractor: Optional[LinkExtractor] = None,
    ):
        self._http_service = http_service
        self._text_extractor = text_extractor or HtmlTextExtractor()
        self._link_extractor = link_extractor or LinkExtractor()

    def start(self) -> None:
        pass

    def fetch(self, url: str, timeout_ms: int) -> FetchedPage:
        response = self._http_service.fetch(url, timeout_ms=timeout_ms)
        return FetchedPage(
            url,
            self._text_extractor.extract(response.text),
            self._link_extractor.extract_links(response.final_url, response.text),
            response.status_code,
        )

    def release_thread_resources(self) -> None:
        pass

    def close(self) -> None:
        pass
