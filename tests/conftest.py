import threading
import time

import pytest

from wordcrawl.domain.fetched_page import FetchedPage
from wordcrawl.exceptions import FetchNetworkError, FetchTimeoutError


class FakeFetcher:
    """In-memory stand-in for the browser.

    `pages` maps URL -> (text, links). Unknown URLs raise FetchNetworkError.
    URLs in `slow` sleep for the given seconds and then time out if the delay
    exceeds the request timeout.
    """

    def __init__(self, pages=None, slow=None, default=None):
        self.pages = dict(pages or {})
        self.slow = dict(slow or {})
        self.default = default
        self.lock = threading.Lock()
        self.fetched = []
        self.closed_pages = []
        self.screenshots = []
        self.started = False
        self.closed = False
        self.thread_releases = 0

    def start(self):
        self.started = True

    def fetch(self, url, timeout_ms):
        with self.lock:
            self.fetched.append(url)
        delay = self.slow.get(url)
        if delay is not None:
            time.sleep(delay)
            if delay * 1000 > timeout_ms:
                raise FetchTimeoutError(url, f"timed out after {timeout_ms} ms")
        entry = self.pages.get(url, self.default)
        if entry is None:
            raise FetchNetworkError(url, "unknown host")
        text, links = entry

        def release():
            with self.lock:
                self.closed_pages.append(url)

        def capture(path):
            with self.lock:
                self.screenshots.append(path)

        return FetchedPage(url, text, list(links), 200, release=release, capture=capture)

    def release_thread_resources(self):
        with self.lock:
            self.thread_releases += 1

    def close(self):
        self.closed = True


@pytest.fixture
def fake_fetcher_cls():
    return FakeFetcher


class ListSink:
    def __init__(self):
        self.lock = threading.Lock()
        self.results = []

    def __call__(self, result):
        with self.lock:
            self.results.append(result)

    def by_url(self):
        return {r.url: r for r in self.results}


@pytest.fixture
def sink():
    return ListSink()
