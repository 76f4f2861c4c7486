import logging
from typing import AbstractSet, Callable, List, Optional

from wordcrawl.domain.crawl_result import (
    AlreadyCrawled,
    CrawlResult,
    ErrorKind,
    Failed,
    Found,
    NotFound,
)
from wordcrawl.domain.crawl_task import CrawlTask
from wordcrawl.domain.crawlable_link import ClassifiedLink, classify
from wordcrawl.domain.fetched_page import FetchedPage
from wordcrawl.domain.frontier import Frontier
from wordcrawl.exceptions import FetchError, ScreenshotIOError
from wordcrawl.services.dictionary_matcher import DictionaryMatcher
from wordcrawl.services.fetcher import Fetcher
from wordcrawl.services.progress_reporter import ProgressReporter
from wordcrawl.services.result_sink import ResultSink
from wordcrawl.services.screenshot_service import ScreenshotService

logger = logging.getLogger(__name__)


def classify_links(hrefs: List[str]) -> List[ClassifiedLink]:
    """Classify hrefs, keeping the first occurrence of each normalized URL."""
    seen = set()
    links = []
    for href in hrefs:
        link = classify(href)
        if link.normalized_url in seen:
            continue
        seen.add(link.normalized_url)
        links.append(link)
    return links


class PageProcessor:
    """Runs the per-page pipeline for one crawl task.

    fetch -> match dictionary -> classify links -> expand frontier -> report.
    Each task yields exactly one result, handed to the sink.
    """

    def __init__(
        self,
        *,
        frontier: Frontier,
        fetcher: Fetcher,
        matcher: DictionaryMatcher,
        interesting_domains: AbstractSet[str],
        enqueue: Callable[[str], bool],
        sink: ResultSink,
        request_timeout_ms: int,
        screenshot_service: Optional[ScreenshotService] = None,
        progress: Optional[ProgressReporter] = None,
        debug: bool = False,
    ):
        self.frontier = frontier
        self.fetcher = fetcher
        self.matcher = matcher
        self.interesting_domains = frozenset(interesting_domains)
        self.enqueue = enqueue
        self.sink = sink
        self.request_timeout_ms = int(request_timeout_ms)
        self.screenshot_service = screenshot_service
        self.progress = progress
        self.debug = debug

    def __call__(self, task: CrawlTask) -> CrawlResult:
        return self.process(task)

    def process(self, task: CrawlTask) -> CrawlResult:
        url = task.url
        if not self.frontier.start_processing(url):
            logger.debug("Skipping (already crawled) %s", url)
            result = AlreadyCrawled(url)
            self._emit(result)
            return result

        try:
            result = self._crawl(url)
        finally:
            processed = self.frontier.record_processed()
            if self.progress is not None:
                self.progress.maybe_report(processed)

        self._emit(result)
        return result

    def _crawl(self, url: str) -> CrawlResult:
        try:
            page = self.fetcher.fetch(url, self.request_timeout_ms)
        except FetchError as e:
            if self.debug:
                logger.warning("Error crawling %s: %s", url, e)
            return Failed(url, ErrorKind(e.kind), e.detail)
        except Exception as e:
            if self.debug:
                logger.exception("Unexpected error crawling %s", url)
            return Failed(url, ErrorKind.UNEXPECTED, f"{type(e).__name__}: {e}")

        with page:
            try:
                return self._process_page(url, page)
            except Exception as e:
                if self.debug:
                    logger.exception("Unexpected error processing %s", url)
                return Failed(url, ErrorKind.UNEXPECTED, f"{type(e).__name__}: {e}")

    def _process_page(self, url: str, page: FetchedPage) -> CrawlResult:
        matches = self.matcher.match(page.text)
        links = classify_links(page.links)

        for link in links:
            if link.crawlable and link.hostname in self.interesting_domains:
                self.enqueue(link.normalized_url)

        if not matches:
            return NotFound(url)

        if self.screenshot_service is not None:
            try:
                self.screenshot_service.capture(page, url)
            except ScreenshotIOError as e:
                logger.warning("Screenshot failed for %s: %s", url, e)

        return Found(url, frozenset(matches), tuple(link.normalized_url for link in links))

    def _emit(self, result: CrawlResult) -> None:
        try:
            self.sink(result)
        except Exception:
            logger.exception("Result sink failed for %s", result.url)
