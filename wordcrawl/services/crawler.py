import logging
import threading
from enum import Enum
from typing import Iterable, Optional

from wordcrawl.domain.config import CrawlerConfig
from wordcrawl.domain.crawl_result import CrawlSummary
from wordcrawl.domain.crawl_task import CrawlTask
from wordcrawl.domain.crawlable_link import classify
from wordcrawl.domain.frontier import Frontier
from wordcrawl.exceptions import FetchEngineInitError, ScreenshotIOError
from wordcrawl.services.dictionary_matcher import DictionaryMatcher
from wordcrawl.services.fetcher import Fetcher
from wordcrawl.services.page_processor import PageProcessor
from wordcrawl.services.progress_reporter import ProgressReporter
from wordcrawl.services.result_sink import ResultSink, StdoutSink
from wordcrawl.services.screenshot_service import ScreenshotService
from wordcrawl.services.work_queue import WorkQueue

logger = logging.getLogger(__name__)


class RunState(str, Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    RUNNING = "running"
    FINISHED = "finished"
    CLOSED = "closed"


class Crawler:
    """Crawls for pages containing dictionary words.

    Wires the frontier, work queue and page pipeline together and owns the
    run lifecycle: `initialize()` -> `start()` -> drain -> `shutdown()`.
    `run()` does all of it and blocks until the frontier is exhausted.
    """

    def __init__(
        self,
        config: CrawlerConfig,
        fetcher: Fetcher,
        sink: Optional[ResultSink] = None,
        screenshot_service: Optional[ScreenshotService] = None,
    ):
        if config is None:
            raise ValueError("config is required for crawl")
        self.config = config
        self.fetcher = fetcher
        self.sink = sink or StdoutSink()
        if screenshot_service is None and config.take_screenshots:
            screenshot_service = ScreenshotService(config.screenshot_path)
        self.screenshot_service = screenshot_service if config.take_screenshots else None

        self.frontier = Frontier(classify(url).normalized_url for url in config.crawled_urls)
        self.queue = WorkQueue(
            handler=self._process,
            concurrency=config.simultaneous_requests,
            on_drain=self._on_drain,
            worker_teardown=fetcher.release_thread_resources,
        )
        self.progress = ProgressReporter(
            self.frontier,
            config.log_every,
            enabled=config.debug,
            queue_length=lambda: self.queue.pending,
        )
        self.processor = PageProcessor(
            frontier=self.frontier,
            fetcher=fetcher,
            matcher=DictionaryMatcher(config.dictionary, config.minimum_word_length),
            interesting_domains=config.interesting_domains,
            enqueue=self.enqueue,
            sink=self.sink,
            request_timeout_ms=config.request_timeout_ms,
            screenshot_service=self.screenshot_service,
            progress=self.progress,
            debug=config.debug,
        )

        self._lock = threading.Lock()
        self._state = RunState.UNINITIALIZED
        self._finished = threading.Event()

    @property
    def state(self) -> RunState:
        with self._lock:
            return self._state

    @property
    def is_finished(self) -> bool:
        return self._finished.is_set()

    def initialize(self) -> None:
        """Start the fetch engine and prepare the screenshot directory.

        Raises FetchEngineInitError if the engine cannot start; nothing has
        been scheduled at that point.
        """
        with self._lock:
            if self._state is not RunState.UNINITIALIZED:
                return
        logger.debug("Initializing crawler")
        try:
            self.fetcher.start()
        except FetchEngineInitError:
            raise
        except Exception as e:
            raise FetchEngineInitError(f"Could not start fetch engine: {e}") from e

        if self.screenshot_service is not None:
            try:
                self.screenshot_service.ensure_directory()
            except ScreenshotIOError as e:
                logger.warning("Screenshots may fail: %s", e)

        with self._lock:
            self._state = RunState.INITIALIZED

    def enqueue(self, url: str) -> bool:
        """Admit `url` to the frontier and queue it. True iff newly queued."""
        return self.queue.submit(CrawlTask(url), admit=self.frontier.try_claim)

    def enqueue_seed(self, url: str) -> bool:
        link = classify(url)
        if not link.crawlable:
            logger.warning("Ignoring seed %r: not an absolute http(s) URL", url)
            return False
        return self.enqueue(link.normalized_url)

    def start(self, seeds: Iterable[str] = ()) -> None:
        """Queue `seeds` (plus configured seeds) and start the workers."""
        self.initialize()
        with self._lock:
            if self._state is not RunState.INITIALIZED:
                raise RuntimeError(f"crawler is {self._state.value}")
            self._state = RunState.RUNNING
        for url in list(self.config.seeds) + list(seeds):
            self.enqueue_seed(url)
        logger.info("Starting crawl with %s workers, %s seed(s) queued", self.queue.concurrency, self.queue.pending)
        self.progress.reset()
        self.queue.start()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the run drained (or was stopped). False on timeout."""
        return self.queue.wait(timeout)

    def run(self, seeds: Iterable[str] = (), timeout: Optional[float] = None) -> CrawlSummary:
        """Crawl until the frontier is exhausted, then release all resources."""
        try:
            self.start(seeds)
            self.wait(timeout)
        finally:
            self.shutdown()
        return self.summary()

    def summary(self) -> CrawlSummary:
        return CrawlSummary(
            added=self.frontier.added_count,
            processed=self.frontier.processed_count,
            elapsed_seconds=self.progress.elapsed(),
            drained=self.queue.drained,
        )

    def _process(self, task: CrawlTask):
        return self.processor.process(task)

    def _on_drain(self) -> None:
        with self._lock:
            if self._state is RunState.RUNNING:
                self._state = RunState.FINISHED
        self._finished.set()
        logger.info(
            "Crawl finished: processed %s of %s added urls in %.2f s",
            self.frontier.processed_count,
            self.frontier.added_count,
            self.progress.elapsed(),
        )

    def shutdown(self) -> None:
        """Stop the workers, wait for in-flight pages and close the fetch engine."""
        with self._lock:
            if self._state is RunState.CLOSED:
                return
            self._state = RunState.CLOSED
        logger.debug("Closing crawler. Queue length: %s", self.queue.pending)
        self.queue.stop()
        try:
            self.fetcher.close()
        except Exception:
            logger.exception("Error closing fetch engine")

    def __enter__(self):
        self.initialize()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.shutdown()
        return False
