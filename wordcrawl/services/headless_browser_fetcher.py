from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from wordcrawl.domain.fetched_page import FetchedPage
from wordcrawl.exceptions import (
    FetchEngineInitError,
    FetchNetworkError,
    FetchProtocolError,
    FetchTimeoutError,
)
from wordcrawl.services.html_text_extractor import HtmlTextExtractor

logger = logging.getLogger(__name__)

_HREFS_SCRIPT = "anchors => anchors.map(a => a.href)"


@dataclass(frozen=True)
class PlaywrightHeadlessOptions:
    wait_until: str = "domcontentloaded"  # domcontentloaded | load | networkidle
    launch_args: Tuple[str, ...] = ("--no-sandbox", "--disable-setuid-sandbox")
    verify_launch: bool = True


def _import_playwright():
    try:
        from playwright import sync_api  # type: ignore
    except Exception as e:
        raise FetchEngineInitError(
            "Headless fetch requested but Playwright is not installed. "
            "Install 'playwright' and run 'python -m playwright install chromium'."
        ) from e
    return sync_api


def _discard(context, url: str) -> None:
    if context is None:
        return
    try:
        context.close()
    except Exception:
        logger.exception("Error closing browser context for %s", url)


class _ThreadBrowser:
    def __init__(self, playwright, browser):
        self.playwright = playwright
        self.browser = browser

    def close(self) -> None:
        try:
            self.browser.close()
        finally:
            self.playwright.stop()


class PlaywrightHeadlessFetcher:
    """Headless Chromium fetcher backed by Playwright.

    Renders JavaScript-heavy pages, returns the text of the final DOM, the
    resolved `href` of every anchor, and can screenshot the loaded page.

    Notes:
    - The Playwright sync API is bound to the thread that started it, so each
      worker thread lazily launches its own browser; the worker must call
      `release_thread_resources()` before exiting.
    - Every fetch gets a fresh browser context, closed when the returned
      page is closed or when the fetch fails.
    - Playwright is imported lazily so HTTP-only installs still work.
    """

    def __init__(
        self,
        *,
        user_agent: str,
        options: Optional[PlaywrightHeadlessOptions] = None,
        text_extractor: Optional[HtmlTextExtractor] = None,
    ):
        self._user_agent = user_agent
        self._options = options or PlaywrightHeadlessOptions()
        self._text_extractor = text_extractor or HtmlTextExtractor()
        self._local = threading.local()
        self._lock = threading.Lock()
        self._open_browsers = 0
        self._closed = False

    @property
    def open_browsers(self) -> int:
        with self._lock:
            return self._open_browsers

    def _launch(self) -> _ThreadBrowser:
        sync_api = _import_playwright()
        playwright = sync_api.sync_playwright().start()
        try:
            browser = playwright.chromium.launch(headless=True, args=list(self._options.launch_args))
        except Exception:
            playwright.stop()
            raise
        return _ThreadBrowser(playwright, browser)

    def start(self) -> None:
        """Check that Playwright and Chromium are usable before any task runs.

        Reopens a fetcher closed by an earlier run.
        """
        with self._lock:
            self._closed = False
        _import_playwright()
        if not self._options.verify_launch:
            return
        try:
            trial = self._launch()
        except FetchEngineInitError:
            raise
        except Exception as e:
            raise FetchEngineInitError(f"Could not launch headless Chromium: {e}") from e
        trial.close()
        logger.debug("Headless Chromium launch verified")

    def _thread_browser(self):
        handle = getattr(self._local, "handle", None)
        if handle is not None:
            return handle.browser
        with self._lock:
            if self._closed:
                raise RuntimeError("fetcher is closed")
        handle = self._launch()
        self._local.handle = handle
        with self._lock:
            self._open_browsers += 1
        logger.debug("Launched browser for thread %s", threading.current_thread().name)
        return handle.browser

    def fetch(self, url: str, timeout_ms: int) -> FetchedPage:
        with self._lock:
            if self._closed:
                raise FetchNetworkError(url, "fetcher is closed")
        sync_api = _import_playwright()
        try:
            browser = self._thread_browser()
        except FetchEngineInitError as e:
            raise FetchNetworkError(url, str(e), e) from e
        except Exception as e:
            raise FetchNetworkError(url, f"browser unavailable: {e}", e) from e

        context = None
        try:
            context = browser.new_context(user_agent=self._user_agent)
            page = context.new_page()
            page.set_default_timeout(timeout_ms)
            resp = page.goto(url, wait_until=self._options.wait_until, timeout=timeout_ms)
            status = int(resp.status) if resp is not None else None
            if status is not None and status >= 400:
                raise FetchProtocolError(url, status)
            html = page.content()
            hrefs = page.eval_on_selector_all("a", _HREFS_SCRIPT) or []
        except FetchProtocolError:
            _discard(context, url)
            raise
        except sync_api.TimeoutError as e:
            _discard(context, url)
            raise FetchTimeoutError(url, f"timed out after {timeout_ms} ms", e) from e
        except sync_api.Error as e:
            _discard(context, url)
            raise FetchNetworkError(url, str(e), e) from e
        except BaseException:
            _discard(context, url)
            raise

        def capture(path: Path) -> None:
            page.screenshot(path=str(path), timeout=timeout_ms)

        return FetchedPage(
            url,
            self._text_extractor.extract(html),
            [h for h in hrefs if isinstance(h, str) and h],
            status,
            release=context.close,
            capture=capture,
        )

    def release_thread_resources(self) -> None:
        handle = getattr(self._local, "handle", None)
        if handle is None:
            return
        self._local.handle = None
        with self._lock:
            self._open_browsers -= 1
        try:
            handle.close()
        except Exception:
            logger.exception("Error closing browser for thread %s", threading.current_thread().name)

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self.release_thread_resources()
        remaining = self.open_browsers
        if remaining:
            logger.warning("Closing fetcher with %s browser(s) still bound to worker threads", remaining)
