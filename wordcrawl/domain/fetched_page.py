import logging
from pathlib import Path
from typing import Callable, List, Optional, Union

from wordcrawl.exceptions import ScreenshotIOError

logger = logging.getLogger(__name__)


class FetchedPage:
    """A loaded page and the per-task resources behind it.

    Fetchers hand one of these to the page pipeline. It must be closed once
    the task is done with it (use it as a context manager); closing releases
    the browser page or connection that produced it and is idempotent.
    """

    def __init__(
        self,
        url: str,
        text: str,
        links: List[str],
        status_code: Optional[int] = None,
        *,
        release: Optional[Callable[[], None]] = None,
        capture: Optional[Callable[[Path], None]] = None,
    ):
        self.url = url
        self.text = text or ""
        self.links = list(links or [])
        self.status_code = status_code
        self._release = release
        self._capture = capture
        self.closed = False

    def screenshot(self, path: Union[str, Path]) -> None:
        """Write a PNG screenshot of the page to `path`."""
        path = Path(path)
        if self.closed:
            raise ScreenshotIOError(self.url, path, RuntimeError("page already closed"))
        if self._capture is None:
            raise ScreenshotIOError(self.url, path)
        try:
            self._capture(path)
        except ScreenshotIOError:
            raise
        except Exception as e:
            raise ScreenshotIOError(self.url, path, e) from e

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        if self._release is None:
            return
        try:
            self._release()
        except Exception:
            logger.exception("Error releasing page resources for %s", self.url)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def __repr__(self):
        return f"<FetchedPage url={self.url} status={self.status_code} links={len(self.links)}>"
