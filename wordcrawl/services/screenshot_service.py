import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from wordcrawl.domain.fetched_page import FetchedPage
from wordcrawl.exceptions import ScreenshotIOError
from wordcrawl.utils.datetime_utils import format_timestamp

logger = logging.getLogger(__name__)

SCREENSHOT_DIR_MODE = 0o744

_UNSAFE_CHARS = re.compile(r"[:/.]")


def screenshot_filename(url: str, when: datetime) -> str:
    """`https://a.test/x` at 2024-05-01 13:02:03 -> `https___a_test_x_2024-05-01_130203.png`"""
    return f"{_UNSAFE_CHARS.sub('_', url)}_{format_timestamp(when)}.png"


class ScreenshotService:
    """Stores screenshots of matching pages under a single directory."""

    def __init__(self, directory: str, clock: Optional[Callable[[], datetime]] = None):
        self.directory = Path(directory)
        self._clock = clock or datetime.now

    def ensure_directory(self) -> None:
        if self.directory.is_dir():
            return
        try:
            self.directory.mkdir(mode=SCREENSHOT_DIR_MODE, parents=True, exist_ok=True)
        except OSError as e:
            raise ScreenshotIOError(str(self.directory), self.directory, e) from e
        logger.info("Created screenshot directory %s", self.directory)

    def path_for(self, url: str) -> Path:
        return self.directory / screenshot_filename(url, self._clock())

    def capture(self, page: FetchedPage, url: Optional[str] = None) -> Path:
        """Screenshot `page` and return the written path.

        Raises ScreenshotIOError on any failure.
        """
        target = self.path_for(url or page.url)
        page.screenshot(target)
        logger.debug("Saved screenshot of %s to %s", page.url, target)
        return target
