import logging
from typing import Callable, Optional

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

# Never rendered as page text
NON_TEXT_TAGS = ("script", "style", "noscript", "template")


class HtmlTextExtractor:
    """Turn rendered HTML into the whitespace-separated text the matcher scans."""

    def __init__(
        self,
        soup_factory: Optional[Callable[[str], BeautifulSoup]] = None,
    ):
        self._soup_factory = soup_factory or (lambda html: BeautifulSoup(html, "html.parser"))

    def extract(self, body: Optional[str]) -> str:
        if not body:
            return ""

        try:
            soup = self._soup_factory(body)
            for tag in NON_TEXT_TAGS:
                for element in soup.find_all(tag):
                    element.decompose()
            return soup.get_text(separator=" ", strip=True)
        except Exception:
            logger.exception("Error extracting text from HTML body")
            return ""
