from typing import Callable, List, Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup


class LinkExtractor:
    """Collect the outbound hrefs of an HTML document, resolved against its URL.

    Mirrors what a browser reports for `a.href`: every anchor with an href,
    made absolute, in document order. Classification happens downstream.
    """

    def __init__(self, soup_factory: Optional[Callable[[str], BeautifulSoup]] = None):
        self._soup_factory = soup_factory or (lambda html: BeautifulSoup(html, "html.parser"))

    def extract_links(self, base_url: str, html: str) -> List[str]:
        if not html:
            return []
        soup = self._soup_factory(html)
        urls = []
        for a in soup.find_all("a", href=True):
            href = a.get("href")
            urls.append(urljoin(base_url, href.strip()))
        return urls
