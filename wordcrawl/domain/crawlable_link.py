from typing import NamedTuple, Optional
from urllib.parse import urlsplit, urlunsplit

CRAWLABLE_SCHEMES = ("http", "https")


class ClassifiedLink(NamedTuple):
    crawlable: bool
    normalized_url: str
    hostname: Optional[str]


def classify(raw_url: str) -> ClassifiedLink:
    """Decide whether `raw_url` can be crawled and normalize it.

    A link is crawlable iff it is an absolute http(s) URL with a hostname.
    Normalization lowercases the scheme and network location and drops the
    fragment. Links that cannot be parsed keep their stripped text and have no
    hostname.
    """
    text = (raw_url or "").strip()
    try:
        parts = urlsplit(text)
        hostname = parts.hostname
    except ValueError:
        return ClassifiedLink(False, text, None)

    scheme = parts.scheme.lower()
    if scheme not in CRAWLABLE_SCHEMES or not parts.netloc or not hostname:
        return ClassifiedLink(False, text, hostname)

    normalized = urlunsplit((scheme, parts.netloc.lower(), parts.path, parts.query, ""))
    return ClassifiedLink(True, normalized, hostname)
