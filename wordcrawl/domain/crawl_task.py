from typing import NamedTuple


class CrawlTask(NamedTuple):
    """A single unit of work: crawl `url` once."""
    url: str
