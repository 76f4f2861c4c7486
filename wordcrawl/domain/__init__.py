"""Domain objects for wordcrawl - explicit re-exports to satisfy linters."""
from .config import CrawlerConfig as CrawlerConfig
from .crawl_task import CrawlTask as CrawlTask
from .crawl_result import (
    AlreadyCrawled as AlreadyCrawled,
    CrawlResult as CrawlResult,
    CrawlSummary as CrawlSummary,
    ErrorKind as ErrorKind,
    Failed as Failed,
    Found as Found,
    NotFound as NotFound,
)
from .crawlable_link import ClassifiedLink as ClassifiedLink, classify as classify
from .fetched_page import FetchedPage as FetchedPage
from .frontier import Frontier as Frontier

__all__ = [
    "CrawlerConfig",
    "CrawlTask",
    "CrawlResult",
    "CrawlSummary",
    "ErrorKind",
    "Found",
    "NotFound",
    "AlreadyCrawled",
    "Failed",
    "ClassifiedLink",
    "classify",
    "FetchedPage",
    "Frontier",
]
