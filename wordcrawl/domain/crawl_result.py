"""Crawl result data model."""
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, FrozenSet, NamedTuple, Tuple


class ErrorKind(str, Enum):
    FETCH_TIMEOUT = "fetch_timeout"
    FETCH_NETWORK_ERROR = "fetch_network_error"
    FETCH_PROTOCOL_ERROR = "fetch_protocol_error"
    UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class CrawlResult:
    """Outcome of processing one crawl task.

    Exactly one result is produced per processed task and handed to the sink.
    Subclasses carry the case-specific fields; `status` is the variant tag.
    """

    url: str
    status: ClassVar[str] = "unknown"

    @property
    def found(self) -> bool:
        return False

    def to_dict(self) -> dict:
        return {"status": self.status, "found": self.found, "url": self.url}


@dataclass(frozen=True)
class Found(CrawlResult):
    matches: FrozenSet[str] = frozenset()
    links: Tuple[str, ...] = ()
    status: ClassVar[str] = "found"

    @property
    def found(self) -> bool:
        return True

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["matches"] = sorted(self.matches)
        data["links"] = list(self.links)
        return data


@dataclass(frozen=True)
class NotFound(CrawlResult):
    status: ClassVar[str] = "not_found"


@dataclass(frozen=True)
class AlreadyCrawled(CrawlResult):
    status: ClassVar[str] = "already_crawled"


@dataclass(frozen=True)
class Failed(CrawlResult):
    error_kind: ErrorKind = ErrorKind.UNEXPECTED
    detail: str = ""
    status: ClassVar[str] = "failed"

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["error_kind"] = self.error_kind.value
        data["detail"] = self.detail
        return data


class CrawlSummary(NamedTuple):
    """Result of a whole crawl run.

    Lets callers log metrics and tell a natural drain from an aborted run.
    """
    added: int
    """Number of URLs admitted to the frontier during the run"""

    processed: int
    """Number of tasks that went through the page pipeline"""

    elapsed_seconds: float

    drained: bool
    """True if the run ended because the queue drained, False if it was stopped"""
