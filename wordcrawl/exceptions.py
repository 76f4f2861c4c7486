"""Custom exceptions for wordcrawl services."""
from typing import Optional


class ConfigNotFoundError(Exception):
    """Raised when a requested run config cannot be found on disk."""

    def __init__(self, config_path: str, reason: str = "not found"):
        self.config_path = config_path
        self.reason = reason
        super().__init__(f"Config '{config_path}' {reason}")


class FetchError(Exception):
    """Base class for failures of a single page fetch.

    Fetch errors are terminal for the task that raised them; they are reported
    as a `Failed` result and never retried.
    """

    kind = "fetch_network_error"

    def __init__(self, url: str, detail: str, original: Optional[Exception] = None):
        self.url = url
        self.detail = detail
        self.original = original
        super().__init__(f"Fetch failed for {url}: {detail}")


class FetchTimeoutError(FetchError):
    """Raised when loading a page exceeds the configured request timeout."""

    kind = "fetch_timeout"


class FetchNetworkError(FetchError):
    """Raised when a fetch fails due to network/transport errors."""

    kind = "fetch_network_error"


class FetchProtocolError(FetchError):
    """Raised when the server answered with a non-success status."""

    kind = "fetch_protocol_error"

    def __init__(self, url: str, status_code: int):
        self.status_code = status_code
        super().__init__(url, f"HTTP status {status_code}")


class ScreenshotIOError(Exception):
    """Raised when a screenshot cannot be captured or written."""

    def __init__(self, url: str, path, original: Optional[Exception] = None):
        self.url = url
        self.path = path
        self.original = original
        reason = original if original is not None else "capture unavailable"
        super().__init__(f"Screenshot of {url} to {path} failed: {reason}")


class FetchEngineInitError(Exception):
    """Raised when the fetch engine cannot be started; aborts the whole run."""
