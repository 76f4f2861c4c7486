import requests
from typing import Callable

from wordcrawl.domain.http_response import HttpResponse
from wordcrawl.exceptions import FetchNetworkError, FetchProtocolError, FetchTimeoutError


class HttpService:
    """
    HTTP client wrapper for fetching web pages.

    Requires http_client callable for dependency injection (DIP compliance).
    This enables easy testing without patching and allows swapping HTTP libraries.
    """

    def __init__(self, user_agent: str, http_client: Callable, timeout: int = 10):
        self.user_agent = user_agent
        self.timeout = timeout
        self.http_client = http_client

    def fetch(self, url: str, timeout_ms: int = None) -> HttpResponse:
        """Fetch URL and return status code, body text, final URL and Content-Type.

        Raises FetchTimeoutError, FetchNetworkError or FetchProtocolError
        (status >= 400).
        """
        headers = {"User-Agent": self.user_agent}
        timeout = timeout_ms / 1000 if timeout_ms is not None else self.timeout
        try:
            resp = self.http_client(url, headers=headers, timeout=timeout)
        except requests.exceptions.Timeout as e:
            raise FetchTimeoutError(url, f"timed out after {timeout}s", e) from e
        except requests.exceptions.RequestException as e:
            raise FetchNetworkError(url, str(e), e) from e

        if resp.status_code >= 400:
            raise FetchProtocolError(url, resp.status_code)

        ct = None
        if hasattr(resp, 'headers'):
            ct = resp.headers.get('Content-Type')

        return HttpResponse(resp.status_code, resp.text, getattr(resp, "url", None) or url, ct)
