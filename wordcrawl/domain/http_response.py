from typing import NamedTuple, Optional


class HttpResponse(NamedTuple):
    """Response from HTTP fetch operation."""
    status_code: int
    text: str
    final_url: str
    """URL after redirects; base for resolving relative links"""
    content_type: Optional[str] = None
