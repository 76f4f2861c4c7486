import json
import sys
import threading
from typing import Callable, Optional, TextIO

from wordcrawl.domain.crawl_result import CrawlResult

ResultSink = Callable[[CrawlResult], None]


class StdoutSink:
    """Default sink: one JSON line per result on standard output.

    Workers call the sink concurrently; writes are serialized so lines never
    interleave.
    """

    def __init__(self, stream: Optional[TextIO] = None, found_only: bool = False):
        self._stream = stream
        self.found_only = found_only
        self._lock = threading.Lock()

    def __call__(self, result: CrawlResult) -> None:
        if self.found_only and not result.found:
            return
        line = json.dumps(result.to_dict(), sort_keys=True)
        stream = self._stream or sys.stdout
        with self._lock:
            stream.write(line + "\n")
            stream.flush()
