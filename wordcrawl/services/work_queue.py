from __future__ import annotations

import logging
import threading
from collections import deque
from enum import Enum
from typing import Callable, Deque, List, Optional

from wordcrawl.domain.crawl_task import CrawlTask

logger = logging.getLogger(__name__)


class QueueState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    DRAINING = "draining"
    STOPPED = "stopped"


class WorkQueue:
    """Fixed pool of worker threads pulling `CrawlTask`s from a shared queue.

    Handlers may submit new tasks while they run. The queue drains when no
    task is pending and none is in flight; a task counts as in flight from
    dequeue until its handler returned, so anything it submitted is already
    queued by the time drain is evaluated. On drain the callback runs exactly
    once and the queue stops.

    Submitting after the queue left RUNNING is a no-op that returns False.
    """

    def __init__(
        self,
        handler: Callable[[CrawlTask], object],
        concurrency: int,
        on_drain: Optional[Callable[[], None]] = None,
        worker_teardown: Optional[Callable[[], None]] = None,
        name: str = "crawl-worker",
    ):
        if int(concurrency) < 1:
            raise ValueError("concurrency must be at least 1")
        self._handler = handler
        self._concurrency = int(concurrency)
        self._on_drain = on_drain
        self._worker_teardown = worker_teardown
        self._name = name
        self._cond = threading.Condition()
        self._tasks: Deque[CrawlTask] = deque()
        self._in_flight = 0
        self._state = QueueState.IDLE
        self._drained = False
        self._workers: List[threading.Thread] = []

    @property
    def concurrency(self) -> int:
        return self._concurrency

    @property
    def state(self) -> QueueState:
        with self._cond:
            return self._state

    @property
    def pending(self) -> int:
        with self._cond:
            return len(self._tasks)

    @property
    def in_flight(self) -> int:
        with self._cond:
            return self._in_flight

    @property
    def drained(self) -> bool:
        with self._cond:
            return self._drained

    def submit(self, task: CrawlTask, admit: Optional[Callable[[str], bool]] = None) -> bool:
        """Queue `task` without blocking.

        `admit(url)` runs under the queue lock, so a claim and the push that
        follows it cannot race with drain or stop. Returns True iff queued.
        """
        with self._cond:
            if self._state not in (QueueState.IDLE, QueueState.RUNNING):
                logger.warning("Ignoring %s submitted after queue %s", task.url, self._state.value)
                return False
            if admit is not None and not admit(task.url):
                logger.debug("Skipping (already claimed) %s", task.url)
                return False
            self._tasks.append(task)
            self._cond.notify()
            return True

    def start(self) -> None:
        with self._cond:
            if self._state is not QueueState.IDLE:
                raise RuntimeError(f"queue already {self._state.value}")
            self._state = QueueState.RUNNING
            for i in range(self._concurrency):
                t = threading.Thread(target=self._work, name=f"{self._name}-{i}", daemon=True)
                self._workers.append(t)
                t.start()
            logger.debug("Started %s workers with %s queued tasks", self._concurrency, len(self._tasks))
            drained = self._check_drain_locked()
        if drained:
            self._finish_drain()

    def _check_drain_locked(self) -> bool:
        if self._state is QueueState.RUNNING and not self._tasks and self._in_flight == 0:
            self._state = QueueState.DRAINING
            self._drained = True
            self._cond.notify_all()
            return True
        return False

    def _finish_drain(self) -> None:
        logger.debug("Queue drained")
        try:
            if self._on_drain is not None:
                self._on_drain()
        except Exception:
            logger.exception("Drain callback failed")
        finally:
            with self._cond:
                self._state = QueueState.STOPPED
                self._cond.notify_all()

    def _next_task(self) -> Optional[CrawlTask]:
        with self._cond:
            while not self._tasks and self._state is QueueState.RUNNING:
                self._cond.wait()
            if self._state is not QueueState.RUNNING:
                return None
            self._in_flight += 1
            return self._tasks.popleft()

    def _work(self) -> None:
        try:
            while True:
                task = self._next_task()
                if task is None:
                    return
                try:
                    self._handler(task)
                except Exception:
                    logger.exception("Worker failed on %s", task.url)
                finally:
                    with self._cond:
                        self._in_flight -= 1
                        drained = self._check_drain_locked()
                if drained:
                    self._finish_drain()
        finally:
            if self._worker_teardown is not None:
                try:
                    self._worker_teardown()
                except Exception:
                    logger.exception("Worker teardown failed")

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the queue stopped. Returns False on timeout."""
        with self._cond:
            return self._cond.wait_for(lambda: self._state is QueueState.STOPPED, timeout)

    def stop(self) -> None:
        """Stop accepting work, drop queued tasks and join the workers.

        In-flight tasks run to completion. Safe to call more than once, but not
        from inside a handler.
        """
        with self._cond:
            if self._state is QueueState.IDLE or self._state is QueueState.RUNNING:
                dropped = len(self._tasks)
                self._tasks.clear()
                self._state = QueueState.STOPPED
                if dropped:
                    logger.info("Stopping queue; dropped %s pending tasks", dropped)
            self._cond.notify_all()
            workers = list(self._workers)
        current = threading.current_thread()
        for t in workers:
            if t is not current:
                t.join()
