import logging

from wordcrawl.domain.frontier import Frontier
from wordcrawl.services.progress_reporter import ProgressReporter


class _Clock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def _frontier(added, processed):
    frontier = Frontier()
    for i in range(added):
        frontier.try_claim(f"https://a.test/{i}")
    for _ in range(processed):
        frontier.record_processed()
    return frontier


def test_reports_every_n_pages(caplog):
    caplog.set_level(logging.INFO)
    clock = _Clock()
    reporter = ProgressReporter(_frontier(4, 2), log_every=2, queue_length=lambda: 7, clock=clock)
    clock.now = 1.5

    assert not reporter.maybe_report(1)
    assert reporter.maybe_report(2)

    assert "Processed 2 pages in 1.50 s" in caplog.text
    assert "Percent complete: 0.50" in caplog.text
    assert "Total urls in queue: 7, total added: 4" in caplog.text


def test_disabled_reporter_is_silent(caplog):
    caplog.set_level(logging.INFO)
    reporter = ProgressReporter(_frontier(1, 1), log_every=1, enabled=False)
    assert not reporter.maybe_report(1)
    assert caplog.text == ""


def test_reset_restarts_elapsed_time():
    clock = _Clock()
    reporter = ProgressReporter(Frontier(), log_every=10, clock=clock)
    clock.now = 5.0
    reporter.reset()
    clock.now = 7.0
    assert reporter.elapsed() == 2.0
