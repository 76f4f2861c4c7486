import threading

from wordcrawl.domain.frontier import Frontier


def test_url_not_claimed_initially():
    frontier = Frontier()
    assert not frontier.is_claimed("https://example.com")
    assert len(frontier) == 0


def test_first_claim_wins_and_counts_as_added():
    frontier = Frontier()
    assert frontier.try_claim("https://example.com")
    assert not frontier.try_claim("https://example.com")
    assert frontier.added_count == 1
    assert "https://example.com" in frontier


def test_seeded_crawled_urls_are_claimed_but_not_added():
    frontier = Frontier(["https://example.com/old"])
    assert not frontier.try_claim("https://example.com/old")
    assert frontier.added_count == 0
    assert len(frontier) == 1


def test_concurrent_claims_admit_exactly_one():
    frontier = Frontier()
    barrier = threading.Barrier(16)
    wins = []
    lock = threading.Lock()

    def attempt():
        barrier.wait()
        if frontier.try_claim("https://example.com/contested"):
            with lock:
                wins.append(1)

    threads = [threading.Thread(target=attempt) for _ in range(16)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(wins) == 1
    assert frontier.added_count == 1


def test_start_processing_requires_claim_and_happens_once():
    frontier = Frontier()
    assert not frontier.start_processing("https://example.com")
    frontier.try_claim("https://example.com")
    assert frontier.start_processing("https://example.com")
    assert not frontier.start_processing("https://example.com")


def test_seeded_urls_are_never_processed():
    frontier = Frontier(["https://example.com/old"])
    assert not frontier.start_processing("https://example.com/old")


def test_percent_complete_is_zero_before_anything_added():
    frontier = Frontier()
    assert frontier.percent_complete() == 0.0


def test_percent_complete_tracks_processed_over_added():
    frontier = Frontier()
    frontier.try_claim("a")
    frontier.try_claim("b")
    assert frontier.record_processed() == 1
    assert frontier.percent_complete() == 0.5
    assert frontier.processed_count == 1
