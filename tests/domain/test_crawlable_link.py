import pytest

from wordcrawl.domain.crawlable_link import ClassifiedLink, classify


def test_https_link_is_crawlable():
    link = classify("https://example.com/a?b=1")
    assert link == ClassifiedLink(True, "https://example.com/a?b=1", "example.com")


def test_scheme_and_host_are_lowercased_and_fragment_dropped():
    link = classify("  HTTP://Example.COM/Path#section ")
    assert link.crawlable
    assert link.normalized_url == "http://example.com/Path"
    assert link.hostname == "example.com"


def test_bare_host_keeps_its_form():
    assert classify("https://a.test").normalized_url == "https://a.test"


@pytest.mark.parametrize(
    "raw",
    [
        "mailto:someone@example.com",
        "javascript:void(0)",
        "ftp://example.com/file",
        "/relative/path",
        "",
        "http://",
    ],
)
def test_non_http_or_relative_links_are_not_crawlable(raw):
    assert not classify(raw).crawlable


def test_unparseable_link_is_not_crawlable():
    link = classify("http://[::1")
    assert not link.crawlable
    assert link.hostname is None
    assert link.normalized_url == "http://[::1"


def test_classification_is_idempotent():
    raw = "https://Example.com/x#frag"
    assert classify(raw) == classify(raw)
    assert classify(classify(raw).normalized_url) == classify(raw)


def test_hostname_excludes_port_and_credentials():
    link = classify("https://user:pw@example.com:8443/x")
    assert link.crawlable
    assert link.hostname == "example.com"
