from unittest.mock import Mock

from wordcrawl.services.html_text_extractor import HtmlTextExtractor
from wordcrawl.services.link_extractor import LinkExtractor


def test_extract_skips_scripts_and_styles():
    html = (
        "<html><head><style>.kitten{}</style><title>Cats</title></head>"
        "<body><h1>Tabby</h1><script>kitten()</script><noscript>enable js</noscript><p>sleeps</p></body></html>"
    )
    assert HtmlTextExtractor().extract(html) == "Cats Tabby sleeps"


def test_extract_empty_body():
    assert HtmlTextExtractor().extract(None) == ""
    assert HtmlTextExtractor().extract("") == ""


def test_extract_logs_and_returns_empty_on_parser_failure(caplog):
    extractor = HtmlTextExtractor(soup_factory=Mock(side_effect=RuntimeError("bad parser")))
    assert extractor.extract("<p>x</p>") == ""
    assert "Error extracting text" in caplog.text


def test_links_are_resolved_against_base_url():
    html = '<a href="a.html">a</a><a href=" /b ">b</a><a>no href</a><a href="https://other.test/c">c</a>'
    links = LinkExtractor().extract_links("https://example.com/dir/page", html)
    assert links == [
        "https://example.com/dir/a.html",
        "https://example.com/b",
        "https://other.test/c",
    ]


def test_links_keep_non_http_schemes_for_downstream_classification():
    html = '<a href="mailto:me@example.com">mail</a><a href="#top">top</a>'
    links = LinkExtractor().extract_links("https://example.com/", html)
    assert links == ["mailto:me@example.com", "https://example.com/#top"]


def test_no_links_in_empty_document():
    assert LinkExtractor().extract_links("https://example.com", "") == []
