"""Dependency injection container for the application."""
from dependency_injector import containers, providers
import requests

from wordcrawl.services.crawler import Crawler
from wordcrawl.services.http_service import HttpService
from wordcrawl.services.fetcher import HttpServiceFetcher
from wordcrawl.services.fetcher_factory import FetcherFactory
from wordcrawl.services.headless_browser_fetcher import PlaywrightHeadlessFetcher, PlaywrightHeadlessOptions
from wordcrawl.services.html_text_extractor import HtmlTextExtractor
from wordcrawl.services.link_extractor import LinkExtractor
from wordcrawl.domain import config as defaults
from wordcrawl import config as env


# Environment variables used by the container (read via `wordcrawl.config` helpers).
#
# USER_AGENT (str, default: "wordcrawl/0.1")
#   User-Agent for HTTP requests and headless browser contexts.
#
# WORDCRAWL_FETCH_MODE (str, default: "headless_chromium")
#   "headless_chromium" renders pages with Playwright; "http" uses requests.
#
# WORDCRAWL_WAIT_UNTIL (str, default: "domcontentloaded")
#   Playwright navigation event to wait for (domcontentloaded | load | networkidle).
#
# WORDCRAWL_SIMULTANEOUS_REQUESTS (int, default: 20)
# WORDCRAWL_REQUEST_TIMEOUT_MS (int milliseconds, default: 10000)
# WORDCRAWL_MINIMUM_WORD_LENGTH (int, default: 3)
# WORDCRAWL_LOG_EVERY (int, default: 100)
# WORDCRAWL_SCREENSHOT_PATH (str, default: "./screenshots")
# WORDCRAWL_TAKE_SCREENSHOTS (bool, default: false)
# WORDCRAWL_DEBUG (bool, default: false)
#   Defaults for every run; values in a YAML run file or on the command line win.
ENV = {
    "USER_AGENT": env.get_str_env("USER_AGENT", "wordcrawl/0.1"),
    "FETCH_MODE": env.get_str_env("WORDCRAWL_FETCH_MODE", "headless_chromium").strip().lower(),
    "WAIT_UNTIL": env.get_str_env("WORDCRAWL_WAIT_UNTIL", "domcontentloaded"),
    "SIMULTANEOUS_REQUESTS": env.get_int_env("WORDCRAWL_SIMULTANEOUS_REQUESTS", defaults.DEFAULT_SIMULTANEOUS_REQUESTS),
    "REQUEST_TIMEOUT_MS": env.get_int_env("WORDCRAWL_REQUEST_TIMEOUT_MS", defaults.DEFAULT_REQUEST_TIMEOUT_MS),
    "MINIMUM_WORD_LENGTH": env.get_int_env("WORDCRAWL_MINIMUM_WORD_LENGTH", defaults.DEFAULT_MINIMUM_WORD_LENGTH),
    "LOG_EVERY": env.get_int_env("WORDCRAWL_LOG_EVERY", defaults.DEFAULT_LOG_EVERY),
    "SCREENSHOT_PATH": env.get_str_env("WORDCRAWL_SCREENSHOT_PATH", defaults.DEFAULT_SCREENSHOT_PATH),
    "TAKE_SCREENSHOTS": env.get_bool_env("WORDCRAWL_TAKE_SCREENSHOTS", defaults.DEFAULT_TAKE_SCREENSHOTS),
    "DEBUG": env.get_bool_env("WORDCRAWL_DEBUG", False),
}


def run_defaults(cfg: dict) -> dict:
    """Map container config onto `CrawlerConfig` keyword defaults."""
    return {
        "debug": cfg.get("DEBUG"),
        "take_screenshots": cfg.get("TAKE_SCREENSHOTS"),
        "simultaneous_requests": cfg.get("SIMULTANEOUS_REQUESTS"),
        "request_timeout_ms": cfg.get("REQUEST_TIMEOUT_MS"),
        "minimum_word_length": cfg.get("MINIMUM_WORD_LENGTH"),
        "log_every": cfg.get("LOG_EVERY"),
        "screenshot_path": cfg.get("SCREENSHOT_PATH"),
    }


class Container(containers.DeclarativeContainer):
    """Dependency injection container for the wordcrawl application."""

    # Configuration
    config = providers.Configuration(default=ENV)

    text_extractor = providers.Singleton(HtmlTextExtractor)

    link_extractor = providers.Singleton(LinkExtractor)

    http_service = providers.Singleton(
        HttpService,
        user_agent=config.USER_AGENT.as_(str),
        http_client=providers.Object(requests.get),
        timeout=providers.Callable(lambda ms: max(1, ms // 1000), config.REQUEST_TIMEOUT_MS.as_(int)),
    )

    http_fetcher = providers.Singleton(
        HttpServiceFetcher,
        http_service=http_service,
        text_extractor=text_extractor,
        link_extractor=link_extractor,
    )

    headless_fetcher = providers.Singleton(
        PlaywrightHeadlessFetcher,
        user_agent=config.USER_AGENT.as_(str),
        options=providers.Factory(
            PlaywrightHeadlessOptions,
            wait_until=config.WAIT_UNTIL.as_(str),
        ),
        text_extractor=text_extractor,
    )

    fetcher_factory = providers.Singleton(
        FetcherFactory,
        http_fetcher=http_fetcher,
        headless_fetcher=headless_fetcher,
    )

    fetcher = providers.Callable(
        lambda factory, mode: factory.get(mode),
        fetcher_factory,
        config.FETCH_MODE,
    )

    # Each run gets its own crawler; callers pass `config=` and optionally `sink=`.
    crawler = providers.Factory(
        Crawler,
        fetcher=fetcher,
    )
