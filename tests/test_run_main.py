"""
Tests for run.py main() with an injected container.
The fetcher provider is overridden so no browser or network is needed.
"""
import json
import types
from unittest.mock import MagicMock

from dependency_injector import providers

from run import main, parse_args
from wordcrawl.container import Container, run_defaults
from wordcrawl.domain.config import CrawlerConfig
from wordcrawl.exceptions import FetchEngineInitError
from wordcrawl.services.fetcher import HttpServiceFetcher
from wordcrawl.services import headless_browser_fetcher
from wordcrawl.services.headless_browser_fetcher import PlaywrightHeadlessFetcher, PlaywrightHeadlessOptions


def _container(fetcher):
    container = Container()
    container.fetcher.override(providers.Object(fetcher))
    return container


def test_container_selects_fetcher_by_mode():
    container = Container()
    container.config.FETCH_MODE.from_value("http")
    assert isinstance(container.fetcher(), HttpServiceFetcher)
    container.config.FETCH_MODE.from_value("headless_chromium")
    assert isinstance(container.fetcher(), PlaywrightHeadlessFetcher)


def test_run_defaults_map_env_names():
    defaults = run_defaults({"SIMULTANEOUS_REQUESTS": 3, "DEBUG": True})
    assert defaults["simultaneous_requests"] == 3
    assert defaults["debug"] is True
    assert defaults["log_every"] is None


def test_parse_args_collects_repeated_options():
    args = parse_args(["--seed", "https://a.test", "--seed", "https://b.test", "--word", "kitten"])
    assert args.seed == ["https://a.test", "https://b.test"]
    assert args.word == ["kitten"]
    assert args.run_file is None


def test_main_crawls_and_prints_results(fake_fetcher_cls, capsys):
    fetcher = fake_fetcher_cls({"https://a.test": ("a kitten", ["https://a.test/b", "https://b.test"])}, default=("", []))

    code = main(
        ["--seed", "https://a.test", "--word", "kitten", "--domain", "a.test", "--workers", "2"],
        container=_container(fetcher),
    )

    assert code == 0
    lines = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    by_url = {line["url"]: line for line in lines}
    assert by_url["https://a.test"]["matches"] == ["kitten"]
    assert by_url["https://a.test/b"]["status"] == "not_found"
    assert "https://b.test" not in by_url
    assert fetcher.closed


def test_main_found_only(fake_fetcher_cls, capsys):
    fetcher = fake_fetcher_cls({"https://a.test": ("nothing", [])})
    code = main(["--seed", "https://a.test", "--word", "kitten", "--found-only"], container=_container(fetcher))
    assert code == 0
    assert capsys.readouterr().out == ""


def test_main_command_line_extends_run_file(fake_fetcher_cls, tmp_path, capsys):
    run_file = tmp_path / "cats.yml"
    run_file.write_text("seeds: [https://a.test]\ndictionary: [kitten]\n")
    fetcher = fake_fetcher_cls(default=("tabby", []))

    code = main([str(run_file), "--word", "tabby", "--seed", "https://b.test"], container=_container(fetcher))

    assert code == 0
    assert sorted(fetcher.fetched) == ["https://a.test", "https://b.test"]
    assert all(json.loads(line)["status"] == "found" for line in capsys.readouterr().out.splitlines())


def test_main_config_error_exit_code(fake_fetcher_cls, capsys):
    code = main(["--seed", "https://a.test"], container=_container(fake_fetcher_cls()))
    assert code == 2
    assert "Configuration error" in capsys.readouterr().err


def test_main_missing_run_file_exit_code(fake_fetcher_cls, tmp_path):
    code = main([str(tmp_path / "missing.yml")], container=_container(fake_fetcher_cls()))
    assert code == 2


def test_main_engine_failure_exit_code(fake_fetcher_cls):
    fetcher = fake_fetcher_cls()
    fetcher.start = MagicMock(side_effect=FetchEngineInitError("no chromium"))
    code = main(["--seed", "https://a.test", "--word", "kitten"], container=_container(fetcher))
    assert code == 1
    assert fetcher.fetched == []


def test_container_headless_engine_survives_consecutive_runs(monkeypatch, sink):
    browser = MagicMock()
    page = browser.new_context.return_value.new_page.return_value
    page.goto.return_value = MagicMock(status=200)
    page.content.return_value = "<p>a kitten here</p>"
    page.eval_on_selector_all.return_value = []
    monkeypatch.setattr(
        headless_browser_fetcher,
        "_import_playwright",
        lambda: types.SimpleNamespace(Error=RuntimeError, TimeoutError=TimeoutError),
    )
    engine = PlaywrightHeadlessFetcher(user_agent="ua", options=PlaywrightHeadlessOptions(verify_launch=False))
    engine._launch = lambda: headless_browser_fetcher._ThreadBrowser(MagicMock(), browser)

    container = Container()
    container.config.FETCH_MODE.from_value("headless_chromium")
    container.headless_fetcher.override(providers.Object(engine))
    config = CrawlerConfig(dictionary={"kitten"}, simultaneous_requests=2, seeds=("https://a.test",))

    for _ in range(2):
        crawler = container.crawler(config=config, sink=sink)
        assert crawler.fetcher is engine
        summary = crawler.run()
        assert summary.drained
        assert summary.processed == 1

    assert [r.status for r in sink.results] == ["found", "found"]
    assert engine.open_browsers == 0
