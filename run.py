import argparse
import logging
import os
import sys
from typing import List, Optional

from wordcrawl.configs import build_config, read_run_file
from wordcrawl.container import Container, run_defaults
from wordcrawl.exceptions import ConfigNotFoundError, FetchEngineInitError
from wordcrawl.services.fetcher_factory import FETCH_MODES
from wordcrawl.services.result_sink import StdoutSink

logger = logging.getLogger("wordcrawl")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="wordcrawl",
        description="Crawl pages looking for dictionary words, following links on interesting domains.",
    )
    parser.add_argument("run_file", nargs="?", help="YAML run file (seeds, dictionary, interesting_domains, ...)")
    parser.add_argument("--seed", action="append", default=[], help="seed URL (repeatable)")
    parser.add_argument("--word", action="append", default=[], help="dictionary word (repeatable)")
    parser.add_argument("--domain", action="append", default=[], help="interesting domain to follow (repeatable)")
    parser.add_argument("--fetch-mode", choices=FETCH_MODES, help="page fetch engine")
    parser.add_argument("--workers", type=int, help="simultaneous requests")
    parser.add_argument("--timeout-ms", type=int, help="per-request timeout in milliseconds")
    parser.add_argument("--screenshots", action="store_true", default=None, help="screenshot matching pages")
    parser.add_argument("--screenshot-path", help="directory for screenshots")
    parser.add_argument("--found-only", action="store_true", help="only print pages with matches")
    parser.add_argument("--debug", action="store_true", default=None, help="verbose logging and progress reports")
    return parser.parse_args(argv)


def _merge_cli(data: dict, args: argparse.Namespace) -> dict:
    """Layer command-line values over a run-file dict; the command line wins."""
    merged = dict(data)
    for key, extra in (("dictionary", args.word), ("interesting_domains", args.domain), ("seeds", args.seed)):
        current = merged.get(key) or []
        if isinstance(current, str):
            current = [current]
        merged[key] = list(current) + list(extra)
    overrides = {
        "debug": args.debug,
        "take_screenshots": args.screenshots,
        "simultaneous_requests": args.workers,
        "request_timeout_ms": args.timeout_ms,
        "screenshot_path": args.screenshot_path,
    }
    merged.update({k: v for k, v in overrides.items() if v is not None})
    merged.setdefault("name", "cli")
    return merged


def main(argv: Optional[List[str]] = None, container: Optional[Container] = None) -> int:
    args = parse_args(argv)
    container = container or Container()
    if args.fetch_mode:
        container.config.FETCH_MODE.from_value(args.fetch_mode)

    try:
        data = read_run_file(args.run_file) if args.run_file else {}
        base_dir = os.path.dirname(os.path.abspath(args.run_file)) if args.run_file else None
        run_config = build_config(
            _merge_cli(data, args),
            defaults=run_defaults(container.config()),
            base_dir=base_dir,
        )
    except (ConfigNotFoundError, ValueError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=logging.DEBUG if run_config.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if not run_config.seeds:
        logger.warning("No seed URLs given; nothing to crawl")

    crawler = container.crawler(config=run_config, sink=StdoutSink(found_only=args.found_only))
    try:
        summary = crawler.run()
    except FetchEngineInitError as e:
        logger.error("Could not start fetch engine: %s", e)
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted; shutting down")
        crawler.shutdown()
        return 130

    logger.info(
        "Done: %s added, %s processed in %.2f s (drained=%s)",
        summary.added,
        summary.processed,
        summary.elapsed_seconds,
        summary.drained,
    )
    return 0


if __name__ == '__main__':
    sys.exit(main())
