import os
from typing import Any, Dict, List, Optional

import yaml

from wordcrawl.domain.config import CrawlerConfig
from wordcrawl.exceptions import ConfigNotFoundError

# Keys accepted in a run file besides the collections handled below
_SCALAR_OPTIONS = (
    "debug",
    "take_screenshots",
    "simultaneous_requests",
    "request_timeout_ms",
    "minimum_word_length",
    "log_every",
    "screenshot_path",
)


def _as_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return [str(v) for v in value]


def load_dictionary_file(path: str) -> List[str]:
    """Read one word per line; blank lines and `#` comments are skipped."""
    if not os.path.isfile(path):
        raise ConfigNotFoundError(path, "dictionary file not found")
    words = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            word = line.strip()
            if word and not word.startswith("#"):
                words.append(word)
    return words


def build_config(data: Dict[str, Any], defaults: Optional[Dict[str, Any]] = None, base_dir: Optional[str] = None) -> CrawlerConfig:
    """Build a CrawlerConfig from a run-file dict layered over `defaults`.

    `dictionary_file` is resolved relative to `base_dir` and merged with any
    inline `dictionary` words.
    """
    options: Dict[str, Any] = {k: v for k, v in (defaults or {}).items() if k in _SCALAR_OPTIONS and v is not None}
    for key in _SCALAR_OPTIONS:
        if data.get(key) is not None:
            options[key] = data[key]

    words = _as_list(data.get("dictionary"))
    dictionary_file = data.get("dictionary_file")
    if dictionary_file:
        if base_dir and not os.path.isabs(dictionary_file):
            dictionary_file = os.path.join(base_dir, dictionary_file)
        words.extend(load_dictionary_file(dictionary_file))
    if not words:
        raise ValueError("run config needs a non-empty dictionary or dictionary_file")

    return CrawlerConfig(
        dictionary=frozenset(words),
        interesting_domains=frozenset(_as_list(data.get("interesting_domains"))),
        crawled_urls=frozenset(_as_list(data.get("crawled_urls"))),
        seeds=tuple(_as_list(data.get("seeds"))),
        name=data.get("name"),
        **options,
    )


def read_run_file(path: str) -> Dict[str, Any]:
    """Read a YAML run file into a dict; `name` defaults to the file stem.

    Example::

        name: cats
        seeds: [https://example.com]
        dictionary: [kitten, tabby]
        interesting_domains: [example.com]
        take_screenshots: true
    """
    if not os.path.isfile(path):
        raise ConfigNotFoundError(path)
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if not isinstance(data, dict):
        raise ValueError(f"run config {path} must be a mapping")
    data.setdefault("name", os.path.splitext(os.path.basename(path))[0])
    return data


def load_run_config(path: str, defaults: Optional[Dict[str, Any]] = None) -> CrawlerConfig:
    data = read_run_file(path)
    return build_config(data, defaults=defaults, base_dir=os.path.dirname(os.path.abspath(path)))
