import io
import json
import threading

from wordcrawl.domain.crawl_result import ErrorKind, Failed, Found, NotFound
from wordcrawl.services.result_sink import StdoutSink


def test_writes_one_json_line_per_result():
    stream = io.StringIO()
    sink = StdoutSink(stream=stream)

    sink(Found("https://a.test", frozenset({"kitten"}), ("https://a.test/b",)))
    sink(Failed("https://b.test", ErrorKind.FETCH_PROTOCOL_ERROR, "HTTP status 500"))

    lines = stream.getvalue().splitlines()
    assert [json.loads(line)["status"] for line in lines] == ["found", "failed"]
    assert json.loads(lines[0])["matches"] == ["kitten"]


def test_found_only_skips_other_results():
    stream = io.StringIO()
    sink = StdoutSink(stream=stream, found_only=True)

    sink(NotFound("https://a.test"))
    sink(Found("https://b.test", frozenset({"tabby"}), ()))

    lines = stream.getvalue().splitlines()
    assert len(lines) == 1
    assert json.loads(lines[0])["url"] == "https://b.test"


def test_concurrent_writes_do_not_interleave():
    stream = io.StringIO()
    sink = StdoutSink(stream=stream)

    def write(n):
        for i in range(50):
            sink(NotFound(f"https://t{n}.test/{i}"))

    threads = [threading.Thread(target=write, args=(n,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    lines = stream.getvalue().splitlines()
    assert len(lines) == 200
    assert all(json.loads(line)["status"] == "not_found" for line in lines)


def test_defaults_to_stdout(capsys):
    StdoutSink()(NotFound("https://a.test"))
    assert json.loads(capsys.readouterr().out) == {"found": False, "status": "not_found", "url": "https://a.test"}
