import threading
import time
from collections import Counter

import pytest
import requests
import responses

from progkit.memo import (
    Memo,
    MonitorMemo,
    SimpleMemo,
    concurrent,
    http_get_body,
    incoming_urls,
    sequential,
)

MEMO_CLASSES = [SimpleMemo, Memo, MonitorMemo]
SAFE_CLASSES = [Memo, MonitorMemo]


class CountingFunc:
    def __init__(self, delay=0.0):
        self.calls = Counter()
        self.delay = delay
        self._lock = threading.Lock()

    def __call__(self, key):
        with self._lock:
            self.calls[key] += 1
        if self.delay:
            time.sleep(self.delay)
        return key.encode("ascii") * 2


def finish(memo):
    if isinstance(memo, MonitorMemo):
        memo.close()


@pytest.fixture
def mocked():
    with responses.RequestsMock() as rsps:
        yield rsps


def test_incoming_urls_repeat_each_url_twice():
    urls = list(incoming_urls())
    assert len(urls) == 8
    assert urls[:4] == urls[4:]
    assert len(set(urls)) == 4


def _lookups(memo):
    try:
        return [memo.get("a"), memo.get("a"), memo.get("bc")]
    finally:
        finish(memo)


def test_get_computes_once_per_key():
    f_simple, f_memo, f_monitor = CountingFunc(), CountingFunc(), CountingFunc()
    assert _lookups(SimpleMemo(f_simple)) == [b"aa", b"aa", b"bcbc"]
    assert _lookups(Memo(f_memo)) == [b"aa", b"aa", b"bcbc"]
    assert _lookups(MonitorMemo(f_monitor)) == [b"aa", b"aa", b"bcbc"]
    for f in (f_simple, f_memo, f_monitor):
        assert f.calls == Counter({"a": 1, "bc": 1})


def _failing_recorder():
    calls = []

    def failing(key):
        calls.append(key)
        raise ValueError(f"bad key {key}")

    return failing, calls


def _errors_twice(memo):
    messages = []
    try:
        for _ in range(2):
            with pytest.raises(ValueError) as info:
                memo.get("k")
            messages.append(str(info.value))
    finally:
        finish(memo)
    return messages


def test_errors_are_cached():
    f_simple, calls_simple = _failing_recorder()
    f_memo, calls_memo = _failing_recorder()
    f_monitor, calls_monitor = _failing_recorder()
    assert _errors_twice(SimpleMemo(f_simple)) == ["bad key k", "bad key k"]
    assert _errors_twice(Memo(f_memo)) == ["bad key k", "bad key k"]
    assert _errors_twice(MonitorMemo(f_monitor)) == ["bad key k", "bad key k"]
    assert calls_simple == ["k"]
    assert calls_memo == ["k"]
    assert calls_monitor == ["k"]


@pytest.mark.parametrize("cls", MEMO_CLASSES)
def test_sequential_reports_every_url(cls, capsys):
    f = CountingFunc()
    memo = cls(f)
    try:
        reports = sequential(memo, incoming_urls())
    finally:
        finish(memo)
    urls = list(incoming_urls())
    assert [r[0] for r in reports] == urls
    assert [r[2] for r in reports] == [2 * len(u) for u in urls]
    assert all(r[1] >= 0 for r in reports)
    assert sum(f.calls.values()) == 4
    out = capsys.readouterr().out.splitlines()
    assert len(out) == 8
    assert out[0].startswith("https://example.com/, ")
    assert out[0].endswith(f", {2 * len('https://example.com/')} bytes")


@pytest.mark.parametrize("cls", SAFE_CLASSES)
def test_concurrent_computes_each_key_once(cls):
    f = CountingFunc(delay=0.05)
    memo = cls(f)
    try:
        reports = concurrent(memo, incoming_urls())
    finally:
        finish(memo)
    assert sorted(r[0] for r in reports) == sorted(incoming_urls())
    assert f.calls == Counter({u: 1 for u in set(incoming_urls())})


def _shared_lookups(memo):
    results = []
    lock = threading.Lock()

    def worker():
        value = memo.get("shared")
        with lock:
            results.append(value)

    try:
        threads = [threading.Thread(target=worker) for _ in range(6)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
    finally:
        finish(memo)
    return results


def test_same_key_waits_for_first_request():
    f_memo = CountingFunc(delay=0.1)
    f_monitor = CountingFunc(delay=0.1)
    assert _shared_lookups(Memo(f_memo)) == [b"sharedshared"] * 6
    assert _shared_lookups(MonitorMemo(f_monitor)) == [b"sharedshared"] * 6
    assert f_memo.calls["shared"] == 1
    assert f_monitor.calls["shared"] == 1


def test_sequential_skips_failures(caplog):
    def f(key):
        if key.startswith("http://"):
            raise ConnectionError("refused")
        return b"x"

    memo = Memo(f)
    reports = sequential(memo, incoming_urls())
    assert [r[0] for r in reports] == [
        u for u in incoming_urls() if not u.startswith("http://")
    ]
    assert "refused" in caplog.text


def test_monitor_memo_rejects_after_close():
    memo = MonitorMemo(CountingFunc())
    assert memo.get("z") == b"zz"
    memo.close()
    memo.close()
    with pytest.raises(RuntimeError):
        memo.get("z")


def test_http_get_body_returns_body(mocked):
    mocked.add(responses.GET, "https://example.com/", body=b"hello, world")
    assert http_get_body("https://example.com/") == b"hello, world"


def test_http_get_body_propagates_connection_errors(mocked):
    mocked.add(
        responses.GET,
        "https://example.org/",
        body=requests.ConnectionError("no route"),
    )
    with pytest.raises(requests.ConnectionError):
        http_get_body("https://example.org/")


def test_memo_of_http_get_body_fetches_each_url_once(mocked):
    bodies = {u: f"body of {u}".encode() for u in set(incoming_urls())}
    for url, body in bodies.items():
        mocked.add(responses.GET, url, body=body)
    with MonitorMemo(http_get_body) as memo:
        reports = sequential(memo)
    assert [r[2] for r in reports] == [len(bodies[u]) for u in incoming_urls()]
    assert len(mocked.calls) == 4