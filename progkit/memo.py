"""Memoization of a function of a string key, in several concurrency designs."""

from __future__ import annotations

import logging
import queue
import threading
import time
from typing import Any, Callable, Iterable, Iterator, Optional

import requests

from progkit.sorting import format_length

log = logging.getLogger(__name__)

Func = Callable[[str], Any]

_CLOSE = object()
_HTTP_TIMEOUT = 30.0


class _Entry:
    """The eventual result of calling the memoized function for one key."""

    def __init__(self) -> None:
        self.ready = threading.Event()
        self.value: Any = None
        self.error: Optional[Exception] = None

    def call(self, f: Func, key: str) -> None:
        try:
            self.value = f(key)
        except Exception as exc:
            self.error = exc
        finally:
            self.ready.set()

    def deliver(self, response: queue.Queue) -> None:
        self.ready.wait()
        response.put(self)

    def result(self) -> Any:
        if self.error is not None:
            raise self.error
        return self.value


class SimpleMemo:
    """Caches the results of calling f; not safe for concurrent use."""

    def __init__(self, f: Func) -> None:
        self._f = f
        self._cache: dict[str, _Entry] = {}

    def get(self, key: str) -> Any:
        """Return f(key), computing it only on the first request.

        An exception raised by f is cached and raised again on later requests.
        """
        entry = self._cache.get(key)
        if entry is None:
            entry = _Entry()
            entry.call(self._f, key)
            self._cache[key] = entry
        return entry.result()


class Memo:
    """A concurrency-safe memo of f.

    Requests for different keys proceed in parallel; concurrent requests for
    the same key wait until the first one has computed the result.
    """

    def __init__(self, f: Func) -> None:
        self._f = f
        self._lock = threading.Lock()
        self._cache: dict[str, _Entry] = {}

    def get(self, key: str) -> Any:
        """Return f(key), computing it at most once; cached errors are re-raised."""
        with self._lock:
            entry = self._cache.get(key)
            first = entry is None
            if first:
                entry = self._cache[key] = _Entry()
        if first:
            entry.call(self._f, key)
        else:
            entry.ready.wait()
        return entry.result()


class MonitorMemo:
    """A concurrency-safe memo of f whose cache is owned by a monitor thread.

    Call close when done; requests after that raise RuntimeError.
    """

    def __init__(self, f: Func) -> None:
        self._requests: queue.Queue = queue.Queue()
        self._lock = threading.Lock()
        self._closed = False
        self._server = threading.Thread(target=self._serve, args=(f,), daemon=True)
        self._server.start()

    def _serve(self, f: Func) -> None:
        cache: dict[str, _Entry] = {}
        while (request := self._requests.get()) is not _CLOSE:
            key, response = request
            entry = cache.get(key)
            if entry is None:
                entry = cache[key] = _Entry()
                threading.Thread(target=entry.call, args=(f, key), daemon=True).start()
            threading.Thread(target=entry.deliver, args=(response,), daemon=True).start()

    def get(self, key: str) -> Any:
        """Return f(key), computing it at most once; cached errors are re-raised."""
        response: queue.Queue = queue.Queue(maxsize=1)
        with self._lock:
            if self._closed:
                raise RuntimeError("memo is closed")
            self._requests.put((key, response))
        return response.get().result()

    def close(self) -> None:
        """Stop the monitor thread."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._requests.put(_CLOSE)
        self._server.join()

    def __enter__(self) -> MonitorMemo:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def http_get_body(url: str) -> bytes:
    """Fetch url and return the body of the response."""
    with requests.get(url, timeout=_HTTP_TIMEOUT) as resp:
        return resp.content


_SAMPLE_URLS = (
    "https://example.com/",
    "https://example.org/",
    "https://example.net/",
    "http://www.example.com/",
)


def incoming_urls() -> Iterator[str]:
    """Yield a stream of sample URLs in which every URL appears twice."""
    yield from _SAMPLE_URLS
    yield from _SAMPLE_URLS


def _timed_get(memo: Any, url: str) -> Optional[tuple[str, float, int]]:
    start = time.monotonic()
    try:
        value = memo.get(url)
    except Exception as exc:
        log.warning("%s", exc)
        return None
    report = (url, time.monotonic() - start, len(value))
    print(f"{url}, {format_length(report[1])}, {report[2]} bytes", flush=True)
    return report


def sequential(
    memo: Any, urls: Optional[Iterable[str]] = None
) -> list[tuple[str, float, int]]:
    """Look up each URL in turn, printing and returning (url, seconds, size).

    URLs whose lookup fails are logged and left out.
    """
    reports = []
    for url in incoming_urls() if urls is None else urls:
        report = _timed_get(memo, url)
        if report is not None:
            reports.append(report)
    return reports


def concurrent(
    memo: Any, urls: Optional[Iterable[str]] = None
) -> list[tuple[str, float, int]]:
    """Look up all URLs at once, printing and returning (url, seconds, size).

    Results are in completion order; failed lookups are logged and left out.
    """
    reports: list[tuple[str, float, int]] = []
    lock = threading.Lock()

    def worker(url: str) -> None:
        report = _timed_get(memo, url)
        if report is not None:
            with lock:
                reports.append(report)

    threads = [
        threading.Thread(target=worker, args=(url,))
        for url in (incoming_urls() if urls is None else urls)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    return reports