"""Crawling web links concurrently with a limit on parallel requests."""

from __future__ import annotations

import argparse
import logging
import sys
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from typing import Callable, Iterable, Iterator, Optional

from progkit.links import FetchError, extract as _default_extract

log = logging.getLogger(__name__)

Extractor = Callable[[str], Iterable[str]]


def _crawl(extract: Extractor, url: str) -> list[str]:
    try:
        return list(extract(url) or [])
    except (FetchError, OSError, ValueError) as exc:
        log.warning("%s", exc)
        return []


def crawl_concurrently(
    start: Iterable[str],
    extract: Optional[Extractor] = None,
    max_workers: int = 20,
) -> Iterator[str]:
    """Crawl from start, yielding each URL once as it is scheduled.

    At most max_workers extractions run at a time; the crawl ends when no
    new links remain.
    """
    if max_workers < 1:
        raise ValueError("max_workers must be at least 1")
    extractor = extract if extract is not None else _default_extract
    seen: set[str] = set()
    pending: set[Future] = set()
    pool = ThreadPoolExecutor(max_workers=max_workers)

    def schedule(urls: Iterable[str]) -> list[str]:
        fresh = []
        for url in urls:
            if url not in seen:
                seen.add(url)
                fresh.append(url)
                pending.add(pool.submit(_crawl, extractor, url))
        return fresh

    try:
        yield from schedule(start)
        while pending:
            done, _ = wait(pending, return_when=FIRST_COMPLETED)
            for future in done:
                pending.discard(future)
                yield from schedule(future.result())
    finally:
        pool.shutdown(wait=True, cancel_futures=True)


def main(argv: Optional[list[str]] = None) -> int:
    """Crawl the web concurrently from the URLs given as arguments."""
    parser = argparse.ArgumentParser(prog="crawler", description="Crawl web links.")
    parser.add_argument("--workers", type=int, default=20)
    parser.add_argument("urls", nargs="*")
    args = parser.parse_args(argv)
    try:
        for url in crawl_concurrently(args.urls, max_workers=args.workers):
            print(url, flush=True)
    except KeyboardInterrupt:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())