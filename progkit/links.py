"""Fetching pages over HTTP, extracting links and titles, and crawling."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Callable, Iterable, Optional
from urllib.parse import unquote, urljoin, urlsplit

import requests

from progkit.htmltree import Node, TitleError, parse_html, sole_title, titles, visit

log = logging.getLogger(__name__)


class FetchError(Exception):
    """Raised when a URL cannot be fetched or its content is unsuitable."""


def _get(url: str, **kwargs) -> requests.Response:
    try:
        return requests.get(url, **kwargs)
    except requests.RequestException as exc:
        raise FetchError(str(exc)) from exc


def _status(resp: requests.Response) -> str:
    return f"{resp.status_code} {resp.reason}"


def _get_ok_html(url: str) -> tuple[requests.Response, Node]:
    with _get(url) as resp:
        if resp.status_code != 200:
            raise FetchError(f"getting {url}: {_status(resp)}")
        return resp, parse_html(resp.content)


def extract(url: str) -> list[str]:
    """Fetch url and return its links resolved against the final URL."""
    resp, doc = _get_ok_html(url)
    links = []
    for href in visit(doc):
        try:
            links.append(urljoin(resp.url, href))
        except ValueError:
            continue  # ignore bad URLs
    return links


def find_links(url: str) -> list[str]:
    """Fetch url and return the href values of its anchors as written."""
    _, doc = _get_ok_html(url)
    return visit(doc)


def breadth_first(f: Callable[[str], Iterable[str]], worklist: Iterable[str]) -> list[str]:
    """Call f once for each item, adding what it returns to the worklist.

    Returns the items in the order f was called on them.
    """
    seen: set[str] = set()
    order: list[str] = []
    pending = list(worklist)
    while pending:
        items, pending = pending, []
        for item in items:
            if item not in seen:
                seen.add(item)
                order.append(item)
                pending.extend(f(item) or [])
    return order


def crawl(url: str) -> list[str]:
    """Print url and return its links, logging any failure."""
    print(url)
    try:
        return extract(url)
    except FetchError as exc:
        log.warning("%s", exc)
        return []


def _get_html_document(url: str) -> Node:
    with _get(url) as resp:
        content_type = resp.headers.get("Content-Type", "")
        if content_type != "text/html" and not content_type.startswith("text/html;"):
            raise FetchError(f"{url} has type {content_type}, not text/html")
        return parse_html(resp.content)


def title(url: str) -> list[str]:
    """Fetch an HTML page and return the text of its title elements."""
    return titles(_get_html_document(url))


def _base_name(path: str) -> str:
    if not path:
        return "."
    stripped = path.rstrip("/")
    if not stripped:
        return "/"
    return stripped.rsplit("/", 1)[-1]


def fetch(url: str, directory: Optional[str | Path] = None) -> tuple[str, int]:
    """Save the body of url to a local file named after its last path element.

    Returns the file's path and the number of bytes written.
    """
    with _get(url, stream=True) as resp:
        local = _base_name(unquote(urlsplit(resp.url).path))
        if local == "/":
            local = "index.html"
        target = Path(directory) / local if directory is not None else Path(local)
        written = 0
        with open(target, "wb") as out:
            try:
                for chunk in resp.iter_content(chunk_size=65536):
                    written += out.write(chunk)
            except requests.RequestException as exc:
                raise FetchError(str(exc)) from exc
    return str(target), written


def wait_for_server(
    url: str,
    timeout: float = 60.0,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """Retry HEAD requests to url with exponential back-off until timeout."""
    deadline = time.monotonic() + timeout
    tries = 0
    while time.monotonic() < deadline:
        try:
            requests.head(url)
            return
        except requests.RequestException as exc:
            log.warning("server not responding (%s); retrying...", exc)
        sleep(float(2**tries))
        tries += 1
    raise FetchError(f"server {url} failed to respond after {timeout:g}s")


def main(argv: Optional[list[str]] = None) -> int:
    """Run one of the link, crawl, title, fetch or wait commands."""
    parser = argparse.ArgumentParser(prog="links", description="Work with web pages.")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("findlinks", help="print the links of each page").add_argument(
        "urls", nargs="*"
    )
    sub.add_parser("crawl", help="crawl breadth-first").add_argument("urls", nargs="*")
    title_parser = sub.add_parser("title", help="print page titles")
    title_parser.add_argument("--sole", action="store_true",
                              help="require exactly one title")
    title_parser.add_argument("urls", nargs="*")
    sub.add_parser("fetch", help="save pages to local files").add_argument(
        "urls", nargs="*"
    )
    sub.add_parser("wait", help="wait for a server to respond").add_argument("url")
    args = parser.parse_args(argv)

    status = 0
    if args.command == "findlinks":
        for url in args.urls:
            try:
                links = find_links(url)
            except FetchError as exc:
                print(f"findlinks: {exc}", file=sys.stderr)
                status = 1
                continue
            for link in links:
                print(link)
    elif args.command == "crawl":
        breadth_first(crawl, args.urls)
    elif args.command == "title":
        for url in args.urls:
            try:
                if args.sole:
                    print(sole_title(_get_html_document(url)))
                else:
                    for text in title(url):
                        print(text)
            except (FetchError, TitleError) as exc:
                print(f"title: {exc}", file=sys.stderr)
                status = 1
    elif args.command == "fetch":
        for url in args.urls:
            try:
                local, size = fetch(url)
            except (FetchError, OSError) as exc:
                print(f"fetch {url}: {exc}", file=sys.stderr)
                status = 1
                continue
            print(f"{url} => {local} ({size} bytes).", file=sys.stderr)
    else:
        try:
            wait_for_server(args.url)
        except FetchError as exc:
            print(f"Site is down: {exc}", file=sys.stderr)
            return 1
    return status


if __name__ == "__main__":
    sys.exit(main())