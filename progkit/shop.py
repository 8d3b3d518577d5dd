"""A small e-commerce server with /list and /price endpoints."""

from __future__ import annotations

import argparse
import sys
from typing import Iterable, Mapping, Optional
from urllib.parse import parse_qs, quote
from wsgiref.simple_server import make_server

from progkit.expr import _quote_string

DEFAULT_DATABASE: dict[str, float] = {"shoes": 50.0, "socks": 5.0}

_PATH_SAFE = "/:@!$&'()*+,;=-._~"


def format_dollars(amount: float) -> str:
    """Format an amount of money as dollars with two decimal places."""
    return f"${amount:.2f}"


def _query_value(environ: Mapping, key: str) -> str:
    values = parse_qs(environ.get("QUERY_STRING", ""), keep_blank_values=True)
    return values.get(key, [""])[0]


def _request_url(environ: Mapping) -> str:
    url = quote(environ.get("PATH_INFO", ""), safe=_PATH_SAFE)
    query = environ.get("QUERY_STRING", "")
    return f"{url}?{query}" if query else url


class ShopApp:
    """A WSGI application serving the item prices of a small database."""

    def __init__(self, database: Optional[Mapping[str, float]] = None) -> None:
        self.database: dict[str, float] = dict(
            DEFAULT_DATABASE if database is None else database
        )

    def list_items(self) -> str:
        """Return one "item: $price" line for every item."""
        return "".join(
            f"{item}: {format_dollars(price)}\n" for item, price in self.database.items()
        )

    def price(self, item: str) -> str:
        """Return the formatted price of item, raising KeyError if it is unknown."""
        try:
            return format_dollars(self.database[item])
        except KeyError:
            raise KeyError(item) from None

    @staticmethod
    def _respond(start_response, status: str, text: str) -> list[bytes]:
        body = text.encode("utf-8")
        start_response(
            status,
            [
                ("Content-Type", "text/plain; charset=utf-8"),
                ("Content-Length", str(len(body))),
            ],
        )
        return [body]

    def __call__(self, environ: dict, start_response) -> Iterable[bytes]:
        path = environ.get("PATH_INFO", "")
        if path == "/list":
            return self._respond(start_response, "200 OK", self.list_items())
        if path == "/price":
            item = _query_value(environ, "item")
            try:
                price = self.price(item)
            except KeyError:
                return self._respond(
                    start_response,
                    "404 Not Found",
                    f"no such item: {_quote_string(item)}\n",
                )
            return self._respond(start_response, "200 OK", f"{price}\n")
        return self._respond(
            start_response, "404 Not Found", f"no such page: {_request_url(environ)}\n"
        )


def main(argv: Optional[list[str]] = None) -> int:
    """Serve the shop on the given address."""
    parser = argparse.ArgumentParser(prog="shop", description="Serve item prices.")
    parser.add_argument("--host", default="localhost")
    parser.add_argument("--port", type=int, default=8000)
    args = parser.parse_args(argv)
    try:
        with make_server(args.host, args.port, ShopApp()) as httpd:
            httpd.serve_forever()
    except KeyboardInterrupt:
        return 0
    except OSError as exc:
        print(f"shop: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())