"""Plotting the 3-D surface of a user-supplied expression as SVG, served over HTTP."""

from __future__ import annotations

import argparse
import math
import sys
from typing import Callable, Iterable, Iterator, Optional
from urllib.parse import parse_qs
from wsgiref.simple_server import make_server

from progkit.expr import Expr, ExprError, parse
from progkit.tempconv import _format_g

WIDTH, HEIGHT = 600, 320  # canvas size in pixels
CELLS = 100  # number of grid cells
XYRANGE = 30.0  # axis range (-XYRANGE..+XYRANGE)
XYSCALE = WIDTH / 2 / XYRANGE  # pixels per x or y unit
ZSCALE = HEIGHT * 0.4  # pixels per z unit

SIN30, COS30 = 0.5, math.sqrt(3.0 / 4.0)

SurfaceFunc = Callable[[float, float], float]


def corner(f: SurfaceFunc, i: int, j: int) -> tuple[float, float]:
    """Return the projected canvas position of the corner of cell (i, j)."""
    x = XYRANGE * (i / CELLS - 0.5)
    y = XYRANGE * (j / CELLS - 0.5)
    z = f(x, y)
    sx = WIDTH / 2 + (x - y) * COS30 * XYSCALE
    sy = HEIGHT / 2 + (x + y) * SIN30 * XYSCALE - z * ZSCALE
    return sx, sy


def _svg_chunks(f: SurfaceFunc) -> Iterator[str]:
    yield (
        "<svg xmlns='http://www.w3.org/2000/svg' "
        "style='stroke: grey; fill: white; stroke-width: 0.7' "
        f"width='{WIDTH}' height='{HEIGHT}'>"
    )
    for i in range(CELLS):
        for j in range(CELLS):
            points = (
                corner(f, i + 1, j),
                corner(f, i, j),
                corner(f, i, j + 1),
                corner(f, i + 1, j + 1),
            )
            coords = " ".join(f"{_format_g(px)},{_format_g(py)}" for px, py in points)
            yield f"<polygon points='{coords}'/>\n"
    yield "</svg>\n"


def surface_svg(f: SurfaceFunc) -> str:
    """Render the surface z = f(x, y) as an SVG document."""
    return "".join(_svg_chunks(f))


def parse_and_check(text: str) -> Expr:
    """Parse text and ensure it uses only the variables x, y and r."""
    if text == "":
        raise ExprError("empty expression")
    expr = parse(text)
    found: set[str] = set()
    expr.check(found)
    for name in sorted(found):
        if name not in ("x", "y", "r"):
            raise ExprError(f"undefined variable: {name}")
    return expr


def _form_value(environ: dict, key: str) -> str:
    values: list[str] = []
    method = environ.get("REQUEST_METHOD", "GET").upper()
    content_type = environ.get("CONTENT_TYPE", "").split(";", 1)[0].strip().lower()
    if method in ("POST", "PUT", "PATCH") and content_type == (
        "application/x-www-form-urlencoded"
    ):
        try:
            length = int(environ.get("CONTENT_LENGTH") or 0)
        except ValueError:
            length = 0
        body = environ["wsgi.input"].read(length) if length > 0 else b""
        text = body.decode("utf-8", errors="replace")
        values.extend(parse_qs(text, keep_blank_values=True).get(key, []))
    query = environ.get("QUERY_STRING", "")
    values.extend(parse_qs(query, keep_blank_values=True).get(key, []))
    return values[0] if values else ""


def _plain(start_response, status: str, message: str) -> list[bytes]:
    body = message.encode("utf-8")
    start_response(
        status,
        [
            ("Content-Type", "text/plain; charset=utf-8"),
            ("X-Content-Type-Options", "nosniff"),
            ("Content-Length", str(len(body))),
        ],
    )
    return [body]


def plot_app(environ: dict, start_response) -> Iterable[bytes]:
    """WSGI handler that plots the expression given by the "expr" form value."""
    try:
        expr = parse_and_check(_form_value(environ, "expr"))
    except ExprError as exc:
        return _plain(start_response, "400 Bad Request", f"bad expr: {exc}\n")

    def height(x: float, y: float) -> float:
        return expr.eval({"x": x, "y": y, "r": math.hypot(x, y)})

    body = surface_svg(height).encode("utf-8")
    start_response(
        "200 OK",
        [("Content-Type", "image/svg+xml"), ("Content-Length", str(len(body)))],
    )
    return [body]


def _app(environ: dict, start_response) -> Iterable[bytes]:
    if environ.get("PATH_INFO", "") == "/plot":
        return plot_app(environ, start_response)
    return _plain(start_response, "404 Not Found", "404 page not found\n")


def main(argv: Optional[list[str]] = None) -> int:
    """Serve surface plots at /plot on the given address."""
    parser = argparse.ArgumentParser(prog="surface", description="Serve surface plots.")
    parser.add_argument("--host", default="localhost")
    parser.add_argument("--port", type=int, default=8000)
    args = parser.parse_args(argv)
    try:
        with make_server(args.host, args.port, _app) as httpd:
            httpd.serve_forever()
    except KeyboardInterrupt:
        return 0
    except OSError as exc:
        print(f"surface: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())