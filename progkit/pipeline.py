"""Pipelines of generators, a spinner while computing, and a rocket countdown."""

from __future__ import annotations

import argparse
import itertools
import sys
import threading
import time
from typing import Iterable, Iterator, Optional


def counter(limit: int = 100) -> Iterator[int]:
    """Yield the natural numbers below limit."""
    yield from range(limit)


def squarer(values: Iterable[int]) -> Iterator[int]:
    """Yield the square of each value."""
    for v in values:
        yield v * v


def run_pipeline(limit: int = 100) -> list[int]:
    """Return the squares of the natural numbers below limit."""
    return list(squarer(counter(limit)))


def fib(n: int) -> int:
    """Return the nth Fibonacci number, computed slowly by plain recursion."""
    if n < 2:
        return n
    return fib(n - 1) + fib(n - 2)


def spinner_frames() -> Iterator[str]:
    """Yield the frames of a text spinner forever."""
    return itertools.cycle("-\\|/")


def countdown(
    start: int = 10, abort: Optional[threading.Event] = None, interval: float = 1.0
) -> bool:
    """Print a countdown, one number per interval; return False if aborted."""
    for n in range(start, 0, -1):
        print(n, flush=True)
        if abort is None:
            time.sleep(interval)
        elif abort.wait(interval):
            print("Launch aborted!", flush=True)
            return False
    return True


def _abort_on_input(abort: threading.Event) -> None:
    stream = getattr(sys.stdin, "buffer", sys.stdin)
    try:
        stream.read(1)
    except (OSError, ValueError):
        return
    abort.set()


def main(argv: Optional[list[str]] = None) -> int:
    """Run the pipeline, spinner or countdown demonstration."""
    parser = argparse.ArgumentParser(prog="pipeline", description="Concurrency demos.")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("pipeline", help="print squares").add_argument(
        "--limit", type=int, default=100
    )
    sub.add_parser("spinner", help="spin while computing").add_argument(
        "--n", type=int, default=45
    )
    sub.add_parser("countdown", help="count down to launch").add_argument(
        "--start", type=int, default=10
    )
    args = parser.parse_args(argv)

    if args.command == "pipeline":
        for x in squarer(counter(args.limit)):
            print(x)
    elif args.command == "spinner":
        stop = threading.Event()

        def spin() -> None:
            for frame in spinner_frames():
                print(f"\r{frame}", end="", flush=True)
                if stop.wait(0.1):
                    return

        threading.Thread(target=spin, daemon=True).start()
        result = fib(args.n)
        stop.set()
        print(f"\rFibonacci({args.n}) = {result}")
    else:
        abort = threading.Event()
        threading.Thread(target=_abort_on_input, args=(abort,), daemon=True).start()
        print("Commencing countdown.  Press return to abort.")
        if countdown(args.start, abort):
            print("Lift off!")
    return 0


if __name__ == "__main__":
    sys.exit(main())