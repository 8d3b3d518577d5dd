"""Computing the disk usage of the files under some directories."""

from __future__ import annotations

import argparse
import os
import queue
import sys
import threading
import time
from typing import Iterable, Iterator, Optional

_TICK = 0.5
_DONE = object()


def _cancelled(cancel: Optional[threading.Event]) -> bool:
    return cancel is not None and cancel.is_set()


def _dirents(path: str) -> list[os.DirEntry]:
    entries: list[os.DirEntry] = []
    try:
        with os.scandir(path) as it:
            for entry in it:
                entries.append(entry)
    except OSError as exc:
        print(f"du: {exc}", file=sys.stderr)
    return entries


def walk_dir(
    root: str | os.PathLike, cancel: Optional[threading.Event] = None
) -> Iterator[int]:
    """Yield the size of every non-directory entry under root.

    Symbolic links are not followed. Unreadable directories are reported on
    standard error and skipped. Stops early once cancel is set.
    """
    if _cancelled(cancel):
        return
    for entry in _dirents(os.fspath(root)):
        if _cancelled(cancel):
            return
        if entry.is_dir(follow_symlinks=False):
            yield from walk_dir(entry.path, cancel)
        else:
            try:
                yield entry.stat(follow_symlinks=False).st_size
            except OSError as exc:
                print(f"du: {exc}", file=sys.stderr)


def disk_usage(
    roots: Iterable[str | os.PathLike], cancel: Optional[threading.Event] = None
) -> tuple[int, int]:
    """Return the number of files and total bytes under roots."""
    nfiles = nbytes = 0
    for root in roots:
        for size in walk_dir(root, cancel):
            nfiles += 1
            nbytes += size
    return nfiles, nbytes


def format_usage(nfiles: int, nbytes: int) -> str:
    """Format a file count and byte total in gigabytes."""
    return f"{nfiles} files  {nbytes / 1e9:.1f} GB"


def _cancel_on_input(cancel: threading.Event) -> None:
    stream = getattr(sys.stdin, "buffer", sys.stdin)
    try:
        data = stream.read(1)
    except (OSError, ValueError, AttributeError):
        return
    if data:
        cancel.set()


def main(argv: Optional[list[str]] = None) -> int:
    """Print the disk usage of the given directories; hit return to cancel."""
    parser = argparse.ArgumentParser(prog="du", description="Compute disk usage.")
    parser.add_argument(
        "-v", dest="verbose", action="store_true",
        help="show verbose progress messages",
    )
    parser.add_argument("roots", nargs="*")
    args = parser.parse_args(argv)
    roots = args.roots or ["."]

    cancel = threading.Event()
    threading.Thread(target=_cancel_on_input, args=(cancel,), daemon=True).start()

    sizes: queue.Queue = queue.Queue()

    def produce() -> None:
        try:
            for root in roots:
                for size in walk_dir(root, cancel):
                    sizes.put(size)
        finally:
            sizes.put(_DONE)

    threading.Thread(target=produce, daemon=True).start()

    nfiles = nbytes = 0
    next_tick = time.monotonic() + _TICK
    while True:
        timeout = max(0.0, next_tick - time.monotonic()) if args.verbose else None
        try:
            size = sizes.get(timeout=timeout)
        except queue.Empty:
            if cancel.is_set():
                return 0
            print(format_usage(nfiles, nbytes))
            next_tick += _TICK
            continue
        if cancel.is_set():
            return 0
        if size is _DONE:
            break
        nfiles += 1
        nbytes += size
    print(format_usage(nfiles, nbytes))
    return 0


if __name__ == "__main__":
    sys.exit(main())