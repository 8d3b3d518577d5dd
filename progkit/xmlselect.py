"""Printing the text of selected elements of an XML document."""

from __future__ import annotations

import sys
from typing import IO, Iterable, Iterator, Optional, Sequence
from xml.parsers import expat

_CHUNK = 65536


def contains_all(x: Sequence[str], y: Sequence[str]) -> bool:
    """Report whether x contains the elements of y, in order."""
    remaining = iter(x)
    return all(any(item == wanted for item in remaining) for wanted in y)


def _local(name: str) -> str:
    return name.rpartition(":")[2]


def select(stream: IO, names: Iterable[str]) -> Iterator[tuple[tuple[str, ...], str]]:
    """Yield (element path, text) for each text run inside the named elements.

    The path is the stack of enclosing element names; it is reported when it
    contains all of names, in order. Raises ValueError on malformed XML.
    """
    wanted = list(names)
    stack: list[str] = []
    text: list[str] = []
    ready: list[tuple[tuple[str, ...], str]] = []

    def flush() -> None:
        if text:
            data = "".join(text)
            text.clear()
            if contains_all(stack, wanted):
                ready.append((tuple(stack), data))

    def start(name: str, attrs) -> None:
        flush()
        stack.append(_local(name))

    def end(name: str) -> None:
        flush()
        stack.pop()

    parser = expat.ParserCreate()
    parser.buffer_text = True
    parser.StartElementHandler = start
    parser.EndElementHandler = end
    parser.CharacterDataHandler = text.append
    parser.CommentHandler = lambda data: flush()
    parser.ProcessingInstructionHandler = lambda target, data: flush()

    seen_data = False
    while True:
        chunk = stream.read(_CHUNK)
        if not chunk:
            break
        if isinstance(chunk, str):
            chunk = chunk.encode("utf-8")
        seen_data = True
        try:
            parser.Parse(chunk, False)
        except expat.ExpatError as exc:
            raise ValueError(f"XML syntax error: {exc}") from exc
        batch = ready[:]
        ready.clear()
        yield from batch
    if seen_data:
        try:
            parser.Parse(b"", True)
        except expat.ExpatError as exc:
            raise ValueError(f"XML syntax error: {exc}") from exc
    flush()
    yield from ready


def main(argv: Optional[list[str]] = None) -> int:
    """Print the text of elements matching the names given as arguments."""
    names = sys.argv[1:] if argv is None else argv
    stream = getattr(sys.stdin, "buffer", sys.stdin)
    try:
        for path, text in select(stream, names):
            print(f"{' '.join(path)}: {text}")
    except ValueError as exc:
        print(f"xmlselect: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())