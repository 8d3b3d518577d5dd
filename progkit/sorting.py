"""Sorting a music playlist into several orders and printing it as a table."""

from __future__ import annotations

import argparse
import re
import sys
from dataclasses import dataclass
from fractions import Fraction
from typing import Iterable, Optional

from progkit.expr import _quote_string

_NANOS_PER_SECOND = 1_000_000_000
_MAX_NANOS = 2**63 - 1
_UNITS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "μs": 1_000,
    "ms": 1_000_000,
    "s": _NANOS_PER_SECOND,
    "m": 60 * _NANOS_PER_SECOND,
    "h": 3600 * _NANOS_PER_SECOND,
}
_PIECE = re.compile(r"([0-9]*)(?:\.([0-9]*))?([^0-9.]*)")
_PADDING = 2


def parse_length(text: str) -> float:
    """Parse a duration such as "3m38s" or "1.5h" into seconds."""
    quoted = _quote_string(text)
    s = text
    negative = False
    if s and s[0] in "+-":
        negative = s[0] == "-"
        s = s[1:]
    if s == "0":
        return 0.0
    if not s:
        raise ValueError(f"time: invalid duration {quoted}")
    total = Fraction(0)
    pos = 0
    while pos < len(s):
        match = _PIECE.match(s, pos)
        whole, frac, unit = match.groups()
        if not whole and not frac:
            raise ValueError(f"time: invalid duration {quoted}")
        if not unit:
            raise ValueError(f"time: missing unit in duration {quoted}")
        if unit not in _UNITS:
            raise ValueError(
                f"time: unknown unit {_quote_string(unit)} in duration {quoted}"
            )
        value = Fraction(int(whole or "0"))
        if frac:
            value += Fraction(int(frac), 10 ** len(frac))
        total += value * _UNITS[unit]
        if total > _MAX_NANOS:
            raise ValueError(f"time: invalid duration {quoted}")
        pos = match.end()
    seconds = float(total / _NANOS_PER_SECOND)
    return -seconds if negative else seconds


def _decimal(value: int, unit: int) -> str:
    whole, frac = divmod(value, unit)
    if not frac:
        return str(whole)
    width = len(str(unit)) - 1
    return f"{whole}.{str(frac).zfill(width).rstrip('0')}"


def format_length(seconds: float) -> str:
    """Format a duration in seconds like "3m38s", "1h0m0s" or "250ms"."""
    nanos = round(Fraction(seconds) * _NANOS_PER_SECOND)
    if nanos == 0:
        return "0s"
    sign = "-" if nanos < 0 else ""
    u = abs(nanos)
    if u < _NANOS_PER_SECOND:
        if u < 1_000:
            return f"{sign}{u}ns"
        if u < 1_000_000:
            return f"{sign}{_decimal(u, 1_000)}µs"
        return f"{sign}{_decimal(u, 1_000_000)}ms"
    hours, rest = divmod(u, _UNITS["h"])
    minutes, rest = divmod(rest, _UNITS["m"])
    secs = _decimal(rest, _NANOS_PER_SECOND) + "s"
    if hours:
        return f"{sign}{hours}h{minutes}m{secs}"
    if minutes:
        return f"{sign}{minutes}m{secs}"
    return sign + secs


@dataclass(frozen=True)
class Track:
    """One track of a playlist; length is in seconds."""

    title: str
    artist: str
    album: str
    year: int
    length: float


TRACKS: tuple[Track, ...] = (
    Track("Go", "Delilah", "From the Roots Up", 2012, parse_length("3m38s")),
    Track("Go", "Moby", "Moby", 1992, parse_length("3m37s")),
    Track("Go Ahead", "Alicia Keys", "As I Am", 2007, parse_length("4m36s")),
    Track("Ready 2 Go", "Martin Solveig", "Smash", 2011, parse_length("4m24s")),
)


def format_tracks(tracks: Iterable[Track]) -> str:
    """Render tracks as an aligned table with a header."""
    rows = [
        ("Title", "Artist", "Album", "Year", "Length"),
        ("-----", "------", "-----", "----", "------"),
    ]
    rows.extend(
        (t.title, t.artist, t.album, str(t.year), format_length(t.length))
        for t in tracks
    )
    widths = [max(map(len, column)) + _PADDING for column in zip(*rows)]
    return "".join(
        "".join(cell.ljust(width) for cell, width in zip(row, widths)) + "\n"
        for row in rows
    )


def by_artist(tracks: Iterable[Track]) -> list[Track]:
    """Return the tracks ordered by artist."""
    return sorted(tracks, key=lambda t: t.artist)


def by_year(tracks: Iterable[Track]) -> list[Track]:
    """Return the tracks ordered by year."""
    return sorted(tracks, key=lambda t: t.year)


def custom_order(tracks: Iterable[Track]) -> list[Track]:
    """Return the tracks ordered by title, then year, then length."""
    return sorted(tracks, key=lambda t: (t.title, t.year, t.length))


def main(argv: Optional[list[str]] = None) -> int:
    """Print the playlist in several sort orders."""
    parser = argparse.ArgumentParser(prog="sorting", description="Sort a playlist.")
    parser.parse_args(argv)

    tracks = by_artist(TRACKS)
    print("byArtist:")
    sys.stdout.write(format_tracks(tracks))

    tracks = sorted(tracks, key=lambda t: t.artist, reverse=True)
    print("\nReverse(byArtist):")
    sys.stdout.write(format_tracks(tracks))

    tracks = by_year(tracks)
    print("\nbyYear:")
    sys.stdout.write(format_tracks(tracks))

    tracks = custom_order(tracks)
    print("\nCustom:")
    sys.stdout.write(format_tracks(tracks))
    return 0


if __name__ == "__main__":
    sys.exit(main())