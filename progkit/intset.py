"""A set of small non-negative integers backed by a bit vector."""

from __future__ import annotations

from itertools import zip_longest
from typing import Iterable, Iterator

_WORD_BITS = 64


def _locate(x: int) -> tuple[int, int]:
    if x < 0:
        raise ValueError(f"IntSet holds only non-negative values, got {x}")
    return divmod(x, _WORD_BITS)


class IntSet:
    """A set of small non-negative integers; empty when created without values."""

    def __init__(self, values: Iterable[int] = ()) -> None:
        self._words: list[int] = []
        for value in values:
            self.add(value)

    @property
    def words(self) -> tuple[int, ...]:
        """The 64-bit words of the underlying bit vector."""
        return tuple(self._words)

    def has(self, x: int) -> bool:
        """Report whether the set contains the non-negative value x."""
        word, bit = _locate(x)
        return word < len(self._words) and bool(self._words[word] >> bit & 1)

    def add(self, x: int) -> None:
        """Add the non-negative value x to the set."""
        word, bit = _locate(x)
        if word >= len(self._words):
            self._words.extend([0] * (word + 1 - len(self._words)))
        self._words[word] |= 1 << bit

    def union_with(self, other: IntSet) -> None:
        """Set this set to the union of itself and other."""
        self._words = [
            a | b for a, b in zip_longest(self._words, other._words, fillvalue=0)
        ]

    def __contains__(self, x: int) -> bool:
        return self.has(x)

    def _elements(self) -> Iterator[int]:
        for i, word in enumerate(self._words):
            if word:
                yield from (
                    _WORD_BITS * i + j for j in range(_WORD_BITS) if word >> j & 1
                )

    def __str__(self) -> str:
        return "{" + " ".join(str(x) for x in self._elements()) + "}"

    def __repr__(self) -> str:
        return f"IntSet([{', '.join(str(x) for x in self._elements())}])"