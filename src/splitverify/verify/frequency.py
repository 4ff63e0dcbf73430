"""Symbol frequency table used to compare input and outputs as multisets."""

from collections import Counter
from typing import Dict, List, Tuple, Union

from .errors import UnexpectedByte

Chunk = Union[bytes, str]

NEWLINE = ord("\n")


def _tally(chunk: Chunk) -> Dict[int, int]:
    counts = Counter(chunk)
    if isinstance(chunk, str):
        return {ord(ch): n for ch, n in counts.items()}
    return dict(counts)


def _nth_index(chunk: Chunk, symbol: int, n: int) -> int:
    """Index of the n-th (1-based) occurrence of symbol in chunk."""
    needle: Chunk = chr(symbol) if isinstance(chunk, str) else bytes([symbol])
    idx = -1
    for _ in range(n):
        idx = chunk.find(needle, idx + 1)  # type: ignore[arg-type]
    return idx


class ByteFrequencyTable:
    """Counts per byte value (or code point in text mode).

    Memory is bounded by the number of distinct symbols, never by file size.
    """

    def __init__(self) -> None:
        self.counts: Dict[int, int] = {}

    def __len__(self) -> int:
        return len(self.counts)

    def add(self, chunk: Chunk) -> None:
        for symbol, n in _tally(chunk).items():
            self.counts[symbol] = self.counts.get(symbol, 0) + n

    def consume(self, chunk: Chunk, path: str, offset: int) -> None:
        """Decrement counts for ``chunk``, which starts at ``offset`` in ``path``.

        Raises UnexpectedByte at the earliest occurrence that is absent from
        the table or would drive its count below zero. The table is left
        unchanged when that happens.
        """
        tally = _tally(chunk)
        first_bad: Tuple[int, int] | None = None
        for symbol, n in tally.items():
            have = self.counts.get(symbol, 0)
            if n > have:
                pos = _nth_index(chunk, symbol, have + 1)
                if first_bad is None or pos < first_bad[1]:
                    first_bad = (symbol, pos)
        if first_bad is not None:
            symbol, pos = first_bad
            unit = "char" if isinstance(chunk, str) else "byte"
            raise UnexpectedByte(symbol, path, offset + pos, unit)

        for symbol, n in tally.items():
            self.counts[symbol] -= n

    def count(self, symbol: int) -> int:
        return self.counts.get(symbol, 0)

    @property
    def newlines(self) -> int:
        return self.count(NEWLINE)

    def remaining(self) -> List[Tuple[int, int]]:
        """Symbols with a strictly positive count, lowest value first."""
        return sorted((s, n) for s, n in self.counts.items() if n > 0)
