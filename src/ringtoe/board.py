"""
Board: a ring of cells around one center cell, plus win detection.

Lines that win:
- three consecutive ring cells holding the same mark (the ring wraps around);
- the center and the two ring cells opposite each other through it.

The diameter rule pairs cell i with cell i + N/2, so it needs an even ring.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Tuple

from .cells import Cell
from .ring import Ring


class WinKind(Enum):
    RING = "ring"
    CENTER = "center"


@dataclass(frozen=True)
class Win:
    """Where a winning line was found.

    For a ring win ``index`` is where the run of three starts; the next two
    cells complete it. For a center win ``index`` is one end of the diameter.
    """
    kind: WinKind
    index: int

    def positions(self, cells: int) -> Tuple[int, ...]:
        if self.kind is WinKind.RING:
            return tuple((self.index + d) % cells for d in range(3))
        return (self.index % cells, (self.index + cells // 2) % cells)


class Board:
    def __init__(self, cells: int = 8) -> None:
        self.center: Cell = Cell.EMPTY
        self.ring = Ring(cells)

    @classmethod
    def from_digits(cls, ring: str, center: Cell = Cell.EMPTY) -> "Board":
        cells = Ring.from_digits(ring)
        board = cls(len(cells))
        board.ring = cells
        board.center = Cell.from_digit(int(center))
        return board

    def _iter_wins(self) -> Iterator[Tuple[Win, Cell]]:
        ring = self.ring
        n = len(ring)
        # Each start index is one window; indices past the end wrap back to 0 and 1.
        for i in range(n):
            a = ring.get(i)
            if a != Cell.EMPTY and a == ring.get(i + 1) == ring.get(i + 2):
                yield Win(WinKind.RING, i), a

        if self.center == Cell.EMPTY:
            return
        assert n % 2 == 0, f"center lines need an even ring, got {n} cells"
        half = n // 2
        for i in range(half):
            if ring.get(i) == self.center and ring.get(i + half) == self.center:
                yield Win(WinKind.CENTER, i), self.center

    def winner(self) -> Cell:
        for _, mark in self._iter_wins():
            return mark
        return Cell.EMPTY

    def wins(self) -> List[Win]:
        return [win for win, _ in self._iter_wins()]

    def is_full(self) -> bool:
        return self.center != Cell.EMPTY and all(c != Cell.EMPTY for c in self.ring)

    def copy(self) -> "Board":
        board = Board(len(self.ring))
        board.ring = self.ring.copy()
        board.center = self.center
        return board

    def __str__(self) -> str:
        return f"[{self.ring}] center={self.center.glyph!r}"
