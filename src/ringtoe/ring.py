"""
The ring of outer cells, packed into a single base-3 integer.

Index 0 is the most significant digit, so a ring reads left to right the same
way its digit string does: ``Ring.from_digits("01201201")`` has ``packed ==
int("01201201", 3)``.

Two rings compare and hash equal when one is a rotation and/or reflection of
the other. ``packed`` is only a raw encoding; use ``canonicalize()`` (or just
``==``) for identity.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Iterable, Iterator

from .cells import Cell, parse_digits, serialize_digits

# 3**20 < 2**32 < 3**21: twenty cells is what fits in an unsigned 32-bit value.
INT_WIDTH = 32
MAX_CELLS = 20

POW3 = tuple(3 ** i for i in range(MAX_CELLS + 1))


def _check_length(length: int) -> None:
    if not 1 <= length <= MAX_CELLS:
        raise ValueError(
            f"Ring length must be between 1 and {MAX_CELLS} "
            f"({INT_WIDTH}-bit packing), got {length}"
        )


def _rotate_left(packed: int, length: int, k: int) -> int:
    k %= length
    # Digits pushed past the top wrap around to the bottom.
    truncated = packed * POW3[k] % POW3[length]
    wrapped = packed // POW3[length - k]
    return truncated + wrapped


def _rotate_right(packed: int, length: int, k: int) -> int:
    k %= length
    # The low k digits move up to the most significant end.
    wrapped = packed % POW3[k] * POW3[length - k]
    truncated = packed // POW3[k]
    return truncated + wrapped


def _reflect(packed: int, length: int) -> int:
    out = 0
    for _ in range(length):
        out = out * 3 + packed % 3
        packed //= 3
    return out


@lru_cache(maxsize=1 << 16)
def canonical_packed(packed: int, length: int) -> int:
    """Largest packed value over all rotations of the ring and its mirror image."""
    best = 0
    mirrored = _reflect(packed, length)
    for k in range(length):
        best = max(best, _rotate_left(packed, length, k), _rotate_left(mirrored, length, k))
    return best


class Ring:
    __slots__ = ("_packed", "_length")

    def __init__(self, length: int, packed: int = 0) -> None:
        _check_length(length)
        if not 0 <= packed < POW3[length]:
            raise ValueError(f"Packed value {packed} out of range for a ring of {length} cells")
        self._length = length
        self._packed = packed

    @classmethod
    def from_cells(cls, cells: Iterable[Cell]) -> "Ring":
        packed = 0
        length = 0
        for cell in cells:
            length += 1
            if length > MAX_CELLS:
                raise ValueError(f"Too many cells for one ring (max {MAX_CELLS})")
            packed = packed * 3 + Cell.from_digit(int(cell))
        return cls(length, packed)

    @classmethod
    def from_digits(cls, text: str) -> "Ring":
        return cls.from_cells(parse_digits(text))

    @property
    def packed(self) -> int:
        return self._packed

    def __len__(self) -> int:
        return self._length

    def _place(self, i: int) -> int:
        return POW3[self._length - 1 - i % self._length]

    def get(self, i: int) -> Cell:
        return Cell(self._packed // self._place(i) % 3)

    def set(self, i: int, cell: Cell) -> None:
        place = self._place(i)
        old = self._packed // place % 3
        self._packed += (Cell.from_digit(int(cell)) - old) * place

    __getitem__ = get
    __setitem__ = set

    def __iter__(self) -> Iterator[Cell]:
        packed = self._packed
        place = POW3[self._length - 1]
        while place:
            yield Cell(packed // place % 3)
            place //= 3

    def __reversed__(self) -> Iterator[Cell]:
        packed = self._packed
        for _ in range(self._length):
            yield Cell(packed % 3)
            packed //= 3

    def rotate_left(self, k: int = 1) -> "Ring":
        return Ring(self._length, _rotate_left(self._packed, self._length, k))

    def rotate_right(self, k: int = 1) -> "Ring":
        return Ring(self._length, _rotate_right(self._packed, self._length, k))

    __lshift__ = rotate_left
    __rshift__ = rotate_right

    def reflect(self) -> "Ring":
        return Ring.from_cells(reversed(self))

    def canonicalize(self) -> "Ring":
        return Ring(self._length, canonical_packed(self._packed, self._length))

    def copy(self) -> "Ring":
        return Ring(self._length, self._packed)

    def digits(self) -> str:
        return serialize_digits(self)

    def count(self, cell: Cell) -> int:
        return sum(1 for c in self if c == cell)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ring):
            return NotImplemented
        return (
            self._length == other._length
            and canonical_packed(self._packed, self._length)
            == canonical_packed(other._packed, other._length)
        )

    def __hash__(self) -> int:
        return hash((self._length, canonical_packed(self._packed, self._length)))

    def __str__(self) -> str:
        return ''.join(cell.glyph for cell in self)

    def __repr__(self) -> str:
        return f"Ring({self.digits()!r})"
