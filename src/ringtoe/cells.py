"""
Cell values for ring tic-tac-toe.
Notes:
- A cell is empty, X (first player) or O (second player).
- Cells map to the base-3 digits 0, 1, 2; that mapping is the packing used by Ring.
"""
from enum import IntEnum
from typing import Iterable, List


class Cell(IntEnum):
    EMPTY = 0
    X = 1
    O = 2

    @classmethod
    def from_digit(cls, digit: int) -> "Cell":
        if digit not in (0, 1, 2):
            raise ValueError(f"Not a cell digit: {digit!r}")
        return cls(digit)

    @property
    def glyph(self) -> str:
        return GLYPHS[self]

    def opponent(self) -> "Cell":
        if self is Cell.X:
            return Cell.O
        if self is Cell.O:
            return Cell.X
        return Cell.EMPTY


GLYPHS = {Cell.EMPTY: ' ', Cell.X: 'X', Cell.O: 'O'}


def parse_digits(text: str) -> List[Cell]:
    raw = text.strip()
    if not raw or any(c not in "012" for c in raw):
        raise ValueError(f"Invalid ring string {text!r}. Must be digits 0/1/2.")
    return [Cell(int(c)) for c in raw]


def serialize_digits(cells: Iterable[Cell]) -> str:
    return ''.join(str(int(c)) for c in cells)
