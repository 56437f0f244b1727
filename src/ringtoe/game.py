"""
Turn-taking on top of a Board.

Board only stores cells and finds lines; the rules about who moves, which
cells can still be taken and when play stops live here.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Optional

from .board import Board, Win
from .cells import Cell


def angle_to_index(angle: float, cells: int, full_turn: float = 2 * math.pi, mode: str = "floor") -> int:
    """Ring index under a pointer at ``angle`` (measured from cell 0)."""
    if not math.isfinite(angle):
        raise ValueError(f"Angle must be finite, got {angle}")
    pos = angle / full_turn * cells
    if mode == "floor":
        i = math.floor(pos)
    elif mode == "round":
        i = round(pos)
    else:
        raise ValueError(f"Unknown rounding mode: {mode}")
    return int(i) % cells


@dataclass(frozen=True)
class Move:
    player: Cell
    # None is the center cell.
    index: Optional[int]


@dataclass
class ValidationResult:
    is_valid: bool
    error_message: Optional[str] = None


@dataclass
class Game:
    cells: int = 8
    board: Board = field(init=False)
    to_move: Cell = field(init=False, default=Cell.X)
    history: List[Move] = field(init=False, default_factory=list)

    def __post_init__(self) -> None:
        if self.cells % 2:
            raise ValueError(f"A game needs an even number of ring cells, got {self.cells}")
        self.board = Board(self.cells)

    @property
    def winner(self) -> Cell:
        return self.board.winner()

    @property
    def wins(self) -> List[Win]:
        return self.board.wins()

    @property
    def is_over(self) -> bool:
        return self.winner != Cell.EMPTY or self.board.is_full()

    def _cell_at(self, index: Optional[int]) -> Cell:
        return self.board.center if index is None else self.board.ring.get(index)

    def validate_move(self, index: Optional[int]) -> ValidationResult:
        if self.winner != Cell.EMPTY:
            return ValidationResult(False, f"Game is over: {self.winner.glyph} has won")
        if self._cell_at(index) != Cell.EMPTY:
            where = "center" if index is None else f"cell {index % self.cells}"
            return ValidationResult(False, f"The {where} is already taken")
        return ValidationResult(True)

    def play(self, index: Optional[int]) -> Move:
        result = self.validate_move(index)
        if not result.is_valid:
            raise ValueError(result.error_message)
        if index is None:
            self.board.center = self.to_move
        else:
            index %= self.cells
            self.board.ring.set(index, self.to_move)
        move = Move(self.to_move, index)
        self.history.append(move)
        self.to_move = self.to_move.opponent()
        return move

    def play_center(self) -> Move:
        return self.play(None)

    def play_angle(self, angle: float, full_turn: float = 2 * math.pi) -> Move:
        return self.play(angle_to_index(angle, self.cells, full_turn))

    def undo(self) -> bool:
        if not self.history:
            return False
        last = self.history.pop()
        if last.index is None:
            self.board.center = Cell.EMPTY
        else:
            self.board.ring.set(last.index, Cell.EMPTY)
        self.to_move = last.player
        return True
