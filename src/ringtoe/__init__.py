"""ringtoe package.

Tic-tac-toe on a ring of cells around a center: packed ring storage,
symmetry canonicalization, win detection, and a simple CLI.

Convenience imports are exposed for common workflows.
"""

from .board import Board, Win, WinKind
from .cells import Cell
from .game import Game, angle_to_index
from .ring import MAX_CELLS, Ring
from .symmetry import canonical_rings, symmetry_info

__all__ = [
    "Board",
    "Cell",
    "Game",
    "MAX_CELLS",
    "Ring",
    "Win",
    "WinKind",
    "angle_to_index",
    "canonical_rings",
    "symmetry_info",
]
