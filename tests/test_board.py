import pytest

from ringtoe.board import Board, Win, WinKind
from ringtoe.cells import Cell


@pytest.mark.parametrize("ring,center,expected", [
    ("00111020", Cell.EMPTY, Cell.X),
    ("00222010", Cell.EMPTY, Cell.O),
    # wraps around the end of the ring
    ("10221211", Cell.EMPTY, Cell.X),
    ("22012102", Cell.EMPTY, Cell.O),
    # through the center: cells 0 and 4 are opposite
    ("11201202", Cell.X, Cell.X),
    ("21012102", Cell.O, Cell.O),
])
def test_winner(ring: str, center: Cell, expected: Cell):
    assert Board.from_digits(ring, center).winner() == expected


def test_center_line_uses_half_length_offset():
    board = Board.from_digits("11201202", Cell.X)
    assert board.wins() == [Win(WinKind.CENTER, 0)]
    assert board.ring.get(0) == board.ring.get(4) == Cell.X


def test_no_winner():
    assert Board(8).winner() == Cell.EMPTY
    assert Board(8).wins() == []
    assert Board.from_digits("12121212").winner() == Cell.EMPTY
    # a marked center alone is not a line
    assert Board.from_digits("11201202", Cell.O).winner() == Cell.EMPTY


def test_empty_center_never_wins_through_middle():
    board = Board.from_digits("10001000")
    assert board.wins() == []


def test_wrapped_run_reported_at_its_start():
    assert Board.from_digits("10221211").wins() == [Win(WinKind.RING, 6)]
    assert Board.from_digits("22012102").wins() == [Win(WinKind.RING, 7)]


def test_longer_runs_report_each_window():
    assert Board.from_digits("11110000").wins() == [Win(WinKind.RING, 0), Win(WinKind.RING, 1)]
    assert [w.index for w in Board.from_digits("11111111").wins()] == list(range(8))


def test_ring_and_center_wins_both_reported():
    board = Board.from_digits("11100100", Cell.X)
    assert board.wins() == [Win(WinKind.RING, 0), Win(WinKind.CENTER, 1)]
    assert board.winner() == Cell.X


def test_winner_prefers_ring_scan():
    # O has a center line, X a ring line: the ring scan runs first
    board = Board.from_digits("11120022", Cell.O)
    assert board.wins() == [Win(WinKind.RING, 0), Win(WinKind.CENTER, 3)]
    assert board.winner() == Cell.X


def test_mutation_through_ring_and_center():
    board = Board(8)
    for i in (3, 7):
        board.ring.set(i, Cell.O)
    assert board.winner() == Cell.EMPTY
    board.center = Cell.O
    assert board.winner() == Cell.O
    assert board.wins() == [Win(WinKind.CENTER, 3)]


def test_odd_ring_with_center_is_a_precondition_violation():
    board = Board.from_digits("111", Cell.X)
    with pytest.raises(AssertionError):
        board.wins()
    # ring-only detection is fine on odd rings
    assert Board.from_digits("01110").winner() == Cell.X


def test_win_positions():
    assert Win(WinKind.RING, 6).positions(8) == (6, 7, 0)
    assert Win(WinKind.CENTER, 1).positions(8) == (1, 5)


def test_is_full_and_copy():
    board = Board.from_digits("12121212", Cell.X)
    assert board.is_full()
    clone = board.copy()
    clone.ring.set(0, Cell.EMPTY)
    assert board.ring.get(0) == Cell.X
    assert not clone.is_full()
    assert str(board) == "[XOXOXOXO] center='X'"
