import pytest

from ringtoe.cells import Cell
from ringtoe.ring import MAX_CELLS, Ring


def ring(digits: str) -> Ring:
    return Ring.from_digits(digits)


def test_packed_is_base3_most_significant_first():
    r = ring("01201201")
    assert r.packed == int("01201201", 3)
    assert len(r) == 8
    assert r.digits() == "01201201"


def test_canonical():
    assert ring("00000002").canonicalize().digits() == "20000000"
    assert ring("00000002").canonicalize().packed == ring("20000000").canonicalize().packed


@pytest.mark.parametrize("k,expected", [
    (1, "10120120"), (2, "01012012"), (3, "20101201"), (4, "12010120"),
    (5, "01201012"), (6, "20120101"), (7, "12012010"), (8, "01201201"),
])
def test_rotate_right(k: int, expected: str):
    assert ring("01201201").rotate_right(k).digits() == expected
    assert (ring("01201201") >> k).digits() == expected


@pytest.mark.parametrize("k,expected", [
    (1, "12012010"), (2, "20120101"), (3, "01201012"), (4, "12010120"),
    (5, "20101201"), (6, "01012012"), (7, "10120120"), (8, "01201201"),
])
def test_rotate_left(k: int, expected: str):
    assert ring("01201201").rotate_left(k).digits() == expected
    assert (ring("01201201") << k).digits() == expected


def test_rotation_reduces_k_modulo_length():
    r = ring("01201201")
    assert r.rotate_left(9).digits() == r.rotate_left(1).digits()
    assert r.rotate_right(-1).digits() == r.rotate_left(1).digits()


def test_printing():
    assert str(ring("01201201")) == " XO XO X"


def test_reflect():
    assert ring("00000002").reflect().digits() == "20000000"
    assert ring("22222222").reflect().digits() == "22222222"
    assert ring("01201201").reflect().digits() == "10210210"


def test_get_set_wrap_modulo_length():
    r = Ring(8)
    r.set(10, Cell.O)
    assert r.get(2) == Cell.O
    assert r.get(-6) == Cell.O
    assert r[18] == Cell.O
    r[-1] = Cell.X
    assert r.digits() == "00200001"


def test_set_replaces_only_one_digit():
    r = ring("21212121")
    r.set(3, Cell.EMPTY)
    assert r.digits() == "21202121"
    r.set(3, Cell.O)
    assert r.digits() == "21222121"
    r.set(0, Cell.X)
    assert r.digits() == "11222121"


def test_iteration_is_restartable_and_reversible():
    r = ring("01201201")
    assert list(r) == list(r)
    assert list(reversed(r)) == list(r)[::-1]
    it = iter(r)
    assert next(it) == Cell.EMPTY
    assert next(it) == Cell.X


def test_length_bounds():
    Ring(MAX_CELLS)
    Ring.from_cells([Cell.O] * MAX_CELLS)
    with pytest.raises(ValueError):
        Ring(MAX_CELLS + 1)
    with pytest.raises(ValueError):
        Ring(0)
    with pytest.raises(ValueError):
        Ring.from_cells([Cell.X] * (MAX_CELLS + 1))
    with pytest.raises(ValueError):
        Ring.from_cells([])


def test_largest_ring_round_trips():
    digits = "2" * MAX_CELLS
    r = ring(digits)
    assert r.packed == 3 ** MAX_CELLS - 1
    assert r.packed < 2 ** 32
    assert r.rotate_left(7).digits() == digits


def test_packed_out_of_range_rejected():
    with pytest.raises(ValueError):
        Ring(3, 27)
    with pytest.raises(ValueError):
        Ring(3, -1)


@pytest.mark.parametrize("bad", ["", "0123", "01a", " "])
def test_from_digits_rejects_bad_input(bad: str):
    with pytest.raises(ValueError):
        Ring.from_digits(bad)


def test_equality_and_hash_use_canonical_form():
    a = ring("00000002")
    b = ring("20000000")
    c = ring("01201201")
    assert a == b
    assert a.packed != b.packed
    assert hash(a) == hash(b)
    assert a != c
    assert c == c.reflect()
    assert len({a, b, c, c.rotate_left(3)}) == 2


def test_rings_of_different_lengths_differ():
    assert Ring(2) != Ring(3)
    assert ring("1") != ring("01")


def test_counts():
    r = ring("01201201")
    assert r.count(Cell.X) == 3
    assert r.count(Cell.O) == 2
    assert r.count(Cell.EMPTY) == 3
