import pytest

from ringtoe.ring import canonical_packed
from ringtoe.symmetry import canonical_rings

pytest.importorskip("pytest_benchmark")


def test_benchmark_canonicalize_uncached(benchmark):
    values = range(0, 3 ** 12, 977)

    def _canon():
        # bypass the memo so every call does the full rotation/reflection scan
        return [canonical_packed.__wrapped__(v, 12) for v in values]

    out = benchmark(_canon)
    assert len(out) == len(values)
    assert all(c >= v for c, v in zip(out, values))


def test_benchmark_enumerate_8(benchmark):
    rings = benchmark(canonical_rings, 8)
    assert len(rings) == 498
