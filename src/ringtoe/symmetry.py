"""
Symmetry and canonicalization for rings.
Notes:
- A ring of N cells has 2N symmetries (the dihedral group): N rotations, each with or without a mirror.
- We canonicalize by taking the image with the numerically largest packed value.
- Operations are named ``rot{k}`` (rotate left by k) and ``ref_rot{k}`` (mirror, then rotate left by k).
"""
from functools import lru_cache
from typing import Dict, Iterator, List

import numpy as np

from .ring import MAX_CELLS, POW3, Ring

CHUNK_SIZE = 1 << 16


def symmetry_ops(cells: int) -> List[str]:
    return [f"rot{k}" for k in range(cells)] + [f"ref_rot{k}" for k in range(cells)]


def _parse_op(op: str) -> tuple:
    mirrored = op.startswith("ref_")
    body = op[4:] if mirrored else op
    if not body.startswith("rot") or not body[3:].isdigit():
        raise ValueError(f"Unknown transformation: {op}")
    return mirrored, int(body[3:])


def transform_ring(ring: Ring, op: str) -> Ring:
    mirrored, k = _parse_op(op)
    if mirrored:
        ring = ring.reflect()
    return ring.rotate_left(k)


def apply_index_transform(index: int, cells: int, op: str) -> int:
    """Index that the cell at ``index`` moves to under ``op``."""
    mirrored, k = _parse_op(op)
    i = index % cells
    if mirrored:
        i = cells - 1 - i
    return (i - k) % cells


@lru_cache(maxsize=1 << 16)
def _symmetry_info_tuple(packed: int, cells: int) -> Dict:
    ring = Ring(cells, packed)
    images = [(transform_ring(ring, op).packed, op) for op in symmetry_ops(cells)]
    canonical_packed, canonical_op = max(images, key=lambda x: x[0])
    canonical = Ring(cells, canonical_packed)

    period = next(k for k in range(1, cells + 1) if ring.rotate_left(k).packed == packed)
    mirror_symmetric = any(p == packed for p, op in images if op.startswith("ref_"))

    return {
        'canonical_form': canonical.digits(),
        'canonical_packed': canonical_packed,
        'canonical_op': canonical_op,
        'orbit_size': len({p for p, _ in images}),
        'rotation_period': period,
        'mirror_symmetric': mirror_symmetric,
    }


def symmetry_info(ring: Ring) -> Dict:
    # copy so callers cannot edit the memoized entry
    return dict(_symmetry_info_tuple(ring.packed, len(ring)))


def _canonical_chunk(values: np.ndarray, cells: int) -> np.ndarray:
    places = np.array(POW3[:cells][::-1], dtype=np.int64)
    digits = values[:, None] // places % 3
    mirrored = digits[:, ::-1] @ places
    best = values.copy()
    for k in range(cells):
        low, high = POW3[cells - k], POW3[k]
        for v in (values, mirrored):
            np.maximum(best, v % low * high + v // low, out=best)
    return best


def _iter_chunks(cells: int, chunk_size: int) -> Iterator[np.ndarray]:
    if not 1 <= cells <= MAX_CELLS:
        raise ValueError(f"Ring length must be between 1 and {MAX_CELLS}, got {cells}")
    total = POW3[cells]
    for start in range(0, total, chunk_size):
        yield np.arange(start, min(start + chunk_size, total), dtype=np.int64)


def canonical_table(cells: int, chunk_size: int = CHUNK_SIZE) -> np.ndarray:
    """Canonical packed value for every packed value of a ring with ``cells`` cells."""
    return np.concatenate([_canonical_chunk(v, cells) for v in _iter_chunks(cells, chunk_size)])


def canonical_rings(cells: int, chunk_size: int = CHUNK_SIZE) -> List[Ring]:
    """Every distinct ring up to rotation and reflection, by ascending packed value."""
    out: List[Ring] = []
    for values in _iter_chunks(cells, chunk_size):
        keep = values[_canonical_chunk(values, cells) == values]
        out.extend(Ring(cells, int(v)) for v in keep)
    return out
