"""
Enumeration export: one row per distinct ring (up to rotation and reflection).

The export is an analysis table plus a manifest for reproducibility; it is
not a save format for games in progress.
"""
from __future__ import annotations

import csv
import hashlib
import importlib.util
import json
import logging
import sys
from collections import Counter
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List

from .board import Board, WinKind
from .cells import Cell
from .paths import get_git_commit, get_git_is_dirty
from .ring import Ring
from .symmetry import canonical_rings, symmetry_info
from .tracking import log_artifact, log_metrics, log_params

DATASET_VERSION = "1.0.0"

FORMATS = ("csv", "parquet", "both")


@dataclass
class EnumerateArgs:
    out: Path
    cells: int = 8
    format: str = "csv"  # one of: "csv", "parquet", "both"
    verbose: bool = False
    cli_argv: List[str] | None = None


def ring_row(ring: Ring) -> Dict[str, Any]:
    info = symmetry_info(ring)
    board = Board(len(ring))
    board.ring = ring
    wins = [w for w in board.wins() if w.kind is WinKind.RING]
    return {
        'ring': ring.digits(),
        'rendered': str(ring),
        'packed': ring.packed,
        'orbit_size': info['orbit_size'],
        'rotation_period': info['rotation_period'],
        'mirror_symmetric': info['mirror_symmetric'],
        'x_count': ring.count(Cell.X),
        'o_count': ring.count(Cell.O),
        'ring_winner': int(board.winner()),
        'ring_wins': len(wins),
    }


def _schema_hash(fieldnames: List[str]) -> str:
    payload = "\n".join(sorted(fieldnames)).encode("utf-8")
    return hashlib.sha256(payload).hexdigest()


def sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open('rb') as f:
        for chunk in iter(lambda: f.read(8192), b''):
            h.update(chunk)
    return h.hexdigest()


def _have_parquet_deps() -> bool:
    return (importlib.util.find_spec('pandas') is not None
            and importlib.util.find_spec('pyarrow') is not None)


def _package_versions() -> Dict[str, str]:
    versions: Dict[str, str] = {}
    for pkg in ["numpy", "pandas", "pyarrow"]:
        if importlib.util.find_spec(pkg) is None:
            continue
        mod = __import__(pkg)
        ver = getattr(mod, "__version__", None)
        if ver:
            versions[pkg] = ver
    return versions


def run_enumeration(args: EnumerateArgs) -> Path:
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="[%(levelname)s] %(message)s")
    fmt = (args.format or "csv").lower()
    if fmt not in FORMATS:
        raise ValueError(f"Unknown export format: {args.format}")
    if fmt == "parquet" and not _have_parquet_deps():
        # Fail before writing anything.
        raise RuntimeError(
            "Parquet dependencies not available (install pandas and pyarrow). "
            "Use pip install .[parquet] to enable parquet support."
        )

    logging.info("Enumerating canonical rings of %d cells…", args.cells)
    rings = canonical_rings(args.cells)
    rows = [ring_row(r) for r in rings]
    logging.info("Found %d distinct rings", len(rows))
    fieldnames = list(rows[0].keys())

    args.out.mkdir(parents=True, exist_ok=True)
    stem = f"rings_{args.cells}"
    csv_path = args.out / f"{stem}.csv"
    parquet_path = args.out / f"{stem}.parquet"
    wrote_csv = False
    wrote_parquet = False

    if fmt in {"csv", "both"}:
        with csv_path.open('w', newline='') as f:
            w = csv.DictWriter(f, fieldnames=fieldnames)
            w.writeheader()
            w.writerows(rows)
        wrote_csv = True
        logging.info("Wrote CSV: %s (%d rows)", csv_path, len(rows))

    if fmt in {"parquet", "both"}:
        if _have_parquet_deps():
            import pandas as pd  # type: ignore

            pd.DataFrame(rows, columns=fieldnames).to_parquet(parquet_path, index=False)
            wrote_parquet = True
            logging.info("Wrote Parquet: %s", parquet_path)
        else:
            logging.warning(
                "Parquet dependencies not available (install pandas and pyarrow). "
                "Proceeding with CSV only; manifest will record parquet_written=false."
            )

    files: Dict[str, Any] = {
        "rings_csv": str(csv_path) if wrote_csv else None,
        "rings_parquet": str(parquet_path) if wrote_parquet else None,
    }
    checksums = {label: sha256_file(Path(p)) for label, p in files.items() if p is not None}
    orbit_counts = Counter(r['orbit_size'] for r in rows)

    manifest = {
        "dataset_version": DATASET_VERSION,
        "created_at": datetime.now(timezone.utc).isoformat(),
        "args": {
            "cells": args.cells,
            "format": fmt,
        },
        "git_commit": get_git_commit(),
        "git_is_dirty": get_git_is_dirty(),
        "python": {
            "python_version": sys.version.split(" ")[0],
            "packages": _package_versions(),
        },
        "cli_argv": args.cli_argv,
        "row_counts": {"rings": len(rows)},
        "total_packed_values": sum(r['orbit_size'] for r in rows),
        "orbit_size_distribution": {str(k): v for k, v in sorted(orbit_counts.items())},
        "schema_hash": {"rings": _schema_hash(fieldnames)},
        "files": files,
        "checksums": checksums,
        "parquet_written": wrote_parquet,
    }
    manifest_path = args.out / "manifest.json"
    manifest_path.write_text(json.dumps(manifest, indent=2))
    logging.info("Wrote manifest.json")

    log_params({"cells": args.cells, "format": fmt})
    log_metrics({"rings": float(len(rows))})
    log_artifact(manifest_path)
    for p in files.values():
        if p is not None:
            log_artifact(Path(p))

    return args.out
