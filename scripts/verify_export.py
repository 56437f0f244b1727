#!/usr/bin/env python3
"""
Verify a ring enumeration export directory.

Checks performed:
- manifest.json exists and is parseable
- Row count in manifest is positive
- Files listed in manifest exist (if not None)
- SHA256 checksums of files match manifest.checksums
- Row count in the CSV matches manifest.row_counts
- schema_hash matches the CSV header (sorted column names)
- Orbit sizes add up to 3**cells (every packed value lands in exactly one orbit)

Exit codes:
 0 on success, non-zero on any validation failure.
"""
from __future__ import annotations

import argparse
import csv
import hashlib
import json
import sys
from pathlib import Path
from typing import Any, Dict


def sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open('rb') as f:
        for chunk in iter(lambda: f.read(8192), b''):
            h.update(chunk)
    return h.hexdigest()


def schema_hash_from_csv_header(path: Path) -> str:
    with path.open('r', newline='') as f:
        header = next(csv.reader(f))
    payload = "\n".join(sorted(header)).encode('utf-8')
    return hashlib.sha256(payload).hexdigest()


def read_csv_rows(path: Path) -> list:
    with path.open('r', newline='') as f:
        return list(csv.DictReader(f))


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Verify ring enumeration export")
    ap.add_argument("out", type=Path, help="Export directory (contains manifest.json)")
    ns = ap.parse_args(argv)
    manifest_path = ns.out / "manifest.json"
    if not manifest_path.exists():
        print(f"ERROR: manifest not found: {manifest_path}", file=sys.stderr)
        return 2
    try:
        manifest = json.loads(manifest_path.read_text())
    except json.JSONDecodeError as e:
        print(f"ERROR: failed to parse manifest: {e}", file=sys.stderr)
        return 2

    ok = True
    files: Dict[str, Any] = manifest.get("files", {}) or {}
    checksums: Dict[str, Any] = manifest.get("checksums", {}) or {}

    rc = manifest.get("row_counts", {}) or {}
    if not isinstance(rc.get("rings"), int) or rc.get("rings", 0) <= 0:
        print("ERROR: manifest.row_counts.rings must be a positive integer", file=sys.stderr)
        ok = False

    for label, p in files.items():
        if p is None:
            continue
        fp = Path(p)
        if not fp.exists():
            print(f"ERROR: missing file listed in manifest: {label} -> {fp}", file=sys.stderr)
            ok = False
            continue
        want = checksums.get(label)
        have = sha256_file(fp)
        if want and want != have:
            print(f"ERROR: checksum mismatch for {label}: manifest={want} computed={have}", file=sys.stderr)
            ok = False

    rings_csv = files.get("rings_csv")
    if rings_csv and Path(rings_csv).exists():
        rows = read_csv_rows(Path(rings_csv))
        if rc.get("rings") != len(rows):
            print(f"ERROR: rings row count mismatch: manifest={rc.get('rings')} actual={len(rows)}", file=sys.stderr)
            ok = False
        have = schema_hash_from_csv_header(Path(rings_csv))
        want = (manifest.get("schema_hash", {}) or {}).get("rings")
        if want and want != have:
            print(f"ERROR: schema_hash(rings) mismatch: manifest={want} computed={have}", file=sys.stderr)
            ok = False
        cells = (manifest.get("args", {}) or {}).get("cells")
        total = sum(int(r["orbit_size"]) for r in rows)
        if isinstance(cells, int) and total != 3 ** cells:
            print(f"ERROR: orbit sizes sum to {total}, expected 3**{cells}={3 ** cells}", file=sys.stderr)
            ok = False

    if not ok:
        return 1
    print("OK: export verified", file=sys.stdout)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
