from __future__ import annotations

import argparse
import csv
import logging
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from .board import Board, Win
from .cells import Cell
from .datasets import FORMATS, EnumerateArgs, run_enumeration
from .game import Game
from .paths import default_cells
from .ring import Ring
from .symmetry import canonical_rings, symmetry_info
from .tracking import maybe_mlflow_run


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ringtoe", description="Ring tic-tac-toe CLI")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument(
        "--info",
        action="store_true",
        help="Print environment and dependency info and exit",
    )

    p_enum = sub.add_parser(
        "enumerate",
        help="List every distinct ring up to rotation and reflection",
    )
    p_enum.add_argument("--cells", type=int, default=None, help="Ring size (default: $RINGTOE_CELLS or 8)")
    p_enum.add_argument(
        "--out", type=Path, default=None, help="Write a dataset export here instead of printing"
    )
    p_enum.add_argument(
        "--format",
        choices=list(FORMATS),
        default="csv",
        help="Export format: csv (default), parquet, both",
    )
    p_enum.add_argument(
        "--tracking",
        choices=["none", "mlflow"],
        default="none",
        help="Experiment tracking backend",
    )
    p_enum.add_argument(
        "--log-dir",
        type=Path,
        default=Path("runs"),
        help="Directory for tracking logs/artifacts (for mlflow local backend)",
    )

    p_can = sub.add_parser(
        "canonical",
        help="Show the canonical form of a ring (digits, 0=empty,1=X,2=O)",
    )
    p_can.add_argument("--ring", help="Ring string, e.g., 00000002 (omit with --stdin)")
    p_can.add_argument(
        "--stdin", action="store_true", help="Read many rings from stdin and stream CSV output"
    )

    p_win = sub.add_parser("winner", help="Find the winner and every winning line of a board")
    p_win.add_argument("--ring", help="Ring string, e.g., 00111020 (omit with --stdin)")
    p_win.add_argument("--center", type=int, choices=[0, 1, 2], default=0, help="Center cell digit")
    p_win.add_argument(
        "--stdin", action="store_true", help="Read 'ring[,center]' lines from stdin and stream CSV output"
    )

    p_play = sub.add_parser("play", help="Play a two-player game in the terminal")
    p_play.add_argument("--cells", type=int, default=None, help="Ring size (default: $RINGTOE_CELLS or 8)")

    return p


def _print_info() -> None:
    import importlib.util
    import platform

    print(f"python={sys.version.split()[0]} platform={platform.platform()}")
    for pkg in ["numpy", "pandas", "pyarrow", "mlflow"]:
        spec = importlib.util.find_spec(pkg)
        if spec is None:
            print(f"{pkg}=<not installed>")
        else:
            mod = __import__(pkg)
            ver = getattr(mod, "__version__", "?")
            print(f"{pkg}={ver}")


def _format_wins(wins: List[Win]) -> str:
    return ",".join(f"{w.kind.value}@{w.index}" for w in wins)


def _board_from_args(raw: str, center: int) -> Board:
    board = Board.from_digits(raw, Cell.from_digit(center))
    if board.center != Cell.EMPTY and len(board.ring) % 2:
        raise ValueError("A marked center needs an even number of ring cells.")
    return board


def _cmd_enumerate(ns: argparse.Namespace, argv: Optional[List[str]]) -> int:
    cells = ns.cells if ns.cells is not None else default_cells()
    if ns.out is None:
        rings = canonical_rings(cells)
        for ring in rings:
            print(ring)
        print(f"Number of unique tic-tac-toe rings: {len(rings)}")
        return 0
    with maybe_mlflow_run(ns.tracking == "mlflow", run_name="enumerate", log_dir=ns.log_dir):
        out = run_enumeration(EnumerateArgs(
            out=ns.out,
            cells=cells,
            format=ns.format,
            verbose=ns.verbose,
            cli_argv=list(argv) if argv is not None else None,
        ))
    logging.info("Exported rings to: %s", out)
    return 0


def _cmd_canonical(ns: argparse.Namespace) -> int:
    if ns.stdin:
        w = csv.writer(sys.stdout)
        w.writerow(["ring", "canonical_form", "orbit_size", "canonical_op"])
        for line in sys.stdin:
            raw = line.strip()
            if not raw:
                continue
            try:
                ring = Ring.from_digits(raw)
            except ValueError:
                logging.debug("skipping invalid ring %r", raw)
                continue
            info = symmetry_info(ring)
            w.writerow([raw, info['canonical_form'], info['orbit_size'], info['canonical_op']])
        return 0
    ring = Ring.from_digits(ns.ring or "")
    info = symmetry_info(ring)
    logging.info(
        "canonical_form=%s orbit_size=%d op=%s",
        info['canonical_form'],
        info['orbit_size'],
        info['canonical_op'],
    )
    return 0


def _cmd_winner(ns: argparse.Namespace) -> int:
    if ns.stdin:
        w = csv.writer(sys.stdout)
        w.writerow(["ring", "center", "winner", "wins"])
        for line in sys.stdin:
            raw = line.strip()
            if not raw:
                continue
            ring_raw, _, center_raw = raw.partition(",")
            try:
                board = _board_from_args(ring_raw, int(center_raw or 0))
            except ValueError:
                logging.debug("skipping invalid board %r", raw)
                continue
            w.writerow([ring_raw, int(board.center), int(board.winner()), _format_wins(board.wins())])
        return 0
    board = _board_from_args(ns.ring or "", ns.center)
    logging.info("winner=%s wins=%s", board.winner().name, _format_wins(board.wins()))
    return 0


def _render(game: Game, out: TextIO) -> None:
    ring = game.board.ring
    print(" ".join(f"{i}:{c.glyph if c != Cell.EMPTY else '.'}" for i, c in enumerate(ring)), file=out)
    center = game.board.center
    print(f"center: {center.glyph if center != Cell.EMPTY else '.'}", file=out)


def play_loop(game: Game, inp: TextIO, out: TextIO) -> Cell:
    """Read moves from ``inp`` until the game ends or input runs out.

    A move is a ring index, ``c`` for the center, ``@<degrees>`` for a pointer
    angle, ``u`` to undo or ``q`` to quit.
    """
    _render(game, out)
    while not game.is_over:
        print(f"{game.to_move.glyph} to move> ", end="", file=out)
        line = inp.readline()
        if not line:
            break
        raw = line.strip().lower()
        if raw == "q":
            break
        try:
            if raw == "u":
                if not game.undo():
                    print("nothing to undo", file=out)
            elif raw in ("c", "center"):
                game.play_center()
            elif raw.startswith("@"):
                game.play_angle(float(raw[1:]), full_turn=360.0)
            else:
                game.play(int(raw))
        except ValueError as e:
            print(f"illegal move: {e}", file=out)
            continue
        _render(game, out)

    if game.winner != Cell.EMPTY:
        print(f"{game.winner.glyph} wins: {_format_wins(game.wins)}", file=out)
    elif game.is_over:
        print("draw", file=out)
    return game.winner


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    if getattr(ns, "version", False):
        try:
            from importlib.metadata import PackageNotFoundError, version as _ver

            print(_ver("ringtoe"))
        except PackageNotFoundError:
            print("unknown")
        return 0
    if getattr(ns, "info", False):
        _print_info()
        return 0

    try:
        if ns.cmd == "enumerate":
            return _cmd_enumerate(ns, argv)
        if ns.cmd == "canonical":
            return _cmd_canonical(ns)
        if ns.cmd == "winner":
            return _cmd_winner(ns)
        if ns.cmd == "play":
            cells = ns.cells if ns.cells is not None else default_cells()
            play_loop(Game(cells), sys.stdin, sys.stdout)
            return 0
    except (ValueError, RuntimeError) as e:
        logging.error("%s", e)
        return 2

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
