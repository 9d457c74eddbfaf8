# squad_rotation/cli.py
from __future__ import annotations
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import DEFAULT_CONFIG, DEFAULT_SOLVER_OPTIONS, ensure_sample_config
from .errors import RotationError
from .io import load_squad_yaml, schedule_csv_bytes, totals_csv_bytes
from .models import SolveResult, SquadConfig
from .reports import schedule_frame, substitution_changes, totals_frame
from .scheduler import schedule_rotation
from .solver import PulpSolver


def _split(text: str) -> List[str]:
    return [s.strip() for s in text.split(",")]


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(
        prog="squad-rotation",
        description="Build a fair substitution rotation for a small-sided team",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    ap.add_argument("--config", type=Path, help="YAML squad file (see --write-sample)")
    ap.add_argument("--players", type=_split, help="Comma separated player names (overrides the squad file)")
    ap.add_argument("--positions", type=_split, help="Comma separated outfield positions (overrides the squad file)")
    ap.add_argument("--matches", type=int, help="Number of matches (overrides the squad file)")
    ap.add_argument("--goalie-stays", action="store_true", help="Keeper plays both halves of a match")
    ap.add_argument("--no-consecutive-subs", action="store_true", help="Nobody sits out two periods in a row")
    ap.add_argument("--keep-positions", action="store_true", help="Players who stay on keep their position at halftime")
    ap.add_argument("--seed", help="Seed text; defaults to the squad file seed, then the current week")
    ap.add_argument("--time-limit", type=float, default=DEFAULT_SOLVER_OPTIONS["time_limit"], help="CBC time limit in seconds")
    ap.add_argument("--csv", type=Path, help="Write the schedule as CSV")
    ap.add_argument("--totals-csv", type=Path, help="Write per-player totals as CSV")
    ap.add_argument("--write-sample", type=Path, help="Write a sample squad file and exit")
    ap.add_argument("-v", "--verbose", action="count", default=0, help="-v for info, -vv for debug logging")
    return ap.parse_args(argv)


def build_config(args: argparse.Namespace) -> SquadConfig:
    cfg = load_squad_yaml(str(args.config)) if args.config else SquadConfig(**DEFAULT_CONFIG)
    update = {}
    if args.players is not None:
        update["players"] = args.players
    if args.positions is not None:
        update["positions"] = args.positions
    if args.matches is not None:
        update["num_matches"] = args.matches
    for flag in ("goalie_stays", "no_consecutive_subs", "keep_positions"):
        if getattr(args, flag):
            update[flag] = True
    return cfg.model_copy(update=update)


def print_result(result: SolveResult) -> None:
    meta = result.meta
    print(f"Seed: {result.seed_text} ({result.seed})  status: {result.status}")
    print(
        f"Squad {meta.num_players}, team {meta.team_size}, subs {meta.substitute_count}, "
        f"stayers per match {meta.stayers_per_match}"
    )
    print()
    print(schedule_frame(result).to_string(index=False))
    print()
    for row, change in zip(result.schedule, substitution_changes(result.schedule)):
        if change["on"]:
            print(f"Match {row.match} period {row.period}: on {', '.join(change['on'])}; off {', '.join(change['off'])}")
    print()
    print(totals_frame(result).to_string())
    print()
    bounds = ", ".join(f"{r} {b.min}-{b.max}" for r, b in meta.fairness_bounds.items())
    print(f"Fairness bounds per player: {bounds}")


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    level = logging.WARNING - 10 * min(args.verbose, 2)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    if args.write_sample:
        if ensure_sample_config(str(args.write_sample)):
            print(f"Wrote sample squad file to {args.write_sample}")
        else:
            print(f"{args.write_sample} already exists; left untouched")
        return 0

    try:
        cfg = build_config(args)
        result = schedule_rotation(
            cfg, seed=args.seed, solver_factory=lambda: PulpSolver(time_limit=args.time_limit),
        )
    except (RotationError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print_result(result)
    if args.csv:
        args.csv.write_bytes(schedule_csv_bytes(result))
        print(f"Schedule saved to {args.csv}")
    if args.totals_csv:
        args.totals_csv.write_bytes(totals_csv_bytes(result))
        print(f"Totals saved to {args.totals_csv}")
    return 0
