"""
Command line front end.

  circuitgrow view [--tuning FILE] [--seed N]
  circuitgrow dump WIDTH HEIGHT [--levels N] [--seed N] [--trace]
  circuitgrow check [--tuning FILE]
"""
from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional

from circuitgrow.config import ConfigError, load_tuning
from circuitgrow.patterns.generator import CircuitPatternGenerator
from circuitgrow.patterns.trace import GrowthTrace
from circuitgrow.rng import new_rng
from circuitgrow.state.circuit import MOVE_LABELS

DEFAULT_DUMP_LEVELS = 200


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="circuitgrow",
        description="Grow animated circuit patterns on a grid.",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    pv = sub.add_parser("view", help="Open a window and animate the pattern.")
    pv.add_argument("--tuning", default=None, help="YAML tuning file (defaults to the packaged one).")
    pv.add_argument("--seed", type=int, default=None, help="Seed for repeatable patterns.")
    pv.add_argument("--debug", action="store_true", help="Start with the debug overlay shown.")

    pd = sub.add_parser("dump", help="Grow a pattern without a window and print JSON lines per level.")
    pd.add_argument("width", type=float, help="Grid width in cells.")
    pd.add_argument("height", type=float, help="Grid height in cells.")
    pd.add_argument("--levels", type=int, default=DEFAULT_DUMP_LEVELS, help="Maximum number of levels.")
    pd.add_argument("--tuning", default=None, help="YAML tuning file.")
    pd.add_argument("--seed", type=int, default=None, help="Seed for repeatable patterns.")
    pd.add_argument("--trace", action="store_true", help="Include per-node trace records.")

    pc = sub.add_parser("check", help="Validate a tuning file and print a summary.")
    pc.add_argument("--tuning", default=None, help="YAML tuning file.")

    return p


def cmd_view(tuning: Optional[str], seed: Optional[int], debug: bool) -> None:
    # imported here so dump/check work without a display
    from circuitgrow.engine import Engine

    growth, viewer = load_tuning(tuning)
    if seed is not None:
        growth.seed = seed
    if debug:
        viewer.debug = True
    Engine(viewer, growth).run()


def cmd_dump(width: float, height: float, levels: int, tuning: Optional[str], seed: Optional[int], with_trace: bool) -> None:
    growth, _viewer = load_tuning(tuning)
    if seed is not None:
        growth.seed = seed
    generator = CircuitPatternGenerator(width, height, config=growth, rng=new_rng(growth.seed))
    trace = GrowthTrace() if with_trace else None
    for level in range(levels):
        if generator.is_exhausted:
            break
        segments = generator.advance(trace)
        line = {"level": level, "segments": [s.to_dict() for s in segments]}
        if trace is not None:
            line["trace"] = trace.to_dicts()
        print(json.dumps(line))


def cmd_check(tuning: Optional[str]) -> None:
    growth, viewer = load_tuning(tuning)
    print(f"split: {growth.resolved_split_table()}")
    print("moves: " + ", ".join(f"{MOVE_LABELS[m]}={w}" for m, w in growth.move_weights.items()))
    print(f"end chance scale: {growth.end_chance_scale} (min row nodes {growth.min_row_nodes})")
    print(
        f"viewer: {viewer.width}x{viewer.height} cell={viewer.cell_size} speed={viewer.speed} "
        f"wave={viewer.wave_length}/{viewer.wave_gap}"
    )


def main(argv: Optional[List[str]] = None) -> int:
    ap = build_argparser()
    args = ap.parse_args(argv)

    try:
        if args.cmd == "view":
            cmd_view(args.tuning, args.seed, args.debug)
        elif args.cmd == "dump":
            cmd_dump(args.width, args.height, args.levels, args.tuning, args.seed, args.trace)
        elif args.cmd == "check":
            cmd_check(args.tuning)
        else:
            raise AssertionError("unreachable")
    except ConfigError as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
