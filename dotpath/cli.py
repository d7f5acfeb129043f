"""Command line interface for the puzzle generator."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional

from .core.constants import Certification, OracleBackend, PatternFamily, PlacementStrategy
from .core.exceptions import InvalidSpecError
from .core.models import PuzzleResult, PuzzleSpec
from .data.stages import STAGES, daily_seed, daily_stage, get_stage
from .engine.batch import generate_batch
from .engine.generator import FactoryConfig, PuzzleFactory
from .engine.metrics import describe_pattern, measure_pattern, pattern_hints
from .engine.placement import PLACEMENT_OVERRIDES
from .utils.logger import configure_logging
from .utils.pretty import pretty_print_puzzle


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate grid path puzzles with numbered checkpoints",
    )
    parser.add_argument("--size", type=int, help="Grid size N (the grid is N x N)")
    parser.add_argument("--dots", type=int, help="Number of checkpoints K")
    parser.add_argument(
        "--stage",
        type=int,
        help=f"Use a preset stage (1-{len(STAGES)}) instead of --size/--dots",
    )
    parser.add_argument(
        "--all-stages",
        action="store_true",
        help="Generate every preset stage concurrently",
    )
    parser.add_argument(
        "--daily",
        type=date.fromisoformat,
        metavar="YYYY-MM-DD",
        help="Generate the daily challenge for a date (a seeded preset stage)",
    )
    parser.add_argument(
        "--pattern",
        type=str,
        help="Pattern family (e.g. spiral, maze, labyrinth) or 'auto' (default)",
    )
    parser.add_argument(
        "--placement",
        type=str,
        choices=[s.value for s in PlacementStrategy],
        help="Dot placement strategy (default: even)",
    )
    parser.add_argument(
        "--override",
        type=str,
        choices=sorted(PLACEMENT_OVERRIDES),
        help="Optional placement override",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument("--max-attempts", type=int, default=20, help="Generation attempts before fallback")
    parser.add_argument(
        "--oracle-timeout",
        type=float,
        default=2.0,
        help="Per-attempt solvability check budget in seconds",
    )
    parser.add_argument(
        "--oracle-backend",
        type=str,
        choices=[b.value for b in OracleBackend],
        default=OracleBackend.BACKTRACKING.value,
        help="Solvability check implementation",
    )
    parser.add_argument("--workers", type=int, default=4, help="Threads used by --all-stages")
    parser.add_argument("--metrics", action="store_true", help="Include pattern metrics and hints")
    parser.add_argument("--pretty", action="store_true", help="Print the board to stderr")
    parser.add_argument(
        "--show-solution",
        action="store_true",
        help="With --pretty, also print the solution order",
    )
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def _payload(result: PuzzleResult, include_metrics: bool, level: Optional[int]) -> Dict[str, Any]:
    payload = result.to_jsonable()
    if include_metrics:
        metrics = measure_pattern(result.solution_path, result.grid_size)
        payload["metrics"] = asdict(metrics)
        payload["description"] = describe_pattern(
            result.pattern_family,
            metrics,
            seeded=result.certification == Certification.ORACLE,
        )
        payload["hints"] = pattern_hints(result.pattern_family, level or metrics.complexity)
    return payload


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.INFO)
    configure_logging(level)

    explicit = args.size is not None or args.dots is not None
    shaped = args.pattern is not None or args.placement is not None or args.override is not None
    presets = sum(1 for chosen in (args.all_stages, args.stage is not None, args.daily is not None) if chosen)
    if presets > 1:
        parser.error("choose only one of --all-stages, --stage or --daily")
    if presets and explicit:
        parser.error("--all-stages, --stage and --daily cannot be combined with --size or --dots")
    if presets and shaped:
        parser.error("preset stages fix --pattern, --placement and --override")
    if not presets and (args.size is None or args.dots is None):
        parser.error("provide --size and --dots, --stage, --daily, or --all-stages")

    seed = args.seed
    if args.daily is not None and seed is None:
        seed = daily_seed(args.daily)

    config = FactoryConfig(
        seed=seed,
        max_attempts=args.max_attempts,
        oracle_timeout_seconds=args.oracle_timeout,
        oracle_backend=OracleBackend(args.oracle_backend),
    )
    factory = PuzzleFactory(config)

    try:
        if args.all_stages:
            specs = [stage.to_spec() for stage in STAGES]
            levels: List[Optional[int]] = [stage.number for stage in STAGES]
        elif args.stage is not None:
            specs = [get_stage(args.stage).to_spec()]
            levels = [args.stage]
        elif args.daily is not None:
            stage = daily_stage(args.daily)
            specs = [stage.to_spec()]
            levels = [stage.number]
        else:
            specs = [
                PuzzleSpec(
                    grid_size=args.size,
                    dot_count=args.dots,
                    pattern_family=args.pattern or PatternFamily.AUTO,
                    placement=args.placement or PlacementStrategy.EVEN,
                    placement_override=args.override,
                )
            ]
            levels = [None]
        if args.all_stages:
            results = generate_batch(specs, factory, workers=args.workers)
        else:
            results = [factory.generate(specs[0])]
    except InvalidSpecError as exc:
        parser.error(str(exc))

    if args.pretty:
        for result, stage_level in zip(results, levels):
            label = f"Stage {stage_level}" if stage_level else None
            pretty_print_puzzle(result, label=label, show_solution=args.show_solution, stream=sys.stderr)

    payloads = [_payload(result, args.metrics, lvl) for result, lvl in zip(results, levels)]
    output: Any = payloads if args.all_stages else payloads[0]
    output_text = json.dumps(output, ensure_ascii=False, indent=2)
    if args.output:
        args.output.write_text(output_text, encoding="utf-8")
    else:
        print(output_text)


if __name__ == "__main__":  # pragma: no cover
    main()
