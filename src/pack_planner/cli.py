from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from pack_planner.config import load_settings
from pack_planner.errors import PackingError
from pack_planner.io.schemas import PlanRequestSchema, PlanResponseSchema
from pack_planner.metrics import format_report
from pack_planner.packing.best_fit import PassStatus
from pack_planner.queue import DuplicatePolicy
from pack_planner.service import build_plan

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INCOMPLETE = 1
EXIT_INVALID_INPUT = 2


def load_input(path: Path) -> PlanRequestSchema:
    """
    Read a plan request JSON file.

    Accepts either {"containers": [...], "items": [...]} or the
    shorthand {"container_preset": "40HC", "items": [...]}.
    """
    data = json.loads(path.read_text(encoding="utf-8"))

    if "container_preset" in data:
        data.setdefault("containers", [])
        data["containers"].append({"preset": data.pop("container_preset")})

    return PlanRequestSchema.model_validate(data)


def write_plan(response: PlanResponseSchema, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(response.model_dump_json(indent=2))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Greedy best-fit pack planner")
    parser.add_argument("--input", required=True, help="Input plan JSON file")
    parser.add_argument("--output", help="Output report JSON file")
    parser.add_argument(
        "--duplicates",
        choices=[p.value for p in DuplicatePolicy],
        help="collapse = drop items equal to a queued one, keep = queue them all",
    )
    parser.add_argument("--log-level", help="Log level (default from PACK_PLANNER_LOG_LEVEL or INFO)")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit non-zero when any item was rejected as too large",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings()

    logging.basicConfig(
        level=(args.log_level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        request = load_input(Path(args.input))
        if args.duplicates:
            request.duplicate_policy = DuplicatePolicy(args.duplicates)
        response = build_plan(request, settings.duplicate_policy)
    except (OSError, json.JSONDecodeError, ValidationError, PackingError) as e:
        logger.error(f"Invalid input {args.input}: {e}")
        print(f"error: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    print(format_report(response.report))
    for rejected in response.rejected:
        print(f"rejected: {rejected.item} - {rejected.detail}")

    if args.output:
        write_plan(response, Path(args.output))
        logger.info(f"Wrote plan to {args.output}")

    if response.status is not PassStatus.COMPLETED:
        return EXIT_INCOMPLETE
    if args.strict and response.rejected:
        return EXIT_INCOMPLETE
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
