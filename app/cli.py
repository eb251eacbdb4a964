"""CLI entry point for the surplus planner."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

import pandas as pd

from core.config import DEFAULT_PROJECTION_MONTHS, ProjectionConfig
from data_prep.income import summarize_income_sources
from data_prep.loader import UserRecords, load_user_records
from data_prep.validators import ValidationResult, validate_records
from engine.runner import run_projection, simulate_projection
from reporting.targets import calculate_daily_target

logger = logging.getLogger("surplus_planner.app")


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("records", help="JSON bundle file or directory of per-section CSV files")
    parser.add_argument("--as-of", help="Reference date (YYYY-MM-DD); defaults to today")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="surplus-planner",
        description="Project how monthly surplus is split across savings goals",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    project = sub.add_parser("project", help="Monthly goal projection")
    _add_common(project)
    project.add_argument("--offset", type=int, default=0, help="First month to show, relative to the current month")
    project.add_argument("--months", type=int, default=DEFAULT_PROJECTION_MONTHS, help="Months to show (max 24)")
    project.add_argument(
        "--income-estimate",
        choices=["low", "mid", "high"],
        default="mid",
        help="Which income-source estimate feeds monthly income (default: mid)",
    )
    project.add_argument(
        "--format",
        choices=["json", "csv"],
        default="json",
        help="json: monthly snapshots; csv: raw goal x month ledger",
    )

    income = sub.add_parser("income", help="Income-source summary")
    _add_common(income)

    target = sub.add_parser("target", help="Daily savings target")
    _add_common(target)

    validate = sub.add_parser("validate", help="Validate records only")
    _add_common(validate)
    return parser


def _print_validation(result: ValidationResult) -> None:
    for warning in result.warnings:
        print(f"WARNING: {warning}", file=sys.stderr)
    for error in result.errors:
        print(f"ERROR: {error}", file=sys.stderr)


def _print_json(payload) -> None:
    print(json.dumps(payload, indent=2))


def _as_of(args: argparse.Namespace) -> Optional[pd.Timestamp]:
    return pd.Timestamp(args.as_of) if args.as_of else None


def _run_project(records: UserRecords, args: argparse.Namespace) -> int:
    config = ProjectionConfig.from_request(
        args.offset,
        args.months,
        as_of_date=_as_of(args),
        income_estimate=args.income_estimate,
    )
    inputs = (
        records.goals,
        records.income_sources,
        records.side_projects,
        records.recurring_expenses,
        records.transactions,
    )
    if args.format == "csv":
        sim = simulate_projection(*inputs, config=config)
        sim.to_frame().to_csv(sys.stdout, index=False)
        return 0

    response = run_projection(*inputs, config=config)
    _print_json(response.to_payload())
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        as_of = _as_of(args)
        records = load_user_records(args.records)
    except (OSError, ValueError) as exc:
        print(f"Failed to load records: {exc}", file=sys.stderr)
        return 2

    validation = validate_records(records)
    _print_validation(validation)
    if not validation.is_valid:
        return 1

    if args.command == "validate":
        print(validation.summary())
        return 0

    try:
        if args.command == "project":
            return _run_project(records, args)
        if args.command == "income":
            _print_json(summarize_income_sources(records.income_sources).to_dict())
            return 0
        if args.command == "target":
            target = calculate_daily_target(
                records.goals,
                records.income_sources,
                records.side_projects,
                records.recurring_expenses,
                records.transactions,
                as_of=as_of,
            )
            _print_json(target.to_dict())
            return 0
    except (TypeError, ValueError):
        logger.exception("Command %s failed", args.command)
        print("projection failed", file=sys.stderr)
        return 1

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
