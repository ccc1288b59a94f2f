# morclean/cli.py
"""Command line entry point (``morclean``).

  morclean board --mode today --q smith
  morclean checklist "Airbnb Turnover"
  morclean sync-square --out output/jobs.csv
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from datetime import datetime
from typing import Optional, Sequence

from morclean.board import BoardEntry, build_board, load_jobs
from morclean.checklists.resolver import active_templates, resolve
from morclean.checklists.templates import Template
from morclean.config import load_settings
from morclean.core.date_parse import parse_job_date
from morclean.filters.rules import classify
from morclean.filters.window import parse_mode
from morclean.providers import ProviderError
from morclean.providers.square import sync_bookings, write_rows_csv


def _print_checklist(template: Template, indent: str = "  ") -> None:
    for section in template.sections:
        print(f"{indent}{section.label}")
        for item in section.items:
            print(f"{indent}  [ ] {item}")


def _print_entry(entry: BoardEntry) -> None:
    job = entry.job
    when = " ".join(p for p in (job.date, f"{job.start}-{job.end}" if job.start else "") if p)
    print(f"{when or '(no date)'} | {job.title or '(untitled)'} | {job.client or '-'} [{entry.tag.value}]")
    if job.address:
        print(f"  {job.address}")
    if job.notes:
        print(f"  Notes: {job.notes}")
    for task in job.tasks:
        print(f"  + {task}")
    _print_checklist(entry.checklist, indent="    ")


def cmd_board(args: argparse.Namespace) -> int:
    settings = load_settings()
    if args.source:
        settings = replace(settings, jobs_api_url=args.source)

    try:
        mode = parse_mode(args.mode)
    except ValueError as e:
        print(str(e), file=sys.stderr)
        return 2

    now = datetime.now()
    if args.date:
        ref = parse_job_date(args.date)
        if ref is None:
            print(f"Invalid --date: {args.date}", file=sys.stderr)
            return 2
        now = datetime.combine(ref, now.time())

    entries = build_board(
        load_jobs(settings),
        now=now,
        mode=mode,
        search=args.q,
        templates=active_templates(),
    )
    if args.json:
        print(json.dumps([e.to_dict() for e in entries], indent=2))
        return 0
    if not entries:
        print("No jobs found.")
        return 0
    for entry in entries:
        _print_entry(entry)
        print()
    print(f"Summary: visible={len(entries)}")
    return 0


def cmd_checklist(args: argparse.Namespace) -> int:
    tag = classify(args.text)
    template = resolve(tag, active_templates())
    print(f"{template.name} [{tag.value}]")
    _print_checklist(template)
    return 0


def cmd_sync_square(args: argparse.Namespace) -> int:
    try:
        rows = sync_bookings(load_settings())
    except ProviderError as e:
        print(f"Sync error: {e}", file=sys.stderr)
        return 1
    count = write_rows_csv(rows, args.out)
    print(f"Synced {count} booking(s) from Square to {args.out}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="morclean", description="MOR Clean job checklists")
    parser.add_argument("--log-level", default=None, help="Logging level (overrides MORCLEAN_LOG_LEVEL)")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("board", help="Show jobs with their checklists")
    p.add_argument("--mode", default="today", help="Date window: today | week | all")
    p.add_argument("--q", default="", help="Search client, address, title and notes")
    p.add_argument("--date", default=None, help="Reference date YYYY-MM-DD instead of today")
    p.add_argument("--source", default=None, help="/api/jobs URL (overrides MORCLEAN_JOBS_API_URL)")
    p.add_argument("--json", action="store_true", help="Print JSON instead of text")
    p.set_defaults(func=cmd_board)

    p = sub.add_parser("checklist", help="Show the checklist a job title maps to")
    p.add_argument("text", nargs="?", default="", help="Job title or service type")
    p.set_defaults(func=cmd_checklist)

    p = sub.add_parser("sync-square", help="Export Square bookings as a jobs sheet CSV")
    p.add_argument("--out", default="output/jobs.csv", help="CSV output path")
    p.set_defaults(func=cmd_sync_square)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    level = (args.log_level or load_settings().log_level).upper()
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format="%(levelname)s %(name)s: %(message)s")
    try:
        active_templates()
    except (OSError, ValueError) as e:
        print(f"Invalid checklist templates: {e}", file=sys.stderr)
        return 2
    return args.func(args)


if __name__ == "__main__":
    # When executed as `python -m morclean.cli ...`
    sys.exit(main())
