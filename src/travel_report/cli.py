"""Command-line interface for generating employee travel reports."""

import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import List, Optional
import numpy as np
from faker import Faker

from .config import ReportConfig, load_config
from .pdf_renderer import ReportWriteError, generate_report
from .records import ReportRecord
from .report_writer import write_layout_manifest, write_report_json
from .sample_data import generate_sample_record


def load_record(path: Path) -> ReportRecord:
    """Load a report record from a JSON file."""
    with open(path, "r") as f:
        return ReportRecord.from_dict(json.load(f))


def default_output_path(record: ReportRecord, config: ReportConfig, fmt: str) -> Path:
    period = f"{record.report_period.start_date}_{record.report_period.end_date}"
    return config.out_dir / f"employee_{record.employee.id}_report_{period}.{fmt}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Employee Travel Report Generator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--input",
        type=Path,
        help="JSON report record to render (a seeded sample is used if omitted)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--out",
        type=Path,
        help="Output file path (defaults to a name under the config out_dir)",
    )
    parser.add_argument(
        "--format",
        choices=["pdf", "json"],
        default="pdf",
        help="Output format",
    )
    parser.add_argument(
        "--manifest",
        type=Path,
        help="Also write a JSON-lines page manifest to this path",
    )
    parser.add_argument("--seed", type=int, default=42, help="Random seed for sample data")
    parser.add_argument("--flights", type=int, default=12, help="Sample flight count")
    parser.add_argument("--tickets", type=int, default=6, help="Sample ticket count")
    parser.add_argument("--transfers", type=int, default=6, help="Sample transfer count")
    parser.add_argument(
        "--currency",
        action="append",
        dest="currencies",
        help="Sample transfer currency (repeat for mixed currencies)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    if args.input:
        record = load_record(args.input)
    else:
        rng = np.random.default_rng(args.seed)
        fake = Faker()
        fake.seed_instance(args.seed)
        record = generate_sample_record(
            rng,
            fake,
            num_flights=args.flights,
            num_tickets=args.tickets,
            num_transfers=args.transfers,
            currencies=args.currencies or ["USD"],
        )

    out_path = args.out or default_output_path(record, config, args.format)

    try:
        try:
            out_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ReportWriteError(out_path, exc) from exc

        if args.format == "json":
            write_report_json(record, out_path)
            print(f"Wrote JSON report: {out_path}")
            return 0

        layout = asyncio.run(generate_report(record, out_path, config))
        if args.manifest:
            write_layout_manifest(layout, args.manifest)
    except ReportWriteError as exc:
        print(f"Error: {exc}")
        return 1

    print(f"Report: {layout.title}")
    print(f"  Pages: {layout.page_count}")
    print(f"  Flight rows: {layout.row_count('flights')}")
    print(f"  Ticket rows: {layout.row_count('tickets')}")
    print(f"  Transfer rows: {layout.row_count('transfers')}")
    print(f"  Output: {out_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
