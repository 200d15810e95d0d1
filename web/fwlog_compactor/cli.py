"""
Command line front-end: `fwlog-compact -l export.csv [filters]`.

Argument checks happen here, at the boundary, and return an error message
(or None) instead of raising; the first failing check ends the run with
exit code 2. Pipeline errors end it with exit code 1.
"""

from __future__ import annotations

import argparse
import re
import sys
from datetime import time
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import pandas as pd
from tqdm import tqdm

from .config import build_options
from .dto import OUTPUT_COLUMNS, AggregatedRecord
from .errors import CompactorError
from .intake.csv_source import CSV_SUFFIX, DEFAULT_ENCODING, CsvLogSource
from .logger_config import setup_logger
from .orchestration.runner import STAGES, CollectingSink, run_pipeline

EXIT_OK = 0
EXIT_PIPELINE_ERROR = 1
EXIT_USAGE = 2

NO_DATA_MESSAGE = "No data to display."

_HHMM_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


# =========================
# Boundary checks
# =========================

def check_log_path(path: str) -> Optional[str]:
    """Return an error message if `path` is not a .csv file name, else None."""
    if not path or not path.lower().endswith(CSV_SUFFIX):
        return f"Log path must point to a {CSV_SUFFIX} file: {path!r}"
    return None


def check_time_of_day(text: str) -> Tuple[Optional[time], Optional[str]]:
    """Parse "HH:MM" (24-hour). Returns (value, None) or (None, error)."""
    m = _HHMM_RE.match(text.strip()) if text else None
    if not m:
        return None, f"Time must be formatted as HH:MM: {text!r}"
    hour, minute = int(m.group(1)), int(m.group(2))
    if hour > 23 or minute > 59:
        return None, f"Time out of range: {text!r}"
    return time(hour, minute), None


def check_interval(date_time: Optional[str], interval: Optional[int]) -> Optional[str]:
    """--interval is required with --date-time, meaningless without it, and non-negative."""
    if date_time is not None and interval is None:
        return "--interval is required when --date-time is given"
    if date_time is None and interval is not None:
        return "--interval needs --date-time"
    if interval is not None and interval < 0:
        return f"--interval must not be negative: {interval}"
    return None


# =========================
# Output
# =========================

def to_frame(records: Sequence[AggregatedRecord]) -> pd.DataFrame:
    """Aggregated records as a DataFrame with display column names, in order."""
    return pd.DataFrame([r.to_row() for r in records], columns=list(OUTPUT_COLUMNS))


def render_table(records: Sequence[AggregatedRecord]) -> str:
    if not records:
        return NO_DATA_MESSAGE
    return to_frame(records).to_string(index=False)


# =========================
# CLI
# =========================

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="fwlog-compact",
        description="Deduplicate a firewall connection log into one row per "
        "(source, destination, application, destination port) with the source-port range.",
    )
    ap.add_argument("--log-path", "-l", required=True, help="Path to the exported CSV log.")
    ap.add_argument("--date-time", "-t", default=None, help="Window start as HH:MM.")
    ap.add_argument("--interval", "-i", type=int, default=None,
                    help="Window length in minutes (required with --date-time).")
    ap.add_argument("--window-mode", choices=("exclude", "include"), default="exclude",
                    help="Drop records inside the window (default) or keep only them.")
    ap.add_argument("--destination-port", "-p", type=int, nargs="+", default=None,
                    help="Only keep these destination ports.")
    ap.add_argument("--remove-infra-port", "-r", action="store_true",
                    help="Drop well-known infrastructure ports (DNS, HTTP(S), SMB, ...).")
    ap.add_argument("--encoding", "-e", default=DEFAULT_ENCODING,
                    help="Text encoding of the export (e.g. cp1252, latin-1).")
    ap.add_argument("--output", "-o", default=None, help="Also write the result to this CSV file.")
    ap.add_argument("--verbose", "-v", action="store_true", help="Show progress and debug output.")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)
    logger = setup_logger(args.verbose)

    err = check_log_path(args.log_path)
    if err is None:
        err = check_interval(args.date_time, args.interval)
    window_start = None
    if err is None and args.date_time is not None:
        window_start, err = check_time_of_day(args.date_time)
    if err is not None:
        print(f"{ap.prog}: error: {err}", file=sys.stderr)
        return EXIT_USAGE

    log_path = Path(args.log_path)
    if not log_path.is_file():
        logger.error("Log file not found: %s", log_path)
        return EXIT_PIPELINE_ERROR

    sink = CollectingSink()
    try:
        options = build_options(
            remove_infra_port=args.remove_infra_port,
            destination_ports=args.destination_port,
            window_start=window_start,
            window_length=args.interval,
            window_mode=args.window_mode,
        )
        logger.debug("Filter options: %s", options)
        with tqdm(total=len(STAGES), disable=not args.verbose) as pbar:
            metrics = run_pipeline(
                source=CsvLogSource(log_path, args.encoding),
                sink=sink,
                options=options,
                pbar=pbar,
            )
    except CompactorError as e:
        logger.error("%s", e)
        return EXIT_PIPELINE_ERROR
    except OSError as e:
        logger.error("Cannot read %s: %s", log_path, e)
        return EXIT_PIPELINE_ERROR

    logger.debug(
        "Loaded %d records, kept %d, %d unique flows",
        metrics["records_loaded"], metrics["records_kept"], metrics["groups_emitted"],
    )

    print(render_table(sink.records))

    if args.output and sink.records:
        try:
            to_frame(sink.records).to_csv(args.output, index=False)
        except OSError as e:
            logger.error("Cannot write %s: %s", args.output, e)
            return EXIT_PIPELINE_ERROR
        logger.info("Wrote %d rows to %s", len(sink.records), args.output)

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
