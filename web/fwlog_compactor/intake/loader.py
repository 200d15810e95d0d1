"""
Record loader: turns a tabular connection-log export into RawRecord objects.

- Validates that all seven required columns are present (exact, case-sensitive
  names). Extra columns are ignored.
- Parses `Generate Time` ("dd/mm/yyyy HH:MM", 24-hour) and keeps only the
  time of day.
- Parses both port columns as integers.

Any failure aborts the whole load: SchemaError for missing columns, ParseError
for the first bad cell. Partial results are never returned.
"""

from __future__ import annotations

import math
from collections import Counter
from datetime import datetime, time
from typing import List

import pandas as pd

from ..dto import (
    DESTINATION_PORT,
    GENERATE_TIME,
    GENERATE_TIME_FORMAT,
    REQUIRED_COLUMNS,
    SOURCE_PORT,
    RawRecord,
)
from ..errors import ParseError, SchemaError

_MAX_PORT = 65535


def missing_columns(frame: pd.DataFrame) -> List[str]:
    """Required columns absent from `frame`, in required order."""
    present = set(frame.columns)
    return [c for c in REQUIRED_COLUMNS if c not in present]


def duplicated_columns(frame: pd.DataFrame) -> List[str]:
    """Required columns that appear more than once in `frame`, in required order."""
    counts = Counter(frame.columns)
    return [c for c in REQUIRED_COLUMNS if counts.get(c, 0) > 1]


def load(source: pd.DataFrame) -> List[RawRecord]:
    """
    Validate and project every row of `source`.

    Parameters
    ----------
    source : pandas.DataFrame
        Table with a header row; cells may be strings or already-typed values.

    Returns
    -------
    List[RawRecord]
        One record per row, in source row order.
    """
    missing = missing_columns(source)
    duplicated = duplicated_columns(source)
    if missing or duplicated:
        raise SchemaError(missing, duplicated=duplicated)

    projected = source.loc[:, list(REQUIRED_COLUMNS)]
    records: List[RawRecord] = []
    for idx, row in enumerate(projected.itertuples(index=False, name=None)):
        records.append(_to_record(idx, row))
    return records


def parse_generate_time(value: object) -> time:
    """
    Parse a `Generate Time` cell into a time of day (hour:minute).

    Raises ValueError when the value does not match the export format.
    """
    if isinstance(value, datetime):  # also covers pandas.Timestamp
        return value.time().replace(second=0, microsecond=0)
    text = str(value).strip()
    return datetime.strptime(text, GENERATE_TIME_FORMAT).time()


def parse_port(value: object) -> int:
    """Parse a port cell; accepts "443", 443 and 443.0. Raises ValueError otherwise."""
    if isinstance(value, bool):
        raise ValueError("boolean is not a port")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError("not an integer")
        port = int(value)
    elif isinstance(value, int):
        port = value
    else:
        text = str(value).strip()
        try:
            port = int(text)
        except ValueError:
            as_float = float(text)
            if not as_float.is_integer():
                raise ValueError("not an integer") from None
            port = int(as_float)
    if not 0 <= port <= _MAX_PORT:
        raise ValueError(f"out of range 0..{_MAX_PORT}")
    return port


# === Helpers ===


def _is_missing(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if value is pd.NaT:
        return True
    return isinstance(value, str) and not value.strip()


def _to_record(idx: int, row: tuple) -> RawRecord:
    for column, value in zip(REQUIRED_COLUMNS, row):
        if _is_missing(value):
            raise ParseError(idx, column, value, "missing value")

    gen, src, dst, app, sport, dport, proto = row

    try:
        gen_time = parse_generate_time(gen)
    except ValueError as e:
        raise ParseError(idx, GENERATE_TIME, gen, "expected dd/mm/yyyy HH:MM") from e

    try:
        source_port = parse_port(sport)
    except ValueError as e:
        raise ParseError(idx, SOURCE_PORT, sport, str(e)) from e

    try:
        destination_port = parse_port(dport)
    except ValueError as e:
        raise ParseError(idx, DESTINATION_PORT, dport, str(e)) from e

    return RawRecord(
        generate_time=gen_time,
        source_address=str(src).strip(),
        destination_address=str(dst).strip(),
        application=str(app).strip(),
        source_port=source_port,
        destination_port=destination_port,
        ip_protocol=str(proto).strip(),
    )
