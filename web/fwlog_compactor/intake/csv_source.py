"""
Record source adapters.

- CsvLogSource reads a comma-separated firewall export from disk.
- DataFrameSource wraps a table that is already in memory.

Neither adapter interprets cells: every value is read as text and typed later
by the loader, so a bad cell surfaces as a ParseError with its row number.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import IO, List

import pandas as pd

from ..dto import RawRecord
from ..errors import SourceReadError
from ..ports import RecordSourcePort
from .loader import load

CSV_SUFFIX = ".csv"
DEFAULT_ENCODING = "utf-8-sig"


def read_log(
    path: str | os.PathLike | IO[bytes], encoding: str = DEFAULT_ENCODING
) -> pd.DataFrame:
    """
    Read a CSV export with a header row, keeping every cell as a string.

    `path` may also be a binary stream (an uploaded file).

    Undecodable bytes (e.g. a cp1252 export read as UTF-8) and malformed CSV
    raise SourceReadError. Pass the export's `encoding` to read it.
    """
    try:
        return pd.read_csv(
            path,
            dtype=str,
            keep_default_na=False,
            skipinitialspace=True,
            encoding=encoding,
        )
    except UnicodeDecodeError as e:
        raise SourceReadError(path, f"not valid {encoding} ({e.reason} at byte {e.start})") from e
    except LookupError as e:
        raise SourceReadError(path, f"unknown encoding {encoding!r}") from e
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        raise SourceReadError(path, str(e)) from e


@dataclass(frozen=True)
class CsvLogSource(RecordSourcePort):
    """Connection-log export on the local filesystem."""

    path: str | os.PathLike
    encoding: str = DEFAULT_ENCODING

    def fetch(self) -> List[RawRecord]:
        return load(read_log(self.path, self.encoding))


@dataclass(frozen=True)
class DataFrameSource(RecordSourcePort):
    """In-memory table (tests, web uploads already parsed, notebooks)."""

    frame: pd.DataFrame

    def fetch(self) -> List[RawRecord]:
        return load(self.frame)
