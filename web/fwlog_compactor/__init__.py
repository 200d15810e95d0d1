"""
fwlog_compactor: deduplicated views of firewall connection logs.

Public API (stable):
- load                     (tabular source -> RawRecord list)
- filter_records           (infra ports, port allow-list, time window)
- aggregate                (one AggregatedRecord per identity key)
- FilterOptions, NoWindow, TimeWindow, build_options   (configuration)
- run_pipeline, CollectingSink                          (orchestration)
- RecordSourcePort, RecordSinkPort                      (ports)
- CsvLogSource, DataFrameSource, read_log               (adapters)
- DTOs: RawRecord, IdentityKey, AggregatedRecord
- Errors: CompactorError, SchemaError, SourceReadError, ParseError, ValidationError
"""

from __future__ import annotations

# Configuration
from .config import FilterOptions, NoWindow, TimeWindow, build_options, build_window

# Errors
from .errors import CompactorError, ParseError, SchemaError, SourceReadError, ValidationError

# Core stages
from .intake.loader import load
from .pipeline.filters import INFRA_PORTS, filter_records
from .pipeline.grouping import aggregate

# Orchestration
from .orchestration.runner import CollectingSink, run_pipeline

# Ports
from .ports import RecordSinkPort, RecordSourcePort

# Adapters
from .intake.csv_source import CsvLogSource, DataFrameSource, read_log

# DTOs
from .dto import AggregatedRecord, IdentityKey, RawRecord

__all__ = [
    "FilterOptions",
    "NoWindow",
    "TimeWindow",
    "build_options",
    "build_window",
    "CompactorError",
    "ParseError",
    "SchemaError",
    "SourceReadError",
    "ValidationError",
    "load",
    "INFRA_PORTS",
    "filter_records",
    "aggregate",
    "CollectingSink",
    "run_pipeline",
    "RecordSinkPort",
    "RecordSourcePort",
    "CsvLogSource",
    "DataFrameSource",
    "read_log",
    "AggregatedRecord",
    "IdentityKey",
    "RawRecord",
]
