"""
Pipeline orchestration: source -> loader -> filters -> aggregator -> sink.

The run is all-or-nothing. Options are validated before the source is read,
and the sink only receives records once aggregation has completed, so a
failure in any stage leaves the sink untouched.
"""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Union

from ..config import FilterOptions
from ..dto import AggregatedRecord
from ..pipeline.filters import filter_records
from ..pipeline.grouping import aggregate
from ..ports import RecordSinkPort, RecordSourcePort

STAGES = ("Loading", "Filtering", "Aggregating")


class CollectingSink(RecordSinkPort):
    """Keeps everything in memory; used by the CLI, the web layer and tests."""

    def __init__(self) -> None:
        self.records: List[AggregatedRecord] = []
        self.metrics: Dict[str, int] = {}

    def on_record(self, record: AggregatedRecord) -> None:
        self.records.append(record)

    def on_metrics(self, metrics: Dict[str, int]) -> None:
        self.metrics = dict(metrics)


def run_pipeline(
    *,
    source: RecordSourcePort,
    sink: RecordSinkPort,
    options: Union[FilterOptions, Mapping[str, object], None] = None,
    pbar=None,
) -> Dict[str, int]:
    """
    Execute one full pass and return the metrics also sent to the sink.

    Parameters
    ----------
    source : RecordSourcePort
        Supplies the loaded records.
    sink : RecordSinkPort
        Receives each AggregatedRecord (first-seen order), then the metrics.
    options : FilterOptions | Mapping | None
        Filter options; mappings are validated into FilterOptions first.
    pbar : tqdm-like, optional
        If given, advanced once per stage with the stage name as description.
    """
    if options is None:
        opts = FilterOptions()
    elif isinstance(options, FilterOptions):
        opts = options
    else:
        opts = FilterOptions.build(**dict(options))

    _stage(pbar, STAGES[0])
    records = source.fetch()
    _advance(pbar)

    _stage(pbar, STAGES[1])
    kept = filter_records(records, opts)
    _advance(pbar)

    _stage(pbar, STAGES[2])
    groups = aggregate(kept)
    _advance(pbar)

    for rec in groups:
        sink.on_record(rec)

    metrics = {
        "records_loaded": len(records),
        "records_kept": len(kept),
        "groups_emitted": len(groups),
    }
    sink.on_metrics(metrics)
    return metrics


def _stage(pbar, name: str) -> None:
    if pbar is not None:
        pbar.set_description(name)


def _advance(pbar) -> None:
    if pbar is not None:
        pbar.update()
