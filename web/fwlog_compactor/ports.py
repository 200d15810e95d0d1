"""
Hexagonal interfaces (Ports) for the compaction pipeline.

These define the boundary between core domain logic and I/O adapters.
Keep them small and implementation-agnostic so they're easy to mock in tests.
"""

from __future__ import annotations

from typing import Dict, Protocol, Sequence

from .dto import AggregatedRecord, RawRecord


class RecordSourcePort(Protocol):
    """
    Supplies validated connection-log records.
    Implementations may read from local files or in-memory tables.
    """

    def fetch(self) -> Sequence[RawRecord]:
        """
        Return every record of the source in source row order.
        Implementations MUST raise (SchemaError / ParseError) rather than
        return a partial sequence.
        """
        ...


class RecordSinkPort(Protocol):
    """
    Receives emitted records and metrics from the pipeline.
    No persistence here by design: sinks print, collect, or serialize.
    """

    def on_record(self, record: AggregatedRecord) -> None:
        """Receive one finalized AggregatedRecord."""
        ...

    def on_metrics(self, metrics: Dict[str, int]) -> None:
        """
        Receive a metrics snapshot at the end of the run
        (records_loaded, records_kept, groups_emitted).
        """
        ...
