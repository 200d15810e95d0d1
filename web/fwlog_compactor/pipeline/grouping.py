"""
Grouping primitives and aggregate lifecycle.

Responsibilities (kept minimal, one thing each):
- Derive the IdentityKey of a record.
- Maintain one mutable GroupAggregate per key, in first-seen order.
- Finalize aggregates into immutable AggregatedRecord values.

Notes
-----
- The identity key deliberately EXCLUDES the ephemeral source port; the
  observed source ports are folded into a [min, max] range instead.
- The protocol of a group is the one carried by its first record.
"""

from __future__ import annotations

from typing import Dict, Iterable, List

from ..dto import AggregatedRecord, GroupAggregate, IdentityKey, RawRecord


def format_range(min_port: int, max_port: int) -> str:
    """Display form of a source-port range, e.g. "1025 - 4000"."""
    return f"{min_port} - {max_port}"


class AggregatorShard:
    """
    Manages GroupAggregate objects keyed by IdentityKey.

    Usage:
        shard = AggregatorShard()
        for rec in records:
            shard.observe(rec)
        out = shard.finalize_all()
    """

    def __init__(self) -> None:
        # dicts keep insertion order: iteration order == first-seen order
        self._open: Dict[IdentityKey, GroupAggregate] = {}

    def __len__(self) -> int:
        return len(self._open)

    # --- lifecycle ---

    def observe(self, record: RawRecord) -> GroupAggregate:
        """Fold one record into its group, creating the group on first sighting."""
        key = IdentityKey.of(record)
        agg = self._open.get(key)
        if agg is None:
            agg = GroupAggregate(
                key=key,
                ip_protocol=record.ip_protocol,
                min_source_port=record.source_port,
                max_source_port=record.source_port,
            )
            self._open[key] = agg
            return agg

        agg.min_source_port = min(agg.min_source_port, record.source_port)
        agg.max_source_port = max(agg.max_source_port, record.source_port)
        return agg

    def finalize_all(self) -> List[AggregatedRecord]:
        """Close all groups and return them as immutable records, first-seen order."""
        out = [finalize_aggregate(agg) for agg in self._open.values()]
        self._open = {}
        return out


def finalize_aggregate(agg: GroupAggregate) -> AggregatedRecord:
    """Convert a mutable GroupAggregate into its immutable output record."""
    return AggregatedRecord(
        source_address=agg.key.source_address,
        destination_address=agg.key.destination_address,
        application=agg.key.application,
        destination_port=agg.key.destination_port,
        ip_protocol=agg.ip_protocol,
        min_source_port=agg.min_source_port,
        max_source_port=agg.max_source_port,
        range=format_range(agg.min_source_port, agg.max_source_port),
    )


def aggregate(records: Iterable[RawRecord]) -> List[AggregatedRecord]:
    """Group `records` by identity key; empty input yields an empty list."""
    shard = AggregatorShard()
    for rec in records:
        shard.observe(rec)
    return shard.finalize_all()
