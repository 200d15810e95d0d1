"""
Filter engine: narrows the loaded record sequence before aggregation.

Stages, always applied in this order (each is a pass-through when its option
is absent):
1. infra-port removal      (options.remove_infra_port)
2. destination allow-list  (options.destination_ports)
3. time window             (options.window)

Notes
-----
- Options are validated up front; a malformed option raises ValidationError
  before any record is looked at.
- Relative order of the input is preserved by every stage.
"""

from __future__ import annotations

from typing import AbstractSet, FrozenSet, Iterable, List, Mapping, Union

from ..config import FilterOptions, NoWindow, TimeWindow
from ..dto import RawRecord
from .windowing import in_window, window_bounds

# Routine infrastructure traffic (DNS, DHCP, HTTP(S), Kerberos, NTP, RPC,
# NetBIOS, LDAP, SMB, Symantec management).
INFRA_PORTS: FrozenSet[int] = frozenset(
    {53, 67, 68, 80, 88, 123, 135, 137, 138, 139, 389, 443, 445, 2967, 8014}
)


def remove_infra_ports(records: Iterable[RawRecord]) -> List[RawRecord]:
    """Drop every record whose destination port is an infra port."""
    return [r for r in records if r.destination_port not in INFRA_PORTS]


def keep_destination_ports(
    records: Iterable[RawRecord], ports: AbstractSet[int]
) -> List[RawRecord]:
    """Keep records whose destination port is in `ports` (each record at most once)."""
    return [r for r in records if r.destination_port in ports]


def apply_time_window(
    records: Iterable[RawRecord], window: Union[NoWindow, TimeWindow]
) -> List[RawRecord]:
    """
    Apply the time-window stage.

    mode="exclude" removes records inside the inclusive window and keeps the
    rest; mode="include" keeps only records inside it.
    """
    if isinstance(window, NoWindow):
        return list(records)

    start, end = window_bounds(window)
    keep_inside = window.mode == "include"
    return [r for r in records if in_window(r.generate_time, start, end) == keep_inside]


def filter_records(
    records: Iterable[RawRecord],
    options: Union[FilterOptions, Mapping[str, object], None] = None,
) -> List[RawRecord]:
    """
    Run all filter stages over `records`.

    `options` may be a FilterOptions, a mapping of its fields, or None
    (no filtering).
    """
    if options is None:
        opts = FilterOptions()
    elif isinstance(options, FilterOptions):
        opts = options
    else:
        opts = FilterOptions.build(**dict(options))

    out = list(records)

    if opts.remove_infra_port:
        out = remove_infra_ports(out)

    if opts.destination_ports:
        out = keep_destination_ports(out, opts.destination_ports)

    out = apply_time_window(out, opts.window)
    return out
