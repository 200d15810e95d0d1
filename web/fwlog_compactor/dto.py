"""
Data Transfer Objects (DTOs) used across the compaction pipeline.

These are intentionally small, immutable (where sensible), and independent
of any I/O or parsing libraries.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Dict, Tuple, Union

# === Column contract ===

GENERATE_TIME = "Generate Time"
SOURCE_ADDRESS = "Source address"
DESTINATION_ADDRESS = "Destination address"
APPLICATION = "Application"
SOURCE_PORT = "Source Port"
DESTINATION_PORT = "Destination Port"
IP_PROTOCOL = "IP Protocol"
RANGE = "Range"

# Input columns, in the order they are reported when missing.
REQUIRED_COLUMNS: Tuple[str, ...] = (
    GENERATE_TIME,
    SOURCE_ADDRESS,
    DESTINATION_ADDRESS,
    APPLICATION,
    SOURCE_PORT,
    DESTINATION_PORT,
    IP_PROTOCOL,
)

OUTPUT_COLUMNS: Tuple[str, ...] = (
    SOURCE_ADDRESS,
    DESTINATION_ADDRESS,
    APPLICATION,
    DESTINATION_PORT,
    IP_PROTOCOL,
    RANGE,
)

# Firewall export format, e.g. "01/02/2024 04:52"
GENERATE_TIME_FORMAT = "%d/%m/%Y %H:%M"


# === Loaded record ===
@dataclass(frozen=True)
class RawRecord:
    """One connection-log row projected to the seven required fields."""
    generate_time: time      # time-of-day only, minute granularity
    source_address: str
    destination_address: str
    application: str
    source_port: int
    destination_port: int
    ip_protocol: str


# === Grouping key ===
@dataclass(frozen=True)
class IdentityKey:
    """Aggregation root (excludes ephemeral source port, time and protocol)."""
    source_address: str
    destination_address: str
    application: str
    destination_port: int

    @classmethod
    def of(cls, record: RawRecord) -> "IdentityKey":
        return cls(
            source_address=record.source_address,
            destination_address=record.destination_address,
            application=record.application,
            destination_port=record.destination_port,
        )


# === Rolling aggregate (mutable during one pass) ===
@dataclass
class GroupAggregate:
    """In-memory accumulator for one identity key."""
    key: IdentityKey
    ip_protocol: str         # from the first record seen; never overwritten
    min_source_port: int
    max_source_port: int


# === Final immutable record for emission ===
@dataclass(frozen=True)
class AggregatedRecord:
    source_address: str
    destination_address: str
    application: str
    destination_port: int
    ip_protocol: str
    min_source_port: int
    max_source_port: int
    range: str               # "<min> - <max>"

    @property
    def key(self) -> IdentityKey:
        return IdentityKey(
            source_address=self.source_address,
            destination_address=self.destination_address,
            application=self.application,
            destination_port=self.destination_port,
        )

    def to_row(self) -> Dict[str, Union[str, int]]:
        """Output shape keyed by display column names."""
        return {
            SOURCE_ADDRESS: self.source_address,
            DESTINATION_ADDRESS: self.destination_address,
            APPLICATION: self.application,
            DESTINATION_PORT: self.destination_port,
            IP_PROTOCOL: self.ip_protocol,
            RANGE: self.range,
        }
