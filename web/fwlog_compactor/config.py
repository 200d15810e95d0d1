"""
Configuration schema for the filter stage of the pipeline.

Keep this lean and opinionated: only the knobs the filter engine consumes
(infra-port removal, destination-port allow-list, one optional time window).
Everything is validated here, at the boundary, so the filter stages never see
a malformed option.
"""

from __future__ import annotations

from datetime import time
from typing import Annotated, Any, FrozenSet, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError

Port = Annotated[int, Field(ge=0, le=65535)]
WindowMode = Literal["exclude", "include"]


class NoWindow(BaseModel):
    """No time-window stage."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["none"] = "none"


class TimeWindow(BaseModel):
    """
    Inclusive time-of-day window [start, start + length_minutes].

    mode="exclude" drops the records inside the window (the firewall tool's
    historical behavior); mode="include" keeps only those records.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["window"] = "window"
    start: time
    length_minutes: int = Field(ge=0, description="Window length in minutes.")
    mode: WindowMode = Field(default="exclude")


class FilterOptions(BaseModel):
    """Validated, immutable options for one filter pass."""

    model_config = ConfigDict(frozen=True)

    remove_infra_port: bool = Field(
        default=False,
        description="Drop records whose destination port is a well-known infra port.",
    )
    destination_ports: Optional[FrozenSet[Port]] = Field(
        default=None,
        description="Allow-list of destination ports; None or empty disables it.",
    )
    window: Union[NoWindow, TimeWindow] = Field(
        default_factory=NoWindow,
        discriminator="kind",
    )

    @classmethod
    def build(cls, **fields: Any) -> "FilterOptions":
        """Construct options, reporting bad values as the pipeline's ValidationError."""
        try:
            return cls(**fields)
        except PydanticValidationError as e:
            raise ValidationError(_summarize(e)) from e


def build_window(
    start: Union[time, str, None],
    length_minutes: Optional[int],
    mode: WindowMode = "exclude",
) -> Union[NoWindow, TimeWindow]:
    """
    Pair a window start with its length.

    Both absent -> NoWindow. Exactly one present -> ValidationError.
    """
    if start is None and length_minutes is None:
        return NoWindow()
    if start is None or length_minutes is None:
        raise ValidationError("A time window needs both a start time and an interval")
    try:
        return TimeWindow(start=start, length_minutes=length_minutes, mode=mode)
    except PydanticValidationError as e:
        raise ValidationError(_summarize(e)) from e


def build_options(
    *,
    remove_infra_port: bool = False,
    destination_ports: Optional[Any] = None,
    window_start: Union[time, str, None] = None,
    window_length: Optional[int] = None,
    window_mode: WindowMode = "exclude",
) -> FilterOptions:
    """Flat-argument constructor used by the CLI and the web layer."""
    window = build_window(window_start, window_length, window_mode)
    return FilterOptions.build(
        remove_infra_port=remove_infra_port,
        destination_ports=destination_ports,
        window=window,
    )


def _summarize(err: PydanticValidationError) -> str:
    parts = []
    for item in err.errors():
        loc = ".".join(str(p) for p in item.get("loc", ())) or "options"
        parts.append(f"{loc}: {item.get('msg', 'invalid value')}")
    return "; ".join(parts)
