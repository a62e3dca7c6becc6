from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Sequence

from clocks.resolver import ResolvedClock

TIME_FORMAT = "%H:%M:%S"
SEPARATOR = "  "


def to_zone(instant: datetime, clock: ResolvedClock, local_zone: tzinfo | None = None) -> datetime:
    if clock.zone is not None:
        return instant.astimezone(clock.zone)
    if local_zone is not None:
        return instant.astimezone(local_zone)
    return instant.astimezone()


def format_time(value: datetime) -> str:
    return value.strftime(TIME_FORMAT)


def format_line(label: str, time_text: str, width: int = 0) -> str:
    return f"{label.ljust(width)}{SEPARATOR}{time_text}"


def render_clocks(
    clocks: Sequence[ResolvedClock],
    instant: datetime,
    local_zone: tzinfo | None = None,
    align: bool = True,
) -> list[str]:
    """Render one line per clock, all for the same ``instant``.

    ``instant`` must be timezone-aware. With ``align`` the labels are padded
    to the longest one so the times form a column.
    """
    if instant.tzinfo is None:
        raise ValueError("instant must be timezone-aware.")
    width = max((len(clock.label) for clock in clocks), default=0) if align else 0
    return [
        format_line(clock.label, format_time(to_zone(instant, clock, local_zone)), width)
        for clock in clocks
    ]
