from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import tzinfo
from typing import Iterable
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from clocks.config import ClockSpec
from clocks.errors import InvalidTimezone

logger = logging.getLogger(__name__)

LOCAL_LABEL = "Local"


@dataclass(frozen=True)
class ResolvedClock:
    spec: ClockSpec
    label: str
    zone: tzinfo | None
    zone_name: str

    @property
    def is_local(self) -> bool:
        return self.zone is None


def _load_zone(tz: str) -> ZoneInfo:
    try:
        return ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError, IsADirectoryError) as exc:
        raise InvalidTimezone(tz) from exc


def resolve_clock(spec: ClockSpec) -> ResolvedClock:
    if spec.tz is None:
        zone = None
        zone_name = LOCAL_LABEL
    else:
        zone = _load_zone(spec.tz)
        zone_name = spec.tz
    label = spec.name if spec.name is not None else zone_name
    logger.debug("Resolved clock %r -> %s", label, zone_name)
    return ResolvedClock(spec=spec, label=label, zone=zone, zone_name=zone_name)


def resolve_clocks(specs: Iterable[ClockSpec]) -> list[ResolvedClock]:
    return [resolve_clock(spec) for spec in specs]
