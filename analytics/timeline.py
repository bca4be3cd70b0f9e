"""Match-clock mapping for timeline tracks.

Converts (period, in-period second) to one absolute match second and renders
it as a minute label. Labels use hard cut-offs at 45:00 and 90:00 and never
produce stoppage-time ("45+2'") notation.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping

import numpy as np
import pandas as pd

from analytics.schema import MatchEvent, MatchPeriod
from constants import (
    ACTIVITY_BIN_S,
    FULL_TIME_SECOND,
    HALF_TIME_SECOND,
    MIN_TIMELINE_SPAN_S,
    PERIOD_LABELS,
    PERIOD_OFFSETS,
)

ACTIVITY_COLUMNS = ["bin_start", "bin_center", "count"]


def _minutes_past(delta_seconds: float) -> int:
    # The minute in progress after a boundary: 45:01 is the 46th minute.
    return int(math.ceil(delta_seconds / 60.0))


@dataclass(frozen=True)
class TimelineMapper:
    """Absolute match-clock arithmetic over a period offset table."""

    offsets: Mapping[str, float] = field(default_factory=lambda: MappingProxyType(dict(PERIOD_OFFSETS)))

    def offset(self, period: MatchPeriod | str) -> float:
        key = MatchPeriod.parse(period).value
        try:
            return float(self.offsets[key])
        except KeyError as exc:
            raise ValueError(f"no clock offset configured for period {key}") from exc

    def absolute_second_for(self, period: MatchPeriod | str, event_second: float) -> float:
        if event_second < 0:
            raise ValueError(f"event_second must be non-negative, got {event_second}")
        return self.offset(period) + float(event_second)

    def absolute_second(self, event: MatchEvent) -> float:
        return self.offset(event.match_period) + event.event_second

    @staticmethod
    def format_clock(seconds: float) -> str:
        seconds = float(seconds)
        if seconds < 0:
            raise ValueError(f"match clock cannot be negative, got {seconds}")
        if seconds <= HALF_TIME_SECOND:
            return f"{int(seconds // 60)}'"
        if seconds <= FULL_TIME_SECOND:
            return f"{45 + _minutes_past(seconds - HALF_TIME_SECOND)}'"
        return f"{90 + _minutes_past(seconds - FULL_TIME_SECOND)}'"


DEFAULT_MAPPER = TimelineMapper()


def absolute_second(event: MatchEvent) -> float:
    return DEFAULT_MAPPER.absolute_second(event)


def format_clock(seconds: float) -> str:
    return DEFAULT_MAPPER.format_clock(seconds)


def period_label(period: MatchPeriod | str) -> str:
    return PERIOD_LABELS[MatchPeriod.parse(period).value]


def event_clock_label(event: MatchEvent) -> str:
    """Period name plus in-period minute, e.g. ``"2nd half 12'"``."""
    return f"{period_label(event.match_period)} {int(event.event_second // 60)}'"


def timeline_domain(seconds: Iterable[float]) -> tuple[float, float]:
    """Visible time domain: at least regulation time, wider if events run later."""
    latest = max((float(s) for s in seconds), default=0.0)
    return 0.0, max(float(MIN_TIMELINE_SPAN_S), latest)


def period_dividers(max_second: float) -> list[dict[str, object]]:
    """Half-time and full-time markers that fall strictly inside the domain."""
    dividers = []
    for second, label in ((HALF_TIME_SECOND, PERIOD_LABELS["1H"]), (FULL_TIME_SECOND, PERIOD_LABELS["2H"])):
        if 0 < second < max_second:
            dividers.append({"second": float(second), "label": label, "clock": format_clock(second)})
    return dividers


def activity_density(
    seconds: Iterable[float],
    *,
    max_second: float | None = None,
    bin_size: int = ACTIVITY_BIN_S,
) -> pd.DataFrame:
    """Event counts per fixed-width time bin for the activity strip.

    Bins start at 0 and cover ``[start, start + bin_size)`` up to and including
    the bin that contains ``max_second``.
    """
    if bin_size <= 0:
        raise ValueError(f"bin_size must be positive, got {bin_size}")

    values = np.asarray(list(seconds), dtype=float)
    if max_second is None:
        max_second = timeline_domain(values.tolist())[1]
    n_bins = int(max_second // bin_size) + 1

    counts = np.zeros(n_bins, dtype=int)
    if values.size:
        idx = np.floor(values / bin_size).astype(int)
        idx = idx[(idx >= 0) & (idx < n_bins)]
        counts = np.bincount(idx, minlength=n_bins)[:n_bins]

    starts = np.arange(n_bins, dtype=float) * bin_size
    return pd.DataFrame(
        {
            "bin_start": starts,
            "bin_center": starts + bin_size / 2.0,
            "count": counts.astype(int),
        },
        columns=ACTIVITY_COLUMNS,
    )
