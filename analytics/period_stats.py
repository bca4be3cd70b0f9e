"""Per-period statistics for a player's (or team's) match events.

Buckets:
- ``1H`` / ``2H``: events filtered to that period.
- ``total``: every input event, so extra-time and shoot-out events count
  here but never in a half. ``total`` is deliberately not the sum of halves.
"""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass, fields
from typing import Iterable, Mapping

import pandas as pd

from analytics.classification import DEFAULT_CLASSIFIER, ClassifiedEvent, EventClassifier
from analytics.contracts import UNAVAILABLE, MetricValue, RatioContract, is_available, ratio_contract
from analytics.schema import MatchEvent
from analytics.taxonomy import EventCategory
from constants import HALF_PERIODS

logger = logging.getLogger(__name__)

BUCKET_KEYS = ("1H", "2H", "total")
TOTAL_BUCKET = "total"

# Wire names used by the rendering layer.
WIRE_KEYS = {
    "total_events": "totalEvents",
    "shots": "shots",
    "shots_on_target": "shotsOnTarget",
    "shots_from_box": "shotsFromBox",
    "shots_from_outside": "shotsFromOutside",
    "passes": "passes",
    "successful_passes": "successfulPasses",
    "crosses": "crosses",
    "forward_passes": "forwardPasses",
    "backward_passes": "backwardPasses",
    "goals": "goals",
    "assists": "assists",
    "fouls": "fouls",
    "fouls_suffered": "foulsSuffered",
    "duels": "duels",
    "successful_duels": "successfulDuels",
    "aerial_duels": "aerialDuels",
    "ground_duels": "groundDuels",
    "tackles": "tackles",
    "dribbles": "dribbles",
    "successful_dribbles": "successfulDribbles",
    "interceptions": "interceptions",
    "recoveries": "recoveries",
}

METRIC_LABELS = {
    "total_events": "Total events",
    "shots": "Shots",
    "shots_on_target": "Shots on target",
    "shots_from_box": "Shots from the box",
    "shots_from_outside": "Shots from outside the box",
    "passes": "Passes",
    "successful_passes": "Successful passes",
    "crosses": "Crosses",
    "forward_passes": "Forward passes",
    "backward_passes": "Backward passes",
    "goals": "Goals",
    "assists": "Assists",
    "fouls": "Fouls",
    "fouls_suffered": "Fouls suffered",
    "duels": "Duels",
    "successful_duels": "Duels won",
    "aerial_duels": "Aerial duels",
    "ground_duels": "Ground duels",
    "tackles": "Tackles",
    "dribbles": "Dribbles",
    "successful_dribbles": "Successful dribbles",
    "interceptions": "Interceptions",
    "recoveries": "Recoveries",
}


@dataclass(frozen=True)
class PeriodStats:
    """Integer event counts for one bucket."""

    total_events: int = 0
    shots: int = 0
    shots_on_target: int = 0
    shots_from_box: int = 0
    shots_from_outside: int = 0
    passes: int = 0
    successful_passes: int = 0
    crosses: int = 0
    forward_passes: int = 0
    backward_passes: int = 0
    goals: int = 0
    assists: int = 0
    fouls: int = 0
    fouls_suffered: int = 0
    duels: int = 0
    successful_duels: int = 0
    aerial_duels: int = 0
    ground_duels: int = 0
    tackles: int = 0
    dribbles: int = 0
    successful_dribbles: int = 0
    interceptions: int = 0
    recoveries: int = 0

    @property
    def successful_actions(self) -> int:
        return self.successful_passes + self.successful_duels + self.successful_dribbles

    def as_dict(self, *, wire: bool = False) -> dict[str, int]:
        data = asdict(self)
        if wire:
            return {WIRE_KEYS[key]: value for key, value in data.items()}
        return data


COUNT_FIELDS = tuple(f.name for f in fields(PeriodStats))


class PeriodAggregator:
    """Counts classified facts per match-period bucket."""

    def __init__(self, classifier: EventClassifier = DEFAULT_CLASSIFIER):
        self.classifier = classifier

    def count(self, items: Iterable[ClassifiedEvent]) -> PeriodStats:
        """Count one bucket's worth of already-classified events."""
        clf = self.classifier
        counts = dict.fromkeys(COUNT_FIELDS, 0)
        for item in items:
            event = item.event
            category = item.category
            counts["total_events"] += 1

            if item.is_shot:
                counts["shots"] += 1
                if clf.is_on_target(event):
                    counts["shots_on_target"] += 1
                if clf.is_from_box(event):
                    counts["shots_from_box"] += 1
                elif clf.is_from_outside(item):
                    counts["shots_from_outside"] += 1
                if category is EventCategory.GOAL:
                    counts["goals"] += 1
            elif category is EventCategory.PASS:
                counts["passes"] += 1
                if clf.is_successful(event):
                    counts["successful_passes"] += 1
                if clf.is_cross(item):
                    counts["crosses"] += 1
                if clf.is_forward(event):
                    counts["forward_passes"] += 1
                elif clf.is_backward(event):
                    counts["backward_passes"] += 1
            elif category is EventCategory.ASSIST:
                counts["assists"] += 1
            elif category is EventCategory.FOUL:
                counts["fouls"] += 1
                if clf.is_foul_suffered(item):
                    counts["fouls_suffered"] += 1
            elif category is EventCategory.DUEL:
                counts["duels"] += 1
                if clf.is_successful(event):
                    counts["successful_duels"] += 1
                if clf.is_aerial(item):
                    counts["aerial_duels"] += 1
                else:
                    counts["ground_duels"] += 1
            elif category is EventCategory.TACKLE:
                counts["tackles"] += 1
            elif category is EventCategory.DRIBBLE:
                counts["dribbles"] += 1
                if clf.is_successful(event):
                    counts["successful_dribbles"] += 1
            elif category is EventCategory.INTERCEPTION:
                counts["interceptions"] += 1
            elif category is EventCategory.RECOVERY:
                counts["recoveries"] += 1
        return PeriodStats(**counts)

    def aggregate(self, events: Iterable[MatchEvent | ClassifiedEvent]) -> dict[str, PeriodStats]:
        """Return ``{"1H": ..., "2H": ..., "total": ...}`` count buckets."""
        items = [
            event if isinstance(event, ClassifiedEvent) else self.classifier.tag(event)
            for event in events
        ]
        buckets = {
            period: self.count(item for item in items if item.event.match_period.value == period)
            for period in HALF_PERIODS
        }
        buckets[TOTAL_BUCKET] = self.count(items)

        outside_halves = buckets[TOTAL_BUCKET].total_events - sum(buckets[p].total_events for p in HALF_PERIODS)
        if outside_halves:
            logger.debug("%d extra-time/shoot-out events counted in total only", outside_halves)
        return buckets


def aggregate(events: Iterable[MatchEvent], minutes_played: int | None = None) -> dict[str, PeriodStats]:
    """Aggregate with the default classifier.

    Counts never depend on ``minutes_played``; it is validated here so a bad
    value fails before any rate is derived from it (see ``rates``).
    """
    if minutes_played is not None and minutes_played < 0:
        raise ValueError(f"minutes_played must be non-negative, got {minutes_played}")
    return PeriodAggregator().aggregate(events)


# ── Playing time and rates ──────────────────────────────────────────────

def minutes_for(bucket: str, minutes_played: int | None) -> MetricValue:
    """Minutes attributed to a bucket; first half floors, second half ceils.

    Returns ``UNAVAILABLE`` when no playing time is known. A positive total
    never yields a zero-minute half: the denominator is clamped to 1.
    """
    if bucket not in BUCKET_KEYS:
        raise ValueError(f"unknown bucket: {bucket}; expected one of {BUCKET_KEYS}")
    if minutes_played is None or minutes_played <= 0:
        return UNAVAILABLE
    if bucket == "1H":
        return float(max(1, math.floor(minutes_played / 2)))
    if bucket == "2H":
        return float(max(1, math.ceil(minutes_played / 2)))
    return float(max(1, minutes_played))


def minutes_by_bucket(minutes_played: int | None) -> dict[str, MetricValue]:
    """Playing-time row: floor/ceil split of the player's minutes.

    Unclamped, unlike ``minutes_for``: one minute played shows 0 first-half
    minutes while the first-half rate still divides by 1.
    """
    if minutes_played is None or minutes_played <= 0:
        return {bucket: UNAVAILABLE for bucket in BUCKET_KEYS}
    return {
        "1H": float(math.floor(minutes_played / 2)),
        "2H": float(math.ceil(minutes_played / 2)),
        TOTAL_BUCKET: float(minutes_played),
    }


def _per_minute(count: int, bucket: str, minutes_played: int | None) -> RatioContract:
    minutes = minutes_for(bucket, minutes_played)
    if not is_available(minutes):
        return RatioContract(numerator=float(count), denominator=0.0, value=UNAVAILABLE)
    return ratio_contract(count, minutes)


def event_rate(stats: PeriodStats, bucket: str, minutes_played: int | None) -> MetricValue:
    """Events per minute for one bucket, or ``UNAVAILABLE``."""
    return _per_minute(stats.total_events, bucket, minutes_played).value


def rates(stats_by_bucket: Mapping[str, PeriodStats], minutes_played: int | None) -> dict[str, dict[str, RatioContract]]:
    """Per-minute activity and successful-action rates for every bucket."""
    out = {}
    for bucket in BUCKET_KEYS:
        stats = stats_by_bucket[bucket]
        out[bucket] = {
            "events_per_minute": _per_minute(stats.total_events, bucket, minutes_played),
            "successful_actions_per_minute": _per_minute(stats.successful_actions, bucket, minutes_played),
        }
    return out


def accuracy(stats: PeriodStats) -> dict[str, RatioContract]:
    """Success percentages; a zero attempt count yields ``UNAVAILABLE``."""
    return {
        "pass_accuracy": ratio_contract(stats.successful_passes, stats.passes, scale=100.0),
        "shot_accuracy": ratio_contract(stats.shots_on_target, stats.shots, scale=100.0),
        "duel_win_rate": ratio_contract(stats.successful_duels, stats.duels, scale=100.0),
        "dribble_success_rate": ratio_contract(stats.successful_dribbles, stats.dribbles, scale=100.0),
    }


def merge_stats(*parts: PeriodStats) -> PeriodStats:
    """Field-wise sum of buckets."""
    if not parts:
        return PeriodStats()
    return PeriodStats(**{name: sum(getattr(part, name) for part in parts) for name in COUNT_FIELDS})


RATE_LABELS = {
    "events_per_minute": "Actions per minute",
    "successful_actions_per_minute": "Successful actions per minute",
}


def stats_frame(stats_by_bucket: Mapping[str, PeriodStats], minutes_played: int | None = None) -> pd.DataFrame:
    """Metric-by-bucket table; rate rows are appended when minutes are known.

    Unavailable rates are carried as ``UNAVAILABLE`` so formatters can render
    a placeholder instead of a number.
    """
    rows = []
    for name in COUNT_FIELDS:
        row = {"metric": name, "label": METRIC_LABELS[name]}
        for bucket in BUCKET_KEYS:
            row[bucket] = getattr(stats_by_bucket[bucket], name)
        rows.append(row)

    if minutes_played is not None:
        played = minutes_by_bucket(minutes_played)
        rows.insert(0, {"metric": "minutes_played", "label": "Minutes played", **played})
        bucket_rates = rates(stats_by_bucket, minutes_played)
        for name, label in RATE_LABELS.items():
            row = {"metric": name, "label": label}
            for bucket in BUCKET_KEYS:
                row[bucket] = bucket_rates[bucket][name].value
            rows.append(row)

    return pd.DataFrame(rows, columns=["metric", "label", *BUCKET_KEYS])
