"""One-call match report: stats, timeline and pitch views for a subject.

Without ``player_id`` the report covers the whole match: the timeline is laid
out above/below the axis by team and the pitch views use every event. With
``player_id`` everything is restricted to that player's events and the
timeline uses the single-subject layout.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

import pandas as pd

from analytics.classification import DEFAULT_CLASSIFIER, EventClassifier
from analytics.contracts import RatioContract, flatten_ratio_contract
from analytics.density import DensityBinner
from analytics.event_summary import event_type_stats
from analytics.period_stats import (
    BUCKET_KEYS,
    PeriodAggregator,
    PeriodStats,
    accuracy,
    rates,
    stats_frame,
)
from analytics.pitch_views import HeatmapView, PassArrow, ShotMark, heatmap_view, pass_map, shot_map
from analytics.schema import MatchEvent
from analytics.spatial import SpatialProjector
from analytics.timeline import activity_density, period_dividers, timeline_domain
from analytics.timeline_layout import TimelineEntry, TimelineLayoutEngine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchContext:
    match_id: str
    home_team_id: str
    away_team_id: str
    player_id: str | None = None
    minutes_played: int | None = None

    def __post_init__(self):
        if self.minutes_played is not None and self.minutes_played < 0:
            raise ValueError(f"minutes_played must be non-negative, got {self.minutes_played}")

    @property
    def is_player_report(self) -> bool:
        return self.player_id is not None


@dataclass
class MatchReport:
    context: MatchContext
    stats: dict[str, PeriodStats]
    rates: dict[str, dict[str, RatioContract]]
    accuracy: dict[str, dict[str, RatioContract]]
    stats_table: pd.DataFrame
    timeline: list[TimelineEntry]
    timeline_domain: tuple[float, float]
    period_dividers: list[dict[str, object]]
    activity: pd.DataFrame
    event_types: pd.DataFrame
    heatmap: HeatmapView
    passes: list[PassArrow] = field(default_factory=list)
    shots: list[ShotMark] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        """JSON-friendly summary: counts with wire keys, flattened ratio contracts."""
        out: dict[str, object] = {
            "matchId": self.context.match_id,
            "playerId": self.context.player_id,
            "minutesPlayed": self.context.minutes_played,
        }
        for bucket in BUCKET_KEYS:
            bucket_out: dict[str, object] = dict(self.stats[bucket].as_dict(wire=True))
            for name, contract in {**self.rates[bucket], **self.accuracy[bucket]}.items():
                bucket_out.update(flatten_ratio_contract(name, contract))
            out[bucket] = bucket_out
        return out


def _subject_events(events: list[MatchEvent], context: MatchContext) -> list[MatchEvent]:
    if not context.is_player_report:
        return events
    return [event for event in events if event.player_id == context.player_id]


def build_match_report(
    events: Iterable[MatchEvent],
    context: MatchContext,
    *,
    classifier: EventClassifier = DEFAULT_CLASSIFIER,
    projector: SpatialProjector | None = None,
    binner: DensityBinner | None = None,
    layout_engine: TimelineLayoutEngine | None = None,
) -> MatchReport:
    events = list(events)
    subject = _subject_events(events, context)
    if not subject:
        logger.warning("no events for match %s (player=%s)", context.match_id, context.player_id)

    stats = PeriodAggregator(classifier).aggregate(subject)

    if layout_engine is None:
        if context.is_player_report:
            layout_engine = TimelineLayoutEngine.single_subject(classifier=classifier)
        else:
            layout_engine = TimelineLayoutEngine.whole_match(classifier=classifier)
    timeline = layout_engine.layout(subject, home_team_id=context.home_team_id)

    seconds = [layout_engine.mapper.absolute_second(event) for event in subject]
    domain = timeline_domain(seconds)

    return MatchReport(
        context=context,
        stats=stats,
        rates=rates(stats, context.minutes_played),
        accuracy={bucket: accuracy(stats[bucket]) for bucket in BUCKET_KEYS},
        stats_table=stats_frame(stats, context.minutes_played),
        timeline=timeline,
        timeline_domain=domain,
        period_dividers=period_dividers(domain[1]),
        activity=activity_density(seconds, max_second=domain[1]),
        event_types=event_type_stats(subject, classifier),
        heatmap=heatmap_view(subject, projector, binner=binner, classifier=classifier),
        passes=pass_map(subject, projector, classifier=classifier),
        shots=shot_map(subject, projector, classifier=classifier),
    )
