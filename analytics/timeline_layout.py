"""Collision-free lane layout for one-axis event timelines.

Events are sorted by absolute match second and swept once: each event joins
the first open cluster whose anchor time is closer than ``threshold``,
otherwise it anchors a new cluster. Members of an N-event cluster get symmetric
lane offsets in insertion order. Whole-match timelines stack home members
above the axis and away members below it, each side in its own lanes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

import pandas as pd

from analytics.classification import DEFAULT_CLASSIFIER, EventClassifier
from analytics.schema import MatchEvent
from analytics.taxonomy import EventCategory
from analytics.timeline import DEFAULT_MAPPER, TimelineMapper
from constants import LANE_SPACING, MATCH_CLUSTER_THRESHOLD_S, SIDE_GAP, SUBJECT_CLUSTER_THRESHOLD_S

logger = logging.getLogger(__name__)

ENTRY_COLUMNS = [
    "event_id",
    "event_name",
    "sub_event_name",
    "category",
    "team_id",
    "player_id",
    "absolute_second",
    "clock_label",
    "cluster_id",
    "lane_offset",
    "side",
    "display_offset",
]


class LayoutMode(str, Enum):
    MATCH = "match"      # home above the axis, away below
    SUBJECT = "subject"  # one player/team, no sides


@dataclass(frozen=True)
class TimelineEntry:
    event: MatchEvent
    absolute_second: float
    cluster_id: int
    lane_offset: float
    category: EventCategory = EventCategory.OTHER
    side: int = 0
    display_offset: float = 0.0
    clock_label: str = ""


@dataclass
class _Cluster:
    cluster_id: int
    anchor: float
    members: list[tuple[float, MatchEvent]] = field(default_factory=list)


class TimelineLayoutEngine:
    """Greedy clustering and lane assignment for timeline markers."""

    def __init__(
        self,
        threshold: float = MATCH_CLUSTER_THRESHOLD_S,
        lane_spacing: float = LANE_SPACING,
        *,
        mode: LayoutMode | str = LayoutMode.MATCH,
        side_gap: float = SIDE_GAP,
        mapper: TimelineMapper = DEFAULT_MAPPER,
        classifier: EventClassifier = DEFAULT_CLASSIFIER,
    ):
        if threshold <= 0:
            raise ValueError(f"threshold must be positive, got {threshold}")
        if lane_spacing < 0:
            raise ValueError(f"lane_spacing must be non-negative, got {lane_spacing}")
        self.threshold = float(threshold)
        self.lane_spacing = float(lane_spacing)
        self.mode = LayoutMode(mode)
        self.side_gap = float(side_gap)
        self.mapper = mapper
        self.classifier = classifier

    @classmethod
    def whole_match(cls, **kwargs) -> "TimelineLayoutEngine":
        kwargs.setdefault("threshold", MATCH_CLUSTER_THRESHOLD_S)
        return cls(mode=LayoutMode.MATCH, **kwargs)

    @classmethod
    def single_subject(cls, **kwargs) -> "TimelineLayoutEngine":
        kwargs.setdefault("threshold", SUBJECT_CLUSTER_THRESHOLD_S)
        return cls(mode=LayoutMode.SUBJECT, **kwargs)

    def lane_offsets(self, size: int) -> list[float]:
        """Symmetric offsets ``(j - (N-1)/2) * spacing`` for an N-member cluster."""
        centre = (size - 1) / 2.0
        return [(j - centre) * self.lane_spacing for j in range(size)]

    def cluster(self, events: Iterable[MatchEvent]) -> list[_Cluster]:
        timed = [(self.mapper.absolute_second(event), event) for event in events]
        # Stable sort: simultaneous events keep arrival order.
        timed.sort(key=lambda pair: pair[0])

        clusters: list[_Cluster] = []
        for second, event in timed:
            target = next((c for c in clusters if abs(c.anchor - second) < self.threshold), None)
            if target is None:
                target = _Cluster(cluster_id=len(clusters), anchor=second)
                clusters.append(target)
            target.members.append((second, event))
        return clusters

    def _side(self, event: MatchEvent, home_team_id: str | None) -> int:
        if self.mode is LayoutMode.SUBJECT:
            return 0
        return 1 if event.team_id == home_team_id else -1

    def layout(
        self,
        events: Iterable[MatchEvent],
        *,
        home_team_id: str | None = None,
        player_id: str | None = None,
    ) -> list[TimelineEntry]:
        """Entries ordered by absolute second, with cluster and lane assigned."""
        if self.mode is LayoutMode.MATCH and home_team_id is None:
            raise ValueError("whole-match timelines need home_team_id to place events above or below the axis")

        selected = list(events)
        if player_id is not None:
            selected = [event for event in selected if event.player_id == player_id]

        entries: list[TimelineEntry] = []
        for cluster in self.cluster(selected):
            offsets = self.lane_offsets(len(cluster.members))
            # Each side stacks its own members outward from the gap.
            side_lanes = {1: 0, -1: 0}
            for (second, event), lane_offset in zip(cluster.members, offsets):
                side = self._side(event, home_team_id)
                if side:
                    display = side * (self.side_gap + side_lanes[side] * self.lane_spacing)
                    side_lanes[side] += 1
                else:
                    display = lane_offset
                entries.append(
                    TimelineEntry(
                        event=event,
                        absolute_second=second,
                        cluster_id=cluster.cluster_id,
                        lane_offset=lane_offset,
                        category=self.classifier.classify(event),
                        side=side,
                        display_offset=display,
                        clock_label=self.mapper.format_clock(second),
                    )
                )

        entries.sort(key=lambda entry: entry.absolute_second)
        logger.debug("laid out %d timeline events", len(entries))
        return entries


def entries_frame(entries: Iterable[TimelineEntry]) -> pd.DataFrame:
    rows = [
        {
            "event_id": entry.event.event_id,
            "event_name": entry.event.event_name,
            "sub_event_name": entry.event.sub_event_name,
            "category": entry.category.value,
            "team_id": entry.event.team_id,
            "player_id": entry.event.player_id,
            "absolute_second": entry.absolute_second,
            "clock_label": entry.clock_label,
            "cluster_id": entry.cluster_id,
            "lane_offset": entry.lane_offset,
            "side": entry.side,
            "display_offset": entry.display_offset,
        }
        for entry in entries
    ]
    return pd.DataFrame(rows, columns=ENTRY_COLUMNS)
