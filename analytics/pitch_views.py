"""Render instructions for the pitch views: heatmap, pass map and shot map.

All views share the same period and category filters and are expressed in
projected surface coordinates, so a renderer only draws what it is given.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence

from analytics.classification import DEFAULT_CLASSIFIER, ClassifiedEvent, EventClassifier
from analytics.density import DensityBinner, DensityCell, PointMark
from analytics.schema import MatchEvent, MatchPeriod
from analytics.spatial import SpatialProjector
from analytics.taxonomy import EventCategory
from analytics.timeline import event_clock_label
from constants import (
    CROSS_LINE_WIDTH,
    GOAL_CENTER,
    GOAL_LINE_WIDTH,
    GOAL_RADIUS,
    PASS_LINE_WIDTH,
    PASS_OPACITY_FAILURE,
    PASS_OPACITY_SUCCESS,
    SHOT_LINE_WIDTH,
    SHOT_RADIUS,
)

logger = logging.getLogger(__name__)

ALL_PERIODS = "all"
SUCCESS = "success"
FAILURE = "failure"


class PassFilter(str, Enum):
    ALL = "all"
    FORWARD = "forward"
    BACKWARD = "backward"
    CROSS = "cross"

    @classmethod
    def parse(cls, raw: object) -> "PassFilter":
        if isinstance(raw, cls):
            return raw
        try:
            return cls(str(raw).strip().lower())
        except ValueError as exc:
            raise ValueError(f"unknown pass filter: {raw}") from exc


def filter_by_period(events: Iterable[MatchEvent], period: MatchPeriod | str = ALL_PERIODS) -> list[MatchEvent]:
    """Keep events of one period; ``"all"`` keeps everything."""
    if isinstance(period, str) and period.strip().lower() == ALL_PERIODS:
        return list(events)
    wanted = MatchPeriod.parse(period)
    return [event for event in events if event.match_period is wanted]


def filter_by_category(
    events: Iterable[MatchEvent],
    categories: EventCategory | str | Sequence[EventCategory | str] | None = None,
    classifier: EventClassifier = DEFAULT_CLASSIFIER,
) -> list[ClassifiedEvent]:
    """Classify and keep only the requested categories (all when ``None``)."""
    items = classifier.classify_all(events)
    if categories is None:
        return items
    if isinstance(categories, (str, EventCategory)):
        categories = [categories]
    wanted = {EventCategory.parse(category) for category in categories}
    return [item for item in items if item.category in wanted]


def event_tooltip(event: MatchEvent, classifier: EventClassifier = DEFAULT_CLASSIFIER) -> str:
    """Three-line tooltip: display name, period clock, outcome."""
    outcome = "Successful" if classifier.is_successful(event) else "Unsuccessful"
    return f"{event.display_name}\n{event_clock_label(event)}\n{outcome}"


# ── Instruction types ───────────────────────────────────────────────────

@dataclass(frozen=True)
class HeatmapView:
    points: list[PointMark]
    cells: list[DensityCell]

    @property
    def is_empty(self) -> bool:
        return not self.points


@dataclass(frozen=True)
class PassArrow:
    event: MatchEvent
    start: tuple[float, float]
    end: tuple[float, float]
    line_width: float
    opacity: float
    dashed: bool
    color_class: str
    tooltip: str


@dataclass(frozen=True)
class ShotMark:
    event: MatchEvent
    start: tuple[float, float]
    end: tuple[float, float]
    radius: float
    line_width: float
    is_goal: bool
    label: str | None
    color_class: str
    tooltip: str


# ── Views ───────────────────────────────────────────────────────────────

def heatmap_view(
    events: Iterable[MatchEvent],
    projector: SpatialProjector | None = None,
    *,
    period: MatchPeriod | str = ALL_PERIODS,
    categories=None,
    binner: DensityBinner | None = None,
    classifier: EventClassifier = DEFAULT_CLASSIFIER,
) -> HeatmapView:
    """Point layer and binned cell layer in surface coordinates.

    Cell radius and opacity stay in surface-independent units; only the
    positions are projected.
    """
    projector = projector or SpatialProjector()
    binner = binner or DensityBinner()
    selected = [item.event for item in filter_by_category(filter_by_period(events, period), categories, classifier)]
    if not any(event.has_start for event in selected):
        logger.warning("heatmap has no events with coordinates (period=%s)", period)

    points = []
    for mark in binner.points(selected):
        x, y = projector.project(mark.x, mark.y)
        points.append(PointMark(x=x, y=y, radius=mark.radius, opacity=mark.opacity))

    cells = []
    for cell in binner.cells(selected):
        x, y = projector.project(cell.grid_x, cell.grid_y)
        cells.append(
            DensityCell(
                grid_x=x,
                grid_y=y,
                count=cell.count,
                intensity=cell.intensity,
                radius=cell.radius,
                opacity=cell.opacity,
            )
        )
    return HeatmapView(points=points, cells=cells)


def pass_map(
    events: Iterable[MatchEvent],
    projector: SpatialProjector | None = None,
    *,
    period: MatchPeriod | str = ALL_PERIODS,
    pass_filter: PassFilter | str = PassFilter.ALL,
    classifier: EventClassifier = DEFAULT_CLASSIFIER,
) -> list[PassArrow]:
    projector = projector or SpatialProjector()
    pass_filter = PassFilter.parse(pass_filter)
    items = filter_by_category(filter_by_period(events, period), EventCategory.PASS, classifier)

    if pass_filter is PassFilter.FORWARD:
        items = [item for item in items if classifier.is_forward(item.event)]
    elif pass_filter is PassFilter.BACKWARD:
        items = [item for item in items if classifier.is_backward(item.event)]
    elif pass_filter is PassFilter.CROSS:
        items = [item for item in items if classifier.is_cross(item)]

    arrows = []
    for item in items:
        event = item.event
        if not (event.has_start and event.has_end):
            logger.debug("pass %s skipped: missing coordinates", event.event_id)
            continue
        successful = classifier.is_successful(event)
        arrows.append(
            PassArrow(
                event=event,
                start=projector.project(event.start_x, event.start_y),
                end=projector.project(event.end_x, event.end_y),
                line_width=CROSS_LINE_WIDTH if classifier.is_cross(item) else PASS_LINE_WIDTH,
                opacity=PASS_OPACITY_SUCCESS if successful else PASS_OPACITY_FAILURE,
                dashed=not successful,
                color_class=SUCCESS if successful else FAILURE,
                tooltip=event_tooltip(event, classifier),
            )
        )
    return arrows


def shot_map(
    events: Iterable[MatchEvent],
    projector: SpatialProjector | None = None,
    *,
    period: MatchPeriod | str = ALL_PERIODS,
    classifier: EventClassifier = DEFAULT_CLASSIFIER,
) -> list[ShotMark]:
    projector = projector or SpatialProjector()
    items = filter_by_category(
        filter_by_period(events, period), [EventCategory.SHOT, EventCategory.GOAL], classifier
    )

    marks = []
    for item in items:
        event = item.event
        if not event.has_start:
            logger.debug("shot %s skipped: missing start coordinates", event.event_id)
            continue
        end_x, end_y = (event.end_x, event.end_y) if event.has_end else GOAL_CENTER
        is_goal = item.category is EventCategory.GOAL
        on_target = is_goal or classifier.is_on_target(event)
        marks.append(
            ShotMark(
                event=event,
                start=projector.project(event.start_x, event.start_y),
                end=projector.project(end_x, end_y),
                radius=GOAL_RADIUS if is_goal else SHOT_RADIUS,
                line_width=GOAL_LINE_WIDTH if is_goal else SHOT_LINE_WIDTH,
                is_goal=is_goal,
                label="G" if is_goal else None,
                color_class=SUCCESS if on_target else FAILURE,
                tooltip=event_tooltip(event, classifier),
            )
        )
    return marks
