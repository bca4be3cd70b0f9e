"""Event classification.

Every consumer (period stats, timeline colouring, pitch views) reads the
category from one ``EventClassifier`` instead of re-matching names itself.
Facts are pure functions of a ``MatchEvent``; nothing is cached on the event.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping, Sequence

import pandas as pd

from analytics.schema import MatchEvent
from analytics.taxonomy import (
    CATEGORY_KEYWORDS,
    CATEGORY_PRIORITY,
    CROSS_KEYWORDS,
    DEFAULT_TAXONOMY,
    SHOT_CATEGORIES,
    EventCategory,
    TagTaxonomy,
)
from constants import BOX_X_RANGE, BOX_Y_RANGE, PERIOD_ORDER
from utils import apply_categorical_order, stable_sort

FACT_COLUMNS = [
    "category",
    "is_successful",
    "is_on_target",
    "is_aerial",
    "is_cross",
    "is_forward",
    "is_backward",
    "is_from_box",
    "is_from_outside",
    "is_foul_suffered",
]


def _matches(event: MatchEvent, keywords: Iterable[str]) -> bool:
    names = [event.event_name.lower()]
    if event.sub_event_name:
        names.append(event.sub_event_name.lower())
    return any(keyword.lower() in name for keyword in keywords for name in names)


@dataclass(frozen=True)
class ClassifiedEvent:
    """An event tagged with its category, classified exactly once."""

    event: MatchEvent
    category: EventCategory

    @property
    def is_shot(self) -> bool:
        return self.category in SHOT_CATEGORIES


class EventClassifier:
    """Keyword/tag based classifier for raw match events."""

    def __init__(
        self,
        taxonomy: TagTaxonomy = DEFAULT_TAXONOMY,
        keywords: Mapping[EventCategory, Sequence[str]] = CATEGORY_KEYWORDS,
        priority: Sequence[EventCategory] = CATEGORY_PRIORITY,
    ):
        unknown = [category for category in priority if category not in keywords]
        if unknown:
            raise ValueError(f"priority lists categories without keywords: {[c.value for c in unknown]}")
        self.taxonomy = taxonomy
        self._keywords = {category: tuple(keywords[category]) for category in priority}
        self._priority = tuple(priority)

    # ── category ───────────────────────────────────────────────────────

    def classify(self, event: MatchEvent) -> EventCategory:
        for category in self._priority:
            if _matches(event, self._keywords[category]):
                return category
        return EventCategory.OTHER

    def tag(self, event: MatchEvent) -> ClassifiedEvent:
        return ClassifiedEvent(event=event, category=self.classify(event))

    def classify_all(self, events: Iterable[MatchEvent]) -> list[ClassifiedEvent]:
        return [self.tag(event) for event in events]

    # ── tag facts ──────────────────────────────────────────────────────

    def is_successful(self, event: MatchEvent) -> bool:
        return self.taxonomy.success in event.tags

    def is_on_target(self, event: MatchEvent) -> bool:
        return self.taxonomy.on_target in event.tags or self.is_successful(event)

    def is_aerial(self, item: ClassifiedEvent) -> bool:
        """Aerial duel; any non-duel is neither aerial nor ground."""
        return item.category is EventCategory.DUEL and self.taxonomy.aerial in item.event.tags

    def is_ground_duel(self, item: ClassifiedEvent) -> bool:
        return item.category is EventCategory.DUEL and self.taxonomy.aerial not in item.event.tags

    def is_cross(self, item: ClassifiedEvent) -> bool:
        if item.category is not EventCategory.PASS:
            return False
        return _matches(item.event, CROSS_KEYWORDS) or self.taxonomy.cross in item.event.tags

    def is_foul_suffered(self, item: ClassifiedEvent) -> bool:
        return item.category is EventCategory.FOUL and self.taxonomy.foul_suffered in item.event.tags

    # ── spatial facts ──────────────────────────────────────────────────

    @staticmethod
    def is_forward(event: MatchEvent) -> bool:
        if event.start_x is None or event.end_x is None:
            return False
        return event.end_x > event.start_x

    @staticmethod
    def is_backward(event: MatchEvent) -> bool:
        if event.start_x is None or event.end_x is None:
            return False
        return event.end_x < event.start_x

    @staticmethod
    def is_from_box(event: MatchEvent) -> bool:
        if event.start_x is None or event.start_y is None:
            return False
        return (
            BOX_X_RANGE[0] <= event.start_x <= BOX_X_RANGE[1]
            and BOX_Y_RANGE[0] <= event.start_y <= BOX_Y_RANGE[1]
        )

    def is_from_outside(self, item: ClassifiedEvent) -> bool:
        """Shot taken outside the box; shots without a start point are in neither bucket."""
        if not item.is_shot or not item.event.has_start:
            return False
        return not self.is_from_box(item.event)

    # ── tabular view ───────────────────────────────────────────────────

    def facts(self, item: ClassifiedEvent) -> dict[str, object]:
        event = item.event
        return {
            "category": item.category.value,
            "is_successful": self.is_successful(event),
            "is_on_target": self.is_on_target(event),
            "is_aerial": self.is_aerial(item),
            "is_cross": self.is_cross(item),
            "is_forward": self.is_forward(event),
            "is_backward": self.is_backward(event),
            "is_from_box": self.is_from_box(event),
            "is_from_outside": self.is_from_outside(item),
            "is_foul_suffered": self.is_foul_suffered(item),
        }

    def facts_frame(self, events: Iterable[MatchEvent]) -> pd.DataFrame:
        """One row per event, in match order, with identifiers and every derived fact."""
        rows = []
        for item in self.classify_all(events):
            event = item.event
            row = {
                "event_id": event.event_id,
                "event_name": event.event_name,
                "sub_event_name": event.sub_event_name,
                "match_period": event.match_period.value,
                "event_second": event.event_second,
                "team_id": event.team_id,
                "player_id": event.player_id,
            }
            row.update(self.facts(item))
            rows.append(row)
        columns = [
            "event_id",
            "event_name",
            "sub_event_name",
            "match_period",
            "event_second",
            "team_id",
            "player_id",
            *FACT_COLUMNS,
        ]
        df = pd.DataFrame(rows, columns=columns)
        df = apply_categorical_order(df, "match_period", PERIOD_ORDER)
        return stable_sort(df, by=["match_period", "event_second"])


DEFAULT_CLASSIFIER = EventClassifier()


def classify(event: MatchEvent) -> EventCategory:
    """Classify with the default taxonomy and keyword table."""
    return DEFAULT_CLASSIFIER.classify(event)


def is_successful(event: MatchEvent) -> bool:
    return DEFAULT_CLASSIFIER.is_successful(event)


def is_on_target(event: MatchEvent) -> bool:
    return DEFAULT_CLASSIFIER.is_on_target(event)
