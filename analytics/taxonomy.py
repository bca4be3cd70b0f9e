"""Event taxonomy: tag codes and the bilingual category keyword table.

Tag codes belong to the upstream tagging feed, so they are carried as data
(``TagTaxonomy``) and injected into the classifier instead of being spelled
out at call sites.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from types import MappingProxyType
from typing import Mapping

from constants import TAG_CODES


class EventCategory(str, Enum):
    GOAL = "Goal"
    SHOT = "Shot"
    PASS = "Pass"
    FOUL = "Foul"
    DUEL = "Duel"
    DRIBBLE = "Dribble"
    TACKLE = "Tackle"
    INTERCEPTION = "Interception"
    RECOVERY = "Recovery"
    ASSIST = "Assist"
    OTHER = "Other"

    @classmethod
    def parse(cls, raw: object) -> "EventCategory":
        if isinstance(raw, cls):
            return raw
        token = str(raw or "").strip()
        member = cls.__members__.get(token.upper())
        if member is not None:
            return member
        for category in cls:
            if category.value.lower() == token.lower():
                return category
        raise ValueError(f"unknown event category: {raw}")


# Categories that count as shots in aggregates.
SHOT_CATEGORIES = frozenset({EventCategory.SHOT, EventCategory.GOAL})

# First match wins. Assist precedes Goal because "голевая передача" contains
# "гол"; Goal precedes Shot because goal names often mention the shot.
CATEGORY_PRIORITY = (
    EventCategory.ASSIST,
    EventCategory.GOAL,
    EventCategory.SHOT,
    EventCategory.PASS,
    EventCategory.FOUL,
    EventCategory.DUEL,
    EventCategory.DRIBBLE,
    EventCategory.TACKLE,
    EventCategory.INTERCEPTION,
    EventCategory.RECOVERY,
)

CATEGORY_KEYWORDS: Mapping[EventCategory, tuple[str, ...]] = MappingProxyType(
    {
        EventCategory.ASSIST: ("assist", "ассист", "голевая передача"),
        EventCategory.GOAL: ("goal", "гол"),
        EventCategory.SHOT: ("shot", "удар"),
        EventCategory.PASS: ("pass", "передача", "cross", "кросс"),
        EventCategory.FOUL: ("foul", "фол"),
        EventCategory.DUEL: ("duel", "единоборство"),
        EventCategory.DRIBBLE: ("dribble", "дриблинг"),
        EventCategory.TACKLE: ("tackle", "отбор"),
        EventCategory.INTERCEPTION: ("interception", "перехват"),
        EventCategory.RECOVERY: ("recovery", "подбор"),
    }
)

CROSS_KEYWORDS = ("cross", "кросс")


@dataclass(frozen=True)
class TagTaxonomy:
    """Tag codes the classifier understands."""

    success: int = TAG_CODES["success"]
    on_target: int = TAG_CODES["on_target"]
    foul_suffered: int = TAG_CODES["foul_suffered"]
    aerial: int = TAG_CODES["aerial"]
    cross: int = TAG_CODES["cross"]

    @classmethod
    def from_mapping(cls, codes: Mapping[str, object]) -> "TagTaxonomy":
        """Override default codes; unknown keys are rejected."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(codes) - known)
        if unknown:
            raise ValueError(f"unknown tag names: {unknown}; expected a subset of {sorted(known)}")
        try:
            return cls(**{name: int(code) for name, code in codes.items()})
        except (TypeError, ValueError) as exc:
            raise ValueError(f"tag codes must be integers: {dict(codes)}") from exc

    def as_dict(self) -> dict[str, int]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


DEFAULT_TAXONOMY = TagTaxonomy()
