"""Event-type tallies for the statistics tables and the event-type bar chart."""

from __future__ import annotations

from typing import Iterable

import pandas as pd

from analytics.classification import DEFAULT_CLASSIFIER, EventClassifier
from analytics.schema import MatchEvent
from utils import is_missing

EVENT_TYPE_COLUMNS = ["display_name", "category", "count"]
EVENT_NAME_COLUMNS = ["event_name", "sub_event_name", "count"]


def _sorted_by_count(df: pd.DataFrame, name_cols: list[str]) -> pd.DataFrame:
    if df.empty:
        return df.reset_index(drop=True)
    keyed = df.copy()
    key_cols = []
    for col in name_cols:
        key = f"_{col}_key"
        keyed[key] = keyed[col].fillna("").astype(str).str.lower()
        key_cols.append(key)
    ordered = keyed.sort_values(
        ["count", *key_cols],
        ascending=[False, *([True] * len(key_cols))],
        kind="mergesort",
    )
    return ordered.drop(columns=key_cols).reset_index(drop=True)


def event_type_stats(
    events: Iterable[MatchEvent],
    classifier: EventClassifier = DEFAULT_CLASSIFIER,
) -> pd.DataFrame:
    """Count events by display name (``"Name (Sub)"``), most frequent first.

    ``category`` is the classified category of the first event seen under
    that display name; it drives the bar colour.
    """
    counts: dict[str, int] = {}
    categories: dict[str, str] = {}
    for item in classifier.classify_all(events):
        name = item.event.display_name
        counts[name] = counts.get(name, 0) + 1
        categories.setdefault(name, item.category.value)

    df = pd.DataFrame(
        [{"display_name": name, "category": categories[name], "count": n} for name, n in counts.items()],
        columns=EVENT_TYPE_COLUMNS,
    )
    return _sorted_by_count(df, ["display_name"])


def event_name_summary(events: Iterable[MatchEvent]) -> pd.DataFrame:
    """Counts per (event name, sub-event name) pair."""
    df = pd.DataFrame(
        [{"event_name": e.event_name, "sub_event_name": e.sub_event_name} for e in events],
        columns=["event_name", "sub_event_name"],
    )
    if df.empty:
        return pd.DataFrame(columns=EVENT_NAME_COLUMNS)
    grouped = (
        df.groupby(["event_name", "sub_event_name"], dropna=False, sort=False)
        .size()
        .reset_index(name="count")
    )
    grouped["sub_event_name"] = [None if is_missing(v) else v for v in grouped["sub_event_name"]]
    return _sorted_by_count(grouped[EVENT_NAME_COLUMNS], ["event_name", "sub_event_name"])
