"""Centralized display formatting for match tables and chart hover text."""

from __future__ import annotations

import re
from typing import Any

import pandas as pd

from analytics.contracts import RatioContract, is_available
from constants import RATE_PRECISION, UNAVAILABLE_TEXT

_ACRONYM_PRESERVE = {
    "1h": "1H",
    "2h": "2H",
    "et1": "ET1",
    "et2": "ET2",
}

_FAMILY_KEYWORDS = {
    "percent": ("accuracy", "success_rate", "win_rate"),
    "rate": ("per_minute",),
    "minutes": ("minutes",),
}


def title_case_label(label: str) -> str:
    """Title-case labels while preserving period codes."""
    if not label:
        return ""
    words = re.split(r"(\s+)", str(label).replace("_", " ").strip())
    out: list[str] = []
    for token in words:
        lowered = token.lower()
        out.append(_ACRONYM_PRESERVE.get(lowered, token.title()))
    return "".join(out)


def metric_family(metric_name: str) -> str:
    name = str(metric_name or "").lower()
    for family, needles in _FAMILY_KEYWORDS.items():
        if any(needle in name for needle in needles):
            return family
    return "integer"


def format_metric_value(value: Any, metric_name: str = "") -> str:
    """Render a metric cell; ``UNAVAILABLE`` and missing values become a dash."""
    if isinstance(value, RatioContract):
        value = value.value
    if not is_available(value):
        return UNAVAILABLE_TEXT
    numeric = pd.to_numeric(pd.Series([value]), errors="coerce").iloc[0]
    if pd.isna(numeric):
        return UNAVAILABLE_TEXT

    fam = metric_family(metric_name)
    if fam == "percent":
        return f"{float(numeric):.1f}%"
    if fam == "rate":
        return f"{float(numeric):.{RATE_PRECISION}f}"
    if fam == "minutes":
        return f"{float(numeric):.0f}'"
    return f"{float(numeric):,.0f}"


def format_rate(value: Any) -> str:
    return format_metric_value(value, "per_minute")


def format_percentage(value: Any) -> str:
    return format_metric_value(value, "accuracy")


def tooltip_html(text: str) -> str:
    """Plain multi-line tooltip text to Plotly hover markup."""
    return str(text).replace("\n", "<br>")


def format_stats_table(df: pd.DataFrame) -> pd.DataFrame:
    """String-formatted copy of ``period_stats.stats_frame`` for display."""
    out = df.copy()
    value_cols = [c for c in out.columns if c not in ("metric", "label")]
    for col in value_cols:
        out[col] = [format_metric_value(value, metric) for value, metric in zip(out[col], out["metric"])]
    return out
