"""Deterministic chart sorting rules."""

from __future__ import annotations

import pandas as pd


def _normalize_text(series: pd.Series) -> pd.Series:
    return series.fillna("").astype(str).str.lower()


def sort_rank_desc(df: pd.DataFrame, metric_col: str, *, label_col: str = "display_name") -> pd.DataFrame:
    """Sort a bar-chart table by descending metric with a stable label tie-breaker."""
    rank_df = df.copy()
    rank_df[metric_col] = pd.to_numeric(rank_df[metric_col], errors="coerce").fillna(0)

    sort_cols = [metric_col]
    ascending = [False]
    if label_col in rank_df.columns:
        rank_df["_label_key"] = _normalize_text(rank_df[label_col])
        sort_cols.append("_label_key")
        ascending.append(True)

    sorted_df = rank_df.sort_values(sort_cols, ascending=ascending, kind="mergesort").reset_index(drop=True)
    return sorted_df.drop(columns=[c for c in ["_label_key"] if c in sorted_df.columns])
