"""Match Event Analytics — shared utility functions.

Small helpers shared by the analytics and charts packages.
"""
import pandas as pd


# ── Value Helpers ───────────────────────────────────────────────────────

def is_missing(value) -> bool:
    """True for None, NaN and pandas NA."""
    if value is None:
        return True
    if isinstance(value, (list, tuple, set, frozenset, dict)):
        return False
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def optional_float(value):
    """Coerce *value* to float, mapping missing markers to None."""
    if is_missing(value):
        return None
    return float(value)


# ── DataFrame Ordering ──────────────────────────────────────────────────

def apply_categorical_order(df: pd.DataFrame, column: str, order) -> pd.DataFrame:
    """Return a copy where *column* is an ordered categorical over *order*.

    Values outside *order* are appended after it so they are never dropped.
    """
    out = df.copy()
    if column not in out.columns:
        return out
    seen = [v for v in pd.unique(out[column].dropna()) if v not in order]
    categories = list(order) + sorted(seen, key=str)
    out[column] = pd.Categorical(out[column], categories=categories, ordered=True)
    return out


def stable_sort(df: pd.DataFrame, by, ascending=True) -> pd.DataFrame:
    """Sort with a stable algorithm so ties keep their input order."""
    if df is None or df.empty:
        return df
    return df.sort_values(by=by, ascending=ascending, kind="mergesort").reset_index(drop=True)
