import pandas as pd

from constants import PERIOD_ORDER
from utils import apply_categorical_order, stable_sort


def test_match_period_order_is_canonical():
    df = pd.DataFrame(
        {
            "match_period": ["ET1", "2H", "P", "1H", "ET2"],
            "event_second": [10, 5, 1, 40, 3],
        }
    )

    ordered = apply_categorical_order(df, "match_period", PERIOD_ORDER)
    ordered = stable_sort(ordered, by=["match_period"], ascending=[True])

    assert ordered["match_period"].astype(str).tolist() == ["1H", "2H", "ET1", "ET2", "P"]


def test_unknown_periods_sort_after_known_ones():
    df = pd.DataFrame({"match_period": ["HT", "2H", "1H"]})

    ordered = stable_sort(apply_categorical_order(df, "match_period", PERIOD_ORDER), by=["match_period"])

    assert ordered["match_period"].astype(str).tolist() == ["1H", "2H", "HT"]


def test_stable_sort_keeps_ties_in_input_order():
    df = pd.DataFrame({"event_second": [5, 1, 5, 1], "event_id": ["a", "b", "c", "d"]})

    ordered = stable_sort(df, by=["event_second"])

    assert ordered["event_id"].tolist() == ["b", "d", "a", "c"]
