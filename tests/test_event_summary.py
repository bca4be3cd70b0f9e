import pandas as pd

from analytics.event_summary import EVENT_NAME_COLUMNS, EVENT_TYPE_COLUMNS, event_name_summary, event_type_stats
from analytics.schema import MatchEvent


def _event(name, sub=None):
    return MatchEvent(event_name=name, sub_event_name=sub, match_period="1H", event_second=1.0, team_id="home")


def _events():
    return [
        _event("Pass", "Simple pass"),
        _event("Pass", "Simple pass"),
        _event("Pass", "Cross"),
        _event("Shot"),
        _event("Duel", "Ground attacking duel"),
        _event("Duel", "Ground attacking duel"),
        _event("Pass", "Simple pass"),
    ]


def test_event_type_stats_sorted_by_count_then_name():
    df = event_type_stats(_events())
    assert list(df.columns) == EVENT_TYPE_COLUMNS
    assert df["display_name"].tolist() == [
        "Pass (Simple pass)",
        "Duel (Ground attacking duel)",
        "Pass (Cross)",
        "Shot",
    ]
    assert df["count"].tolist() == [3, 2, 1, 1]
    assert df["category"].tolist() == ["Pass", "Duel", "Pass", "Shot"]


def test_event_name_summary_groups_name_and_sub_name():
    df = event_name_summary(_events())
    assert list(df.columns) == EVENT_NAME_COLUMNS
    first = df.iloc[0]
    assert (first["event_name"], first["sub_event_name"], first["count"]) == ("Pass", "Simple pass", 3)
    shot = df[df["event_name"] == "Shot"].iloc[0]
    assert pd.isna(shot["sub_event_name"])
    assert shot["count"] == 1
    assert df["count"].sum() == 7


def test_empty_inputs():
    assert event_type_stats([]).empty
    summary = event_name_summary([])
    assert isinstance(summary, pd.DataFrame)
    assert list(summary.columns) == EVENT_NAME_COLUMNS
