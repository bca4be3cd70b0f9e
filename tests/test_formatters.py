import unittest

from analytics.contracts import UNAVAILABLE, ratio_contract
from analytics.period_stats import aggregate, stats_frame
from analytics.schema import MatchEvent
from charts.formatters import (
    format_metric_value,
    format_percentage,
    format_rate,
    format_stats_table,
    metric_family,
    title_case_label,
    tooltip_html,
)


class FormatterTests(unittest.TestCase):
    def test_unavailable_renders_placeholder(self):
        self.assertEqual(format_rate(UNAVAILABLE), "—")
        self.assertEqual(format_metric_value(None, "passes"), "—")
        self.assertEqual(format_percentage(ratio_contract(3, 0, scale=100.0)), "—")

    def test_rates_use_two_decimals(self):
        self.assertEqual(format_rate(0.2), "0.20")
        self.assertEqual(format_rate(ratio_contract(18, 90)), "0.20")

    def test_percentages_and_counts(self):
        self.assertEqual(format_percentage(200 / 3), "66.7%")
        self.assertEqual(format_metric_value(1234, "passes"), "1,234")
        self.assertEqual(format_metric_value(45.0, "minutes_played"), "45'")

    def test_metric_family(self):
        self.assertEqual(metric_family("pass_accuracy"), "percent")
        self.assertEqual(metric_family("duel_win_rate"), "percent")
        self.assertEqual(metric_family("successful_actions_per_minute"), "rate")
        self.assertEqual(metric_family("shots"), "integer")
        self.assertEqual(metric_family("minutes_played"), "minutes")

    def test_labels(self):
        self.assertEqual(title_case_label("events_per_minute"), "Events Per Minute")
        self.assertEqual(title_case_label("et1 shots"), "ET1 Shots")
        self.assertEqual(title_case_label(""), "")
        self.assertEqual(tooltip_html("Pass\n1st half 2'\nSuccessful"), "Pass<br>1st half 2'<br>Successful")


def test_format_stats_table_renders_every_cell_as_text():
    events = [MatchEvent(event_name="Pass", match_period="1H", event_second=1.0, team_id="a", tags=[1801])]
    table = format_stats_table(stats_frame(aggregate(events), minutes_played=0))
    rows = table.set_index("metric")
    assert rows.loc["minutes_played", "total"] == "—"
    assert rows.loc["events_per_minute", "1H"] == "—"
    assert rows.loc["passes", "1H"] == "1"
    assert rows.loc["passes", "2H"] == "0"

    with_minutes = format_stats_table(stats_frame(aggregate(events), minutes_played=10)).set_index("metric")
    assert with_minutes.loc["events_per_minute", "total"] == "0.10"
    assert with_minutes.loc["events_per_minute", "1H"] == "0.20"
