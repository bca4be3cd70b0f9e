import unittest

import pytest

from analytics.contracts import UNAVAILABLE, is_available
from analytics.period_stats import (
    BUCKET_KEYS,
    PeriodAggregator,
    PeriodStats,
    accuracy,
    aggregate,
    event_rate,
    merge_stats,
    minutes_by_bucket,
    minutes_for,
    rates,
    stats_frame,
)
from analytics.schema import MatchEvent


def _event(name, period, second=60.0, tags=(), sub=None, start=None, end=None):
    sx, sy = start if start else (None, None)
    ex, ey = end if end else (None, None)
    return MatchEvent(
        event_name=name,
        sub_event_name=sub,
        match_period=period,
        event_second=second,
        team_id="home",
        player_id="9",
        tags=tags,
        start_x=sx,
        start_y=sy,
        end_x=ex,
        end_y=ey,
    )


def _match_events():
    return [
        _event("Shot", "1H", tags=[101], start=(85, 50)),
        _event("Pass", "1H", tags=[1801], sub="Cross", start=(40, 10), end=(90, 50)),
        _event("Pass", "1H", start=(50, 50), end=(30, 50)),
        _event("Goal", "2H", tags=[1801], start=(30, 50)),
        _event("Duel", "2H", tags=[15, 1801]),
        _event("Foul", "2H", tags=[1701]),
        _event("Shot", "2H"),
        _event("Shot", "ET1", start=(90, 50)),
    ]


class PeriodAggregationTests(unittest.TestCase):
    def setUp(self):
        self.stats = aggregate(_match_events())

    def test_buckets_present(self):
        self.assertEqual(set(self.stats), set(BUCKET_KEYS))

    def test_first_half_counts(self):
        first = self.stats["1H"]
        self.assertEqual(first.total_events, 3)
        self.assertEqual(first.shots, 1)
        self.assertEqual(first.shots_on_target, 1)
        self.assertEqual(first.shots_from_box, 1)
        self.assertEqual(first.passes, 2)
        self.assertEqual(first.successful_passes, 1)
        self.assertEqual(first.crosses, 1)
        self.assertEqual(first.forward_passes, 1)
        self.assertEqual(first.backward_passes, 1)

    def test_second_half_counts(self):
        second = self.stats["2H"]
        self.assertEqual(second.total_events, 4)
        self.assertEqual(second.shots, 2)
        self.assertEqual(second.goals, 1)
        self.assertEqual(second.shots_on_target, 1)
        self.assertEqual(second.shots_from_box, 0)
        self.assertEqual(second.shots_from_outside, 1)
        self.assertEqual(second.duels, 1)
        self.assertEqual(second.successful_duels, 1)
        self.assertEqual(second.aerial_duels, 1)
        self.assertEqual(second.ground_duels, 0)
        self.assertEqual(second.fouls, 1)
        self.assertEqual(second.fouls_suffered, 1)

    def test_total_includes_extra_time(self):
        total = self.stats["total"]
        self.assertEqual(total.total_events, 8)
        self.assertEqual(total.shots, 4)
        self.assertEqual(total.shots_from_box, 2)
        self.assertEqual(total.shots_from_outside, 1)
        self.assertNotEqual(total.shots, self.stats["1H"].shots + self.stats["2H"].shots)

    def test_successful_actions_combine_passes_duels_dribbles(self):
        self.assertEqual(self.stats["1H"].successful_actions, 1)
        self.assertEqual(self.stats["2H"].successful_actions, 1)

    def test_wire_keys(self):
        wire = self.stats["1H"].as_dict(wire=True)
        self.assertEqual(wire["totalEvents"], 3)
        self.assertEqual(wire["shotsOnTarget"], 1)
        self.assertNotIn("total_events", wire)

    def test_negative_minutes_rejected(self):
        with self.assertRaises(ValueError):
            aggregate([], minutes_played=-5)

    def test_empty_input_gives_zero_buckets(self):
        stats = PeriodAggregator().aggregate([])
        self.assertEqual(stats["total"], PeriodStats())


def test_regulation_total_equals_sum_of_halves():
    events = [e for e in _match_events() if e.match_period.value in ("1H", "2H")]
    stats = aggregate(events)
    assert stats["total"].shots == stats["1H"].shots + stats["2H"].shots
    assert stats["total"] == merge_stats(stats["1H"], stats["2H"])


def test_event_rate_over_full_match():
    events = [_event("Pass", "1H" if i < 9 else "2H") for i in range(18)]
    stats = aggregate(events, minutes_played=90)
    assert event_rate(stats["total"], "total", 90) == pytest.approx(0.2)
    assert event_rate(stats["1H"], "1H", 90) == pytest.approx(9 / 45)


@pytest.mark.parametrize("minutes", [0, None])
def test_rate_without_playing_time_is_unavailable(minutes):
    stats = aggregate([_event("Pass", "1H")])
    assert event_rate(stats["total"], "total", minutes) is UNAVAILABLE
    bucket_rates = rates(stats, minutes)
    assert not bucket_rates["1H"]["events_per_minute"].available


def test_minutes_split_floors_first_half_and_ceils_second():
    assert minutes_by_bucket(75) == {"1H": 37.0, "2H": 38.0, "total": 75.0}
    assert minutes_for("1H", 1) == 1.0
    assert minutes_for("2H", 1) == 1.0
    assert minutes_for("total", 0) is UNAVAILABLE
    with pytest.raises(ValueError):
        minutes_for("ET1", 90)


def test_one_minute_shows_zero_first_half_but_rates_divide_by_one():
    assert minutes_by_bucket(1)["1H"] == 0.0
    assert minutes_for("1H", 1) == 1.0
    stats = PeriodStats(total_events=3)
    assert event_rate(stats, "1H", 1) == 3.0


def test_accuracy_unavailable_without_attempts():
    stats = aggregate(_match_events())
    first = accuracy(stats["1H"])
    assert first["pass_accuracy"].value == pytest.approx(50.0)
    assert first["shot_accuracy"].value == pytest.approx(100.0)
    assert not is_available(first["duel_win_rate"].value)


def test_stats_frame_adds_minutes_and_rate_rows():
    stats = aggregate(_match_events())
    df = stats_frame(stats, minutes_played=90)
    metrics = df["metric"].tolist()
    assert metrics[0] == "minutes_played"
    assert metrics[-2:] == ["events_per_minute", "successful_actions_per_minute"]
    shots = df.set_index("metric").loc["shots"]
    assert (shots["1H"], shots["2H"], shots["total"]) == (1, 2, 4)

    no_minutes = stats_frame(stats)
    assert "minutes_played" not in no_minutes["metric"].tolist()
