import unittest

import pytest

from analytics.classification import DEFAULT_CLASSIFIER, ClassifiedEvent, EventClassifier, classify, is_successful
from analytics.schema import MatchEvent
from analytics.taxonomy import CATEGORY_KEYWORDS, CATEGORY_PRIORITY, EventCategory, TagTaxonomy


def _event(name="Pass", sub=None, tags=(), period="1H", second=10.0, start=None, end=None):
    sx, sy = start if start else (None, None)
    ex, ey = end if end else (None, None)
    return MatchEvent(
        event_name=name,
        sub_event_name=sub,
        match_period=period,
        event_second=second,
        team_id="home",
        tags=tags,
        start_x=sx,
        start_y=sy,
        end_x=ex,
        end_y=ey,
    )


@pytest.mark.parametrize(
    "name,sub,expected",
    [
        ("Goal", None, EventCategory.GOAL),
        ("Shot", None, EventCategory.SHOT),
        ("Удар по воротам", None, EventCategory.SHOT),
        ("Голевая передача", None, EventCategory.ASSIST),
        ("Pass", "Cross", EventCategory.PASS),
        ("Cross", None, EventCategory.PASS),
        ("Free Kick", "Shot", EventCategory.SHOT),
        ("Ground attacking duel", None, EventCategory.DUEL),
        ("Foul", "Hand foul", EventCategory.FOUL),
        ("Dribble", None, EventCategory.DRIBBLE),
        ("Sliding tackle", None, EventCategory.TACKLE),
        ("Interception", None, EventCategory.INTERCEPTION),
        ("Ball recovery", None, EventCategory.RECOVERY),
        ("Offside", None, EventCategory.OTHER),
    ],
)
def test_classify_by_keyword_priority(name, sub, expected):
    assert classify(_event(name=name, sub=sub)) is expected


def test_classify_is_deterministic():
    event = _event(name="Shot", sub="Goal attempt")
    assert {classify(event) for _ in range(5)} == {EventCategory.GOAL}


class TagFactTests(unittest.TestCase):
    def test_success_tag_defines_successful(self):
        self.assertTrue(is_successful(_event(tags=[1801])))
        self.assertFalse(is_successful(_event(tags=[1802, 101])))

    def test_on_target_accepts_on_target_or_success_tag(self):
        clf = DEFAULT_CLASSIFIER
        self.assertTrue(clf.is_on_target(_event(name="Shot", tags=[101])))
        self.assertTrue(clf.is_on_target(_event(name="Shot", tags=[1801])))
        self.assertFalse(clf.is_on_target(_event(name="Shot", tags=[])))

    def test_duels_are_aerial_or_ground(self):
        clf = DEFAULT_CLASSIFIER
        aerial = clf.tag(_event(name="Duel", tags=[15]))
        ground = clf.tag(_event(name="Duel"))
        self.assertTrue(clf.is_aerial(aerial))
        self.assertFalse(clf.is_ground_duel(aerial))
        self.assertTrue(clf.is_ground_duel(ground))
        not_a_duel = clf.tag(_event(name="Pass", tags=[15]))
        self.assertFalse(clf.is_aerial(not_a_duel))
        self.assertFalse(clf.is_ground_duel(not_a_duel))

    def test_cross_by_keyword_or_tag(self):
        clf = DEFAULT_CLASSIFIER
        self.assertTrue(clf.is_cross(clf.tag(_event(name="Pass", sub="Cross"))))
        self.assertTrue(clf.is_cross(clf.tag(_event(name="Pass", tags=[2]))))
        self.assertFalse(clf.is_cross(clf.tag(_event(name="Pass", sub="Simple pass"))))

    def test_foul_suffered_needs_foul_category(self):
        clf = DEFAULT_CLASSIFIER
        self.assertTrue(clf.is_foul_suffered(clf.tag(_event(name="Foul", tags=[1701]))))
        self.assertFalse(clf.is_foul_suffered(clf.tag(_event(name="Duel", tags=[1701]))))


class SpatialFactTests(unittest.TestCase):
    def test_forward_and_backward_need_both_points(self):
        clf = DEFAULT_CLASSIFIER
        self.assertTrue(clf.is_forward(_event(start=(40, 50), end=(60, 50))))
        self.assertTrue(clf.is_backward(_event(start=(40, 50), end=(20, 50))))
        level = _event(start=(40, 50), end=(40, 80))
        self.assertFalse(clf.is_forward(level))
        self.assertFalse(clf.is_backward(level))
        self.assertFalse(clf.is_forward(_event(start=(40, 50))))

    def test_box_zone_is_inclusive(self):
        clf = DEFAULT_CLASSIFIER
        self.assertTrue(clf.is_from_box(_event(start=(50, 20))))
        self.assertTrue(clf.is_from_box(_event(start=(100, 80))))
        self.assertFalse(clf.is_from_box(_event(start=(49.9, 50))))
        self.assertFalse(clf.is_from_box(_event(start=(70, 81))))
        self.assertFalse(clf.is_from_box(_event()))

    def test_from_outside_needs_a_located_shot(self):
        clf = DEFAULT_CLASSIFIER
        self.assertTrue(clf.is_from_outside(clf.tag(_event(name="Shot", start=(30, 50)))))
        self.assertFalse(clf.is_from_outside(clf.tag(_event(name="Shot", start=(80, 50)))))
        self.assertFalse(clf.is_from_outside(clf.tag(_event(name="Shot"))))
        self.assertFalse(clf.is_from_outside(clf.tag(_event(name="Pass", start=(30, 50)))))


class ClassifierConfigurationTests(unittest.TestCase):
    def test_taxonomy_override_changes_success_code(self):
        clf = EventClassifier(taxonomy=TagTaxonomy.from_mapping({"success": 9999}))
        self.assertTrue(clf.is_successful(_event(tags=[9999])))
        self.assertFalse(clf.is_successful(_event(tags=[1801])))

    def test_taxonomy_rejects_unknown_names_and_non_integers(self):
        with self.assertRaisesRegex(ValueError, "unknown tag names"):
            TagTaxonomy.from_mapping({"offside": 3})
        with self.assertRaisesRegex(ValueError, "integers"):
            TagTaxonomy.from_mapping({"success": "yes"})

    def test_injected_keywords_extend_categories(self):
        keywords = dict(CATEGORY_KEYWORDS)
        keywords[EventCategory.RECOVERY] = ("recovery", "clearance")
        clf = EventClassifier(keywords=keywords)
        self.assertIs(clf.classify(_event(name="Clearance")), EventCategory.RECOVERY)
        self.assertIs(classify(_event(name="Clearance")), EventCategory.OTHER)

    def test_priority_without_keywords_rejected(self):
        keywords = {category: CATEGORY_KEYWORDS[category] for category in CATEGORY_PRIORITY[:3]}
        with self.assertRaisesRegex(ValueError, "without keywords"):
            EventClassifier(keywords=keywords)

    def test_classified_event_marks_goals_as_shots(self):
        item = ClassifiedEvent(event=_event(name="Goal"), category=EventCategory.GOAL)
        self.assertTrue(item.is_shot)


def test_facts_frame_is_in_match_order():
    events = [
        _event(name="Shot", period="2H", second=10.0, start=(80, 50)),
        _event(name="Pass", period="1H", second=50.0, tags=[1801], start=(20, 50), end=(40, 50)),
        _event(name="Duel", period="1H", second=5.0, tags=[15]),
    ]
    df = DEFAULT_CLASSIFIER.facts_frame(events)

    assert df["event_name"].tolist() == ["Duel", "Pass", "Shot"]
    assert df["match_period"].astype(str).tolist() == ["1H", "1H", "2H"]
    pass_row = df.iloc[1]
    assert pass_row["category"] == "Pass"
    assert bool(pass_row["is_successful"]) is True
    assert bool(pass_row["is_forward"]) is True
    assert bool(df.iloc[0]["is_aerial"]) is True
    assert bool(df.iloc[2]["is_from_box"]) is True
