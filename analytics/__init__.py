"""Match event analytics package."""

from analytics.classification import DEFAULT_CLASSIFIER, ClassifiedEvent, EventClassifier, classify
from analytics.contracts import UNAVAILABLE, RatioContract, flatten_ratio_contract, ratio_contract, read_ratio_contract
from analytics.density import DensityBinner
from analytics.period_stats import PeriodAggregator, PeriodStats, aggregate, event_rate, rates
from analytics.report import MatchContext, MatchReport, build_match_report
from analytics.schema import MatchEvent, MatchPeriod, events_from_frame, events_to_frame
from analytics.spatial import SpatialProjector
from analytics.taxonomy import EventCategory, TagTaxonomy
from analytics.timeline import TimelineMapper, absolute_second, format_clock
from analytics.timeline_layout import TimelineEntry, TimelineLayoutEngine

__all__ = [
    "MatchEvent",
    "MatchPeriod",
    "events_from_frame",
    "events_to_frame",
    "EventCategory",
    "TagTaxonomy",
    "EventClassifier",
    "ClassifiedEvent",
    "DEFAULT_CLASSIFIER",
    "classify",
    "UNAVAILABLE",
    "RatioContract",
    "ratio_contract",
    "flatten_ratio_contract",
    "read_ratio_contract",
    "PeriodStats",
    "PeriodAggregator",
    "aggregate",
    "event_rate",
    "rates",
    "TimelineMapper",
    "absolute_second",
    "format_clock",
    "TimelineEntry",
    "TimelineLayoutEngine",
    "SpatialProjector",
    "DensityBinner",
    "MatchContext",
    "MatchReport",
    "build_match_report",
]
