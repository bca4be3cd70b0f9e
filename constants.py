"""Match Event Analytics — shared constants.

Single source of truth for period timing, tagging taxonomy, pitch zones and
render bounds.
"""

# ── Match periods ───────────────────────────────────────────────────────
PERIOD_ORDER = ["1H", "2H", "ET1", "ET2", "P"]
HALF_PERIODS = ("1H", "2H")

# Absolute match-clock offset (seconds) at which each period starts
PERIOD_OFFSETS = {
    "1H": 0,
    "2H": 2700,   # 45 minutes
    "ET1": 5400,  # 90 minutes
    "ET2": 6300,  # 105 minutes
    "P": 7200,    # 120 minutes, shoot-out
}

PERIOD_LABELS = {
    "1H": "1st half",
    "2H": "2nd half",
    "ET1": "Extra time 1",
    "ET2": "Extra time 2",
    "P": "Penalties",
}

HALF_TIME_SECOND = 2700
FULL_TIME_SECOND = 5400

# ── Tagging taxonomy ────────────────────────────────────────────────────
# Codes come from the upstream event-tagging feed. Override through
# analytics.taxonomy.TagTaxonomy.from_mapping() rather than editing callers.
TAG_CODES = {
    "success": 1801,
    "on_target": 101,
    "foul_suffered": 1701,
    "aerial": 15,
    "cross": 2,
}

# ── Pitch geometry (normalized 0-100 units) ─────────────────────────────
PITCH_MIN = 0.0
PITCH_MAX = 100.0
BOX_X_RANGE = (50.0, 100.0)
BOX_Y_RANGE = (20.0, 80.0)
GOAL_CENTER = (100.0, 50.0)  # Shot end point when the feed omits one

# Real pitch size (metres) used to place the markings in 0-100 units
PITCH_LENGTH_M = 105.0
PITCH_WIDTH_M = 68.0
PENALTY_AREA_DEPTH = 16.5
PENALTY_AREA_WIDTH = 40.3
GOAL_AREA_DEPTH = 5.5
GOAL_AREA_WIDTH = 18.3
GOAL_MOUTH_WIDTH = 7.32
CENTER_CIRCLE_R = 9.15

# ── Output surface defaults (pixels) ────────────────────────────────────
PITCH_WIDTH_PX = 800
PITCH_HEIGHT_PX = 400
TIMELINE_WIDTH_PX = 1200
TIMELINE_HEIGHT_PX = 300

# ── Timeline layout ─────────────────────────────────────────────────────
MATCH_CLUSTER_THRESHOLD_S = 60.0
SUBJECT_CLUSTER_THRESHOLD_S = 30.0
LANE_SPACING = 25.0
SIDE_GAP = 30.0
ACTIVITY_BIN_S = 300  # 5-minute activity strip
MIN_TIMELINE_SPAN_S = FULL_TIME_SECOND

# ── Density heatmap ─────────────────────────────────────────────────────
DENSITY_BIN_SIZE = 5.0
HEATMAP_RADIUS_RANGE = (10.0, 25.0)
HEATMAP_OPACITY_RANGE = (0.3, 0.7)
POINT_LAYER_RADIUS = 4.0
POINT_LAYER_OPACITY = 0.3

# ── Pass / shot maps ────────────────────────────────────────────────────
PASS_LINE_WIDTH = 1.5
CROSS_LINE_WIDTH = 2.5
PASS_OPACITY_SUCCESS = 0.8
PASS_OPACITY_FAILURE = 0.4
SHOT_RADIUS = 4.0
GOAL_RADIUS = 6.0
SHOT_LINE_WIDTH = 2.0
GOAL_LINE_WIDTH = 3.0

# ── Display ─────────────────────────────────────────────────────────────
UNAVAILABLE_TEXT = "—"
RATE_PRECISION = 2
