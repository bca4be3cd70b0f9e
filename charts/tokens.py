"""Immutable design tokens for match charts."""

from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True)
class TypographyScale:
    family: str = "Inter, Segoe UI, Roboto, Helvetica, Arial, sans-serif"
    title: int = 18
    body: int = 12
    annotation: int = 10


@dataclass(frozen=True)
class SpacingScale:
    xs: int = 8
    sm: int = 12
    md: int = 16
    lg: int = 24


@dataclass(frozen=True)
class SurfaceColors:
    canvas: str = "rgba(0,0,0,0)"
    panel: str = "#ffffff"
    tooltip: str = "#111827"
    axis: str = "#d1d5db"
    divider: str = "#9ca3af"


@dataclass(frozen=True)
class TextColors:
    primary: str = "#111827"
    secondary: str = "#4b5563"
    muted: str = "#6b7280"
    inverse: str = "#ffffff"


@dataclass(frozen=True)
class PitchColors:
    grass: str = "#2f7d32"
    stripe: str = "#388e3c"
    lines: str = "#ffffff"


TYPOGRAPHY = TypographyScale()
SPACING = SpacingScale()
SURFACES = SurfaceColors()
TEXT = TextColors()
PITCH = PitchColors()
GRID_OPACITY = 0.12

_NEUTRAL = "#6b7280"

# Keyed by analytics.taxonomy.EventCategory values.
CATEGORY_COLORS = MappingProxyType(
    {
        "Goal": "#22c55e",
        "Shot": "#3b82f6",
        "Pass": "#8b5cf6",
        "Foul": "#ef4444",
        "Dribble": "#10b981",
        "Tackle": "#6366f1",
        "Duel": "#f59e0b",
        "Interception": "#0ea5e9",
        "Recovery": "#14b8a6",
        "Assist": "#84cc16",
        "Other": _NEUTRAL,
    }
)

# Goal markers follow the scoring side instead of the category colour.
SIDE_COLORS = MappingProxyType(
    {
        "home": "#22c55e",
        "away": "#3b82f6",
        "subject": "#22c55e",
    }
)

OUTCOME_COLORS = MappingProxyType(
    {
        "success": "#22c55e",
        "failure": "#ef4444",
        "neutral": _NEUTRAL,
    }
)

ACTIVITY_COLOR = "#86efac"
POINT_LAYER_COLOR = OUTCOME_COLORS["failure"]

# Yellow-orange-red ramp for binned density cells (Plotly [[stop, color], ...]).
HEATMAP_COLORSCALE = (
    (0.00, "#ffffb2"),
    (0.25, "#fecc5c"),
    (0.50, "#fd8d3c"),
    (0.75, "#f03b20"),
    (1.00, "#bd0026"),
)
