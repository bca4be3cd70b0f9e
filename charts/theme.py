"""Centralized Plotly chart theme helpers."""

from __future__ import annotations

from typing import Any

from .tokens import (
    CATEGORY_COLORS,
    GRID_OPACITY,
    HEATMAP_COLORSCALE,
    OUTCOME_COLORS,
    PITCH,
    SIDE_COLORS,
    SPACING,
    SURFACES,
    TEXT,
    TYPOGRAPHY,
)


def semantic_color(intent: str, variant: str = "default") -> str:
    """Resolve chart colours by intent/variant names.

    Intents: ``category`` (variant = category value), ``outcome``
    (``success``/``failure``), ``side`` (``home``/``away``/``subject``) and
    ``pitch`` (``grass``/``stripe``/``lines``).
    """
    key = (intent or "").lower()
    var = variant or "default"

    if key == "category":
        return CATEGORY_COLORS.get(var, CATEGORY_COLORS["Other"])
    if key == "outcome":
        return OUTCOME_COLORS.get(var.lower(), OUTCOME_COLORS["neutral"])
    if key == "side":
        return SIDE_COLORS.get(var.lower(), CATEGORY_COLORS["Other"])
    if key == "pitch":
        return getattr(PITCH, var.lower(), PITCH.lines)
    return TEXT.primary


def marker_color(category: str, side: int) -> str:
    """Category colour, except goals which take the colour of their side."""
    if category == "Goal":
        if side > 0:
            return SIDE_COLORS["home"]
        if side < 0:
            return SIDE_COLORS["away"]
        return SIDE_COLORS["subject"]
    return semantic_color("category", category)


def heatmap_colorscale() -> list:
    """Return the density heatmap colorscale as a Plotly ``[[stop, colour], ...]`` list."""
    return [[stop, color] for stop, color in HEATMAP_COLORSCALE]


PRESETS = {
    "timeline": {
        "margin": dict(l=SPACING.lg, r=SPACING.lg, t=SPACING.lg, b=SPACING.md),
        "title_size": TYPOGRAPHY.title,
    },
    "pitch": {
        "margin": dict(l=SPACING.sm, r=SPACING.sm, t=SPACING.lg, b=SPACING.sm),
        "title_size": TYPOGRAPHY.title,
    },
    "detail": {
        "margin": dict(l=SPACING.sm, r=SPACING.sm, t=SPACING.md, b=SPACING.sm),
        "title_size": TYPOGRAPHY.body,
    },
}


def apply_chart_theme(fig: Any, tier: str = "detail", *, width: float | None = None, height: float | None = None):
    """Apply shared layout defaults to a Plotly figure."""
    preset = PRESETS.get(tier, PRESETS["detail"])
    layout: dict[str, Any] = dict(
        font=dict(family=TYPOGRAPHY.family, size=TYPOGRAPHY.body, color=TEXT.primary),
        title=dict(font=dict(size=preset["title_size"], color=TEXT.primary), x=0.01, xanchor="left"),
        margin=preset["margin"],
        plot_bgcolor=SURFACES.panel,
        paper_bgcolor=SURFACES.canvas,
        showlegend=False,
        hoverlabel=dict(
            bgcolor=SURFACES.tooltip,
            bordercolor=SURFACES.tooltip,
            font=dict(color=TEXT.inverse, size=TYPOGRAPHY.annotation, family=TYPOGRAPHY.family),
        ),
    )
    if width is not None:
        layout["width"] = width
    if height is not None:
        layout["height"] = height
    fig.update_layout(**layout)

    axis_style = dict(
        showline=False,
        zeroline=False,
        gridcolor=f"rgba(0,0,0,{GRID_OPACITY})",
        tickfont=dict(color=TEXT.secondary, size=TYPOGRAPHY.annotation),
    )
    fig.update_xaxes(**axis_style)
    fig.update_yaxes(**axis_style)
    return fig
