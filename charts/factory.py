"""Plotly figure builders over analytics render instructions.

Builders never compute layout or geometry themselves; they draw the entries,
cells and marks produced by ``analytics`` in projected surface coordinates.
"""

from __future__ import annotations

from typing import Sequence

import pandas as pd
import plotly.graph_objects as go

from analytics.density import DensityCell
from analytics.pitch_views import HeatmapView, PassArrow, ShotMark
from analytics.spatial import SpatialProjector
from analytics.timeline import format_clock
from analytics.timeline_layout import TimelineEntry
from charts.formatters import title_case_label, tooltip_html
from charts.rules import sort_rank_desc
from charts.theme import apply_chart_theme, heatmap_colorscale, marker_color, semantic_color
from charts.tokens import ACTIVITY_COLOR, POINT_LAYER_COLOR, SURFACES, TEXT
from constants import ACTIVITY_BIN_S, TIMELINE_HEIGHT_PX, TIMELINE_WIDTH_PX

_TIMELINE_MARKER_SIZE = 12
_TICK_STEP_S = 900


def _clock_ticks(max_second: float, step: int = _TICK_STEP_S) -> list[int]:
    ticks = list(range(0, int(max_second) + 1, step))
    if not ticks or ticks[-1] != int(max_second):
        ticks.append(int(max_second))
    return ticks


def timeline_figure(
    entries: Sequence[TimelineEntry],
    *,
    domain: tuple[float, float],
    dividers: Sequence[dict] = (),
    activity: pd.DataFrame | None = None,
    title: str | None = None,
    width: float = TIMELINE_WIDTH_PX,
    height: float = TIMELINE_HEIGHT_PX,
) -> go.Figure:
    """Markers at (absolute second, display offset) over an optional activity strip."""
    fig = go.Figure()

    if activity is not None and not activity.empty:
        fig.add_trace(
            go.Bar(
                x=activity["bin_center"],
                y=activity["count"],
                width=ACTIVITY_BIN_S * 0.9,
                marker=dict(color=ACTIVITY_COLOR),
                opacity=0.35,
                yaxis="y2",
                hovertemplate="%{y} events<extra></extra>",
                name="activity",
            )
        )

    for divider in dividers:
        fig.add_vline(x=divider["second"], line=dict(color=SURFACES.divider, width=1, dash="dash"))
        fig.add_annotation(
            x=divider["second"],
            y=1.0,
            yref="paper",
            text=divider["label"],
            showarrow=False,
            font=dict(color=TEXT.muted, size=10),
        )

    if entries:
        fig.add_trace(
            go.Scatter(
                x=[e.absolute_second for e in entries],
                y=[e.display_offset for e in entries],
                mode="markers",
                marker=dict(
                    size=_TIMELINE_MARKER_SIZE,
                    color=[marker_color(e.category.value, e.side) for e in entries],
                    line=dict(color=TEXT.inverse, width=1.5),
                ),
                customdata=[
                    [e.event.display_name, e.clock_label, e.category.value] for e in entries
                ],
                hovertemplate="%{customdata[0]}<br>%{customdata[1]}<br>%{customdata[2]}<extra></extra>",
                name="events",
            )
        )

    fig.add_hline(y=0, line=dict(color=SURFACES.axis, width=2))
    ticks = _clock_ticks(domain[1])
    fig.update_layout(
        title=title,
        yaxis2=dict(overlaying="y", side="right", visible=False, rangemode="tozero"),
    )
    fig.update_xaxes(
        range=list(domain),
        tickmode="array",
        tickvals=ticks,
        ticktext=[format_clock(t) for t in ticks],
        showgrid=False,
    )
    fig.update_yaxes(showticklabels=False, showgrid=False)
    return apply_chart_theme(fig, tier="timeline", width=width, height=height)


def _pitch_figure(projector: SpatialProjector, title: str | None) -> go.Figure:
    fig = go.Figure()
    fig.add_shape(
        type="rect",
        x0=0,
        y0=0,
        x1=projector.width,
        y1=projector.height,
        fillcolor=semantic_color("pitch", "grass"),
        line=dict(width=0),
        layer="below",
    )
    line_color = semantic_color("pitch", "lines")
    for marking in projector.pitch_markings():
        points = list(marking.points)
        if marking.closed:
            points.append(points[0])
        path = "M " + " L ".join(f"{x:.2f},{y:.2f}" for x, y in points)
        fig.add_shape(type="path", path=path, line=dict(color=line_color, width=1.5), layer="below")

    fig.update_layout(title=title)
    fig.update_xaxes(range=[0, projector.width], visible=False)
    # Surface coordinates grow downward.
    fig.update_yaxes(range=[projector.height, 0], visible=False, scaleanchor="x", scaleratio=1)
    return apply_chart_theme(fig, tier="pitch", width=projector.width, height=projector.height)


def heatmap_figure(view: HeatmapView, projector: SpatialProjector, *, title: str | None = None) -> go.Figure:
    fig = _pitch_figure(projector, title)
    if view.points:
        fig.add_trace(
            go.Scatter(
                x=[p.x for p in view.points],
                y=[p.y for p in view.points],
                mode="markers",
                marker=dict(size=[p.radius * 2 for p in view.points], color=POINT_LAYER_COLOR),
                opacity=view.points[0].opacity,
                hoverinfo="skip",
                name="events",
            )
        )
    if view.cells:
        fig.add_trace(_cells_trace(view.cells))
    return fig


def _cells_trace(cells: Sequence[DensityCell]) -> go.Scatter:
    return go.Scatter(
        x=[cell.grid_x for cell in cells],
        y=[cell.grid_y for cell in cells],
        mode="markers",
        marker=dict(
            size=[cell.radius * 2 for cell in cells],
            color=[cell.intensity for cell in cells],
            colorscale=heatmap_colorscale(),
            cmin=0,
            cmax=1,
            opacity=[cell.opacity for cell in cells],
            line=dict(width=0),
        ),
        customdata=[cell.count for cell in cells],
        hovertemplate="%{customdata} events<extra></extra>",
        name="density",
    )


def pass_map_figure(arrows: Sequence[PassArrow], projector: SpatialProjector, *, title: str | None = None) -> go.Figure:
    fig = _pitch_figure(projector, title)
    for arrow in arrows:
        color = semantic_color("outcome", arrow.color_class)
        fig.add_trace(
            go.Scatter(
                x=[arrow.start[0], arrow.end[0]],
                y=[arrow.start[1], arrow.end[1]],
                mode="lines+markers",
                line=dict(color=color, width=arrow.line_width, dash="dash" if arrow.dashed else "solid"),
                marker=dict(size=[6, 8], color=color, symbol=["circle", "arrow"], angleref="previous"),
                opacity=arrow.opacity,
                text=tooltip_html(arrow.tooltip),
                hovertemplate="%{text}<extra></extra>",
                name="pass",
            )
        )
    return fig


def shot_map_figure(marks: Sequence[ShotMark], projector: SpatialProjector, *, title: str | None = None) -> go.Figure:
    fig = _pitch_figure(projector, title)
    for mark in marks:
        color = semantic_color("outcome", mark.color_class)
        fig.add_trace(
            go.Scatter(
                x=[mark.start[0], mark.end[0]],
                y=[mark.start[1], mark.end[1]],
                mode="lines",
                line=dict(color=color, width=mark.line_width),
                opacity=0.6,
                hoverinfo="skip",
                name="trajectory",
            )
        )
        fig.add_trace(
            go.Scatter(
                x=[mark.start[0]],
                y=[mark.start[1]],
                mode="markers+text" if mark.label else "markers",
                marker=dict(size=mark.radius * 2, color=color, line=dict(color=TEXT.inverse, width=1)),
                text=[mark.label] if mark.label else None,
                textposition="top center",
                customdata=[tooltip_html(mark.tooltip)],
                hovertemplate="%{customdata}<extra></extra>",
                name="shot",
            )
        )
    return fig


def event_type_bar(stats: pd.DataFrame, *, title: str | None = None, limit: int | None = None) -> go.Figure:
    """Horizontal bars from ``event_summary.event_type_stats``."""
    fig = go.Figure()
    if stats is None or stats.empty:
        fig.update_layout(title=title)
        return apply_chart_theme(fig, tier="detail")

    ranked = sort_rank_desc(stats, "count", label_col="display_name")
    if limit is not None:
        ranked = ranked.head(limit)
    fig.add_trace(
        go.Bar(
            x=ranked["count"],
            y=ranked["display_name"],
            orientation="h",
            marker=dict(color=[semantic_color("category", c) for c in ranked["category"]]),
            hovertemplate="%{y}: %{x}<extra></extra>",
            name=title_case_label("event_types"),
        )
    )
    fig.update_layout(title=title)
    fig.update_yaxes(autorange="reversed")
    return apply_chart_theme(fig, tier="detail")
