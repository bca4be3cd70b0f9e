"""Pitch projection from normalized 0-100 units to an output surface.

Both axes are scaled independently. ``flip`` mirrors X so a team attacking
right-to-left can be drawn on the same surface; Y is never flipped.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

import numpy as np

from constants import (
    CENTER_CIRCLE_R,
    GOAL_AREA_DEPTH,
    GOAL_AREA_WIDTH,
    GOAL_MOUTH_WIDTH,
    PENALTY_AREA_DEPTH,
    PENALTY_AREA_WIDTH,
    PITCH_HEIGHT_PX,
    PITCH_LENGTH_M,
    PITCH_MAX,
    PITCH_MIN,
    PITCH_WIDTH_M,
    PITCH_WIDTH_PX,
)

_SPAN = PITCH_MAX - PITCH_MIN


@dataclass(frozen=True)
class PitchMarking:
    """One pitch line as a projected polyline."""

    name: str
    points: tuple[tuple[float, float], ...]
    closed: bool = False


@dataclass(frozen=True)
class SpatialProjector:
    width: float = PITCH_WIDTH_PX
    height: float = PITCH_HEIGHT_PX
    flip: bool = False

    def __post_init__(self):
        if not self.width > 0 or not self.height > 0:
            raise ValueError(f"surface dimensions must be positive, got {self.width}x{self.height}")

    def project_x(self, x: float) -> float:
        scaled = (float(x) - PITCH_MIN) / _SPAN * self.width
        return self.width - scaled if self.flip else scaled

    def project_y(self, y: float) -> float:
        return (float(y) - PITCH_MIN) / _SPAN * self.height

    def project(self, x: float, y: float) -> tuple[float, float]:
        return self.project_x(x), self.project_y(y)

    def project_many(self, xs: Iterable[float], ys: Iterable[float]) -> tuple[np.ndarray, np.ndarray]:
        """Vectorised ``project`` over coordinate sequences of equal length."""
        x_arr = np.asarray(list(xs), dtype=float)
        y_arr = np.asarray(list(ys), dtype=float)
        if x_arr.shape != y_arr.shape:
            raise ValueError(f"coordinate arrays differ in length: {x_arr.size} vs {y_arr.size}")
        px = (x_arr - PITCH_MIN) / _SPAN * self.width
        if self.flip:
            px = self.width - px
        py = (y_arr - PITCH_MIN) / _SPAN * self.height
        return px, py

    def _polyline(self, name: str, points, *, closed: bool = False) -> PitchMarking:
        return PitchMarking(name=name, points=tuple(self.project(x, y) for x, y in points), closed=closed)

    def pitch_markings(self, *, circle_segments: int = 48) -> list[PitchMarking]:
        """Projected outline, halfway line, centre circle, boxes and goals."""
        mx = _SPAN / PITCH_LENGTH_M  # normalized units per metre along X
        my = _SPAN / PITCH_WIDTH_M
        mid_x = mid_y = PITCH_MIN + _SPAN / 2.0

        def box(name: str, x0: float, depth_m: float, width_m: float) -> PitchMarking:
            x1 = x0 + depth_m * mx if x0 == PITCH_MIN else x0 - depth_m * mx
            half = width_m * my / 2.0
            return self._polyline(
                name,
                [(x0, mid_y - half), (x1, mid_y - half), (x1, mid_y + half), (x0, mid_y + half)],
            )

        angles = np.linspace(0.0, 2.0 * math.pi, circle_segments, endpoint=False)
        circle = [
            (mid_x + CENTER_CIRCLE_R * mx * math.cos(a), mid_y + CENTER_CIRCLE_R * my * math.sin(a))
            for a in angles
        ]

        goal_half = GOAL_MOUTH_WIDTH * my / 2.0
        return [
            self._polyline(
                "outline",
                [(PITCH_MIN, PITCH_MIN), (PITCH_MAX, PITCH_MIN), (PITCH_MAX, PITCH_MAX), (PITCH_MIN, PITCH_MAX)],
                closed=True,
            ),
            self._polyline("halfway_line", [(mid_x, PITCH_MIN), (mid_x, PITCH_MAX)]),
            self._polyline("centre_circle", circle, closed=True),
            box("penalty_area_left", PITCH_MIN, PENALTY_AREA_DEPTH, PENALTY_AREA_WIDTH),
            box("penalty_area_right", PITCH_MAX, PENALTY_AREA_DEPTH, PENALTY_AREA_WIDTH),
            box("goal_area_left", PITCH_MIN, GOAL_AREA_DEPTH, GOAL_AREA_WIDTH),
            box("goal_area_right", PITCH_MAX, GOAL_AREA_DEPTH, GOAL_AREA_WIDTH),
            self._polyline("goal_left", [(PITCH_MIN, mid_y - goal_half), (PITCH_MIN, mid_y + goal_half)]),
            self._polyline("goal_right", [(PITCH_MAX, mid_y - goal_half), (PITCH_MAX, mid_y + goal_half)]),
        ]
