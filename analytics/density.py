"""Grid binning of event start points for the action heatmap."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

import numpy as np
import pandas as pd

from analytics.schema import MatchEvent
from constants import (
    DENSITY_BIN_SIZE,
    HEATMAP_OPACITY_RANGE,
    HEATMAP_RADIUS_RANGE,
    POINT_LAYER_OPACITY,
    POINT_LAYER_RADIUS,
)

logger = logging.getLogger(__name__)

CELL_COLUMNS = ["grid_x", "grid_y", "count", "intensity", "radius", "opacity"]

Cell = tuple[float, float]


@dataclass(frozen=True)
class DensityCell:
    """Render instruction for one grid cell, drawn at its lower grid corner."""

    grid_x: float
    grid_y: float
    count: int
    intensity: float
    radius: float
    opacity: float


@dataclass(frozen=True)
class PointMark:
    """Raw event location drawn beneath the cell layer."""

    x: float
    y: float
    radius: float = POINT_LAYER_RADIUS
    opacity: float = POINT_LAYER_OPACITY


def cell_radius(intensity: float) -> float:
    low, high = HEATMAP_RADIUS_RANGE
    return low + (high - low) * float(intensity)


def cell_opacity(intensity: float) -> float:
    low, high = HEATMAP_OPACITY_RANGE
    return min(high, low + (high - low) * float(intensity))


class DensityBinner:
    def __init__(self, bin_size: float = DENSITY_BIN_SIZE):
        if not bin_size > 0:
            raise ValueError(f"bin_size must be positive, got {bin_size}")
        self.bin_size = float(bin_size)

    def _start_points(self, events: Iterable[MatchEvent]) -> np.ndarray:
        points = [(e.start_x, e.start_y) for e in events if e.has_start]
        if not points:
            return np.empty((0, 2), dtype=float)
        return np.asarray(points, dtype=float)

    def bin(self, events: Iterable[MatchEvent]) -> dict[Cell, int]:
        """Count events per ``bin_size`` cell, keyed by the cell's lower corner."""
        events = list(events)
        points = self._start_points(events)
        skipped = len(events) - len(points)
        if skipped:
            logger.debug("skipped %d events without start coordinates", skipped)
        if not len(points):
            return {}

        grid = np.floor(points / self.bin_size) * self.bin_size
        cells, counts = np.unique(grid, axis=0, return_counts=True)
        return {(float(gx), float(gy)): int(n) for (gx, gy), n in zip(cells, counts)}

    @staticmethod
    def intensities(counts: dict[Cell, int]) -> dict[Cell, float]:
        """Normalize each cell count by the busiest cell."""
        if not counts:
            return {}
        peak = max(counts.values())
        return {cell: n / peak for cell, n in counts.items()}

    def cells(self, events: Iterable[MatchEvent]) -> list[DensityCell]:
        counts = self.bin(events)
        out = []
        for (gx, gy), intensity in self.intensities(counts).items():
            out.append(
                DensityCell(
                    grid_x=gx,
                    grid_y=gy,
                    count=counts[(gx, gy)],
                    intensity=intensity,
                    radius=cell_radius(intensity),
                    opacity=cell_opacity(intensity),
                )
            )
        return out

    @staticmethod
    def points(events: Iterable[MatchEvent]) -> list[PointMark]:
        return [PointMark(x=e.start_x, y=e.start_y) for e in events if e.has_start]

    def cells_frame(self, events: Iterable[MatchEvent]) -> pd.DataFrame:
        rows = [
            {
                "grid_x": c.grid_x,
                "grid_y": c.grid_y,
                "count": c.count,
                "intensity": c.intensity,
                "radius": c.radius,
                "opacity": c.opacity,
            }
            for c in self.cells(events)
        ]
        return pd.DataFrame(rows, columns=CELL_COLUMNS)
