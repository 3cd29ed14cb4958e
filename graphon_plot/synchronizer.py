from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from graphon_plot.context import CoordinateFn, entry_coordinates
from graphon_plot.series import ChartEntry, DataPointView, LineData, Point
from graphon_plot.transform import ChartTransform


@dataclass(frozen=True)
class PointUpdate:
    series_index: int
    entry_index: int
    point: Point


class PointArena:
    """Entries and their point views stored in parallel, flattened in series order.

    Built once per data load and discarded wholesale on reload.
    """

    def __init__(
        self,
        lines: list[LineData],
        *,
        point_size: float,
        x_coordinate: CoordinateFn | None = None,
        y_coordinate: CoordinateFn | None = None,
    ) -> None:
        self.lines = lines
        self.entries: list[ChartEntry] = []
        self.views: list[DataPointView] = []
        self.slices: list[slice] = []
        self._owners: list[tuple[int, int]] = []
        for series_index, line in enumerate(lines):
            start = len(self.entries)
            for entry_index, entry in enumerate(line.entries):
                self.entries.append(entry)
                self.views.append(DataPointView(size=point_size, color=line.color))
                self._owners.append((series_index, entry_index))
            self.slices.append(slice(start, len(self.entries)))
        self.xs, self.ys = entry_coordinates(self.entries, x_coordinate=x_coordinate, y_coordinate=y_coordinate)

    def __len__(self) -> int:
        return len(self.entries)

    def owner(self, flat_index: int) -> tuple[int, int]:
        return self._owners[flat_index]

    def series_coordinates(self, series_index: int) -> tuple[np.ndarray, np.ndarray]:
        sl = self.slices[series_index]
        return self.xs[sl], self.ys[sl]

    def layered_views(self) -> list[tuple[int, DataPointView]]:
        """Views bottom-to-top: later entries sit below earlier ones."""
        return [(i, self.views[i]) for i in range(len(self.views) - 1, -1, -1)]


class PointSynchronizer:
    """Moves point views to their marker position, touching only views that changed."""

    def __init__(self, point_size: float, *, tolerance: float = 1e-9) -> None:
        if tolerance < 0:
            raise ValueError("tolerance must be >= 0")
        self.point_size = point_size
        self.tolerance = tolerance

    def marker_positions(self, transform: ChartTransform, arena: PointArena) -> tuple[np.ndarray, np.ndarray]:
        # Marker origin is its top-left corner; shift so the marker is centred.
        shift = -self.point_size / 2.0
        px, py = transform.apply_many(arena.xs, arena.ys)
        return px + shift, py + shift

    def synchronize(self, transform: ChartTransform, arena: PointArena) -> list[PointUpdate]:
        px, py = self.marker_positions(transform, arena)
        updates: list[PointUpdate] = []
        for i, view in enumerate(arena.views):
            point = (float(px[i]), float(py[i]))
            if self._same(view.point, point):
                continue
            view.point = point
            series_index, entry_index = arena.owner(i)
            updates.append(PointUpdate(series_index=series_index, entry_index=entry_index, point=point))
        return updates

    def _same(self, current: Point | None, candidate: Point) -> bool:
        if current is None:
            return False
        return abs(current[0] - candidate[0]) <= self.tolerance and abs(current[1] - candidate[1]) <= self.tolerance
