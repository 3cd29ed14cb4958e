from __future__ import annotations

from datetime import datetime, timedelta, timezone
import logging
from pathlib import Path

import numpy as np

from graphon_plot import ChartAxes, DateAxisPolicy, LineChart, LineData, NumericAxisPolicy, StaticChartDataSource, series_from_xy
from graphon_plot.raster import RasterRenderer


def _numeric_chart(out_dir: Path) -> Path:
    x = np.linspace(-4.0, 6.0, 21, dtype=np.float64)
    wave = series_from_xy(2.0 * np.sin(x * 0.8), x=x, name="wave", color=(62, 149, 255, 255))
    trend = series_from_xy(0.35 * x - 1.0, x=x, name="trend", color=(255, 159, 10, 255))

    renderer = RasterRenderer()
    chart = LineChart(StaticChartDataSource(wave, trend), renderer=renderer)
    chart.attach_viewport(480, 320)
    return renderer.save_png(out_dir / "line_chart_numeric.png")


def _date_chart(out_dir: Path) -> Path:
    start = datetime(2024, 3, 1, tzinfo=timezone.utc)
    readings = [3.1, 3.4, 2.9, 4.2, 4.8, 4.4, 5.1, 5.6]
    line = LineData.from_pairs(
        "readings",
        [(start + timedelta(days=i), v) for i, v in enumerate(readings)],
        color=(52, 199, 89, 255),
    )
    axes = ChartAxes(DateAxisPolicy(4), NumericAxisPolicy(4))
    renderer = RasterRenderer()
    chart = LineChart(StaticChartDataSource(line), axes, renderer=renderer)
    chart.attach_viewport(560, 300)
    return renderer.save_png(out_dir / "line_chart_dates.png")


def main() -> None:
    logging.basicConfig(level=logging.DEBUG)
    out_dir = Path(__file__).resolve().parent / "out"
    out_dir.mkdir(parents=True, exist_ok=True)
    for path in (_numeric_chart(out_dir), _date_chart(out_dir)):
        print(f"wrote {path}")


if __name__ == "__main__":
    main()
