from __future__ import annotations

from datetime import datetime, timedelta, timezone
import unittest

from graphon_plot import (
    ChartAxes,
    ChartConfig,
    ChartLayout,
    ChartState,
    ChartStateError,
    DateAxisPolicy,
    InvalidConfigurationError,
    LineChart,
    LineData,
    NumericAxisPolicy,
    StaticChartDataSource,
)


class CountingSource:
    def __init__(self, *lines: LineData) -> None:
        self.lines = list(lines)
        self.calls = 0

    def get_series(self) -> list[LineData]:
        self.calls += 1
        return list(self.lines)


class RecordingRenderer:
    def __init__(self) -> None:
        self.layouts: list[ChartLayout] = []

    def render(self, layout: ChartLayout) -> None:
        self.layouts.append(layout)


class ExplodingPolicy(NumericAxisPolicy):
    def value_at(self, index: int) -> float:
        raise RuntimeError("policy failure")


def _square_series() -> LineData:
    return LineData.from_pairs("squares", [(0, 0), (1, 1), (2, 4)])


class LineChartConstructionTests(unittest.TestCase):
    def test_missing_data_source_fails_fast(self) -> None:
        with self.assertRaises(InvalidConfigurationError):
            LineChart(None)  # type: ignore[arg-type]

    def test_axes_must_be_chart_axes(self) -> None:
        with self.assertRaises(InvalidConfigurationError):
            LineChart(StaticChartDataSource(), axes=NumericAxisPolicy())  # type: ignore[arg-type]

    def test_defaults_to_numeric_axes_from_config(self) -> None:
        chart = LineChart(StaticChartDataSource(), config=ChartConfig(x_tick_target=7))
        self.assertIsInstance(chart.axes.x, NumericAxisPolicy)
        self.assertEqual(chart.axes.x.target_ticks, 7)

    def test_starts_uninitialized_without_loading(self) -> None:
        source = CountingSource(_square_series())
        chart = LineChart(source)
        self.assertIs(chart.state, ChartState.UNINITIALIZED)
        self.assertEqual(source.calls, 0)
        self.assertIsNone(chart.context)

    def test_layout_requires_viewport(self) -> None:
        chart = LineChart(StaticChartDataSource(_square_series()))
        with self.assertRaises(ChartStateError):
            chart.layout()

    def test_rejects_non_positive_viewport(self) -> None:
        chart = LineChart(StaticChartDataSource(_square_series()))
        with self.assertRaises(InvalidConfigurationError):
            chart.attach_viewport(0, 100)


class LineChartLayoutTests(unittest.TestCase):
    def test_first_viewport_loads_exactly_once(self) -> None:
        source = CountingSource(_square_series())
        chart = LineChart(source)
        chart.attach_viewport(100, 100)
        chart.attach_viewport(120, 100)
        chart.layout()
        self.assertEqual(source.calls, 1)
        self.assertEqual(chart.load_count, 1)
        self.assertIs(chart.state, ChartState.LOADED)

    def test_single_series_geometry(self) -> None:
        chart = LineChart(StaticChartDataSource(_square_series()))
        layout = chart.attach_viewport(100, 100)
        ctx = layout.context
        self.assertEqual((ctx.x_min, ctx.x_max, ctx.y_min, ctx.y_max), (0.0, 2.0, 0.0, 4.0))
        self.assertEqual(layout.transform.apply(2.0, 4.0), (80.0, 20.0))
        self.assertEqual(layout.paths[0].points, ((20.0, 80.0), (50.0, 65.0), (80.0, 20.0)))
        self.assertEqual((layout.x_axis.start, layout.x_axis.end), ((20.0, 80.0), (80.0, 80.0)))
        self.assertEqual((layout.y_axis.start, layout.y_axis.end), ((20.0, 80.0), (20.0, 20.0)))
        self.assertEqual(len(layout.updates), 3)
        self.assertEqual(chart.point_views[2].point, (75.0, 15.0))

    def test_tick_and_label_geometry(self) -> None:
        chart = LineChart(StaticChartDataSource(_square_series()))
        layout = chart.attach_viewport(100, 100)

        x_ticks = {t.value: t for t in layout.ticks_for("x")}
        self.assertEqual(sorted(x_ticks), [0.5, 1.0, 1.5, 2.0])
        self.assertEqual((x_ticks[1.0].start, x_ticks[1.0].end), ((50.0, 75.0), (50.0, 85.0)))
        x_labels = {lbl.text: lbl for lbl in layout.labels_for("x")}
        self.assertEqual(sorted(x_labels), ["0.5", "1", "1.5", "2"])
        self.assertEqual(x_labels["1"].anchor, (50.0, 88.0))
        self.assertEqual(x_labels["1"].align, "top-center")

        y_ticks = {t.value: t for t in layout.ticks_for("y")}
        self.assertEqual(sorted(y_ticks), [1.0, 2.0, 3.0, 4.0])
        self.assertEqual((y_ticks[2.0].start, y_ticks[2.0].end), ((15.0, 50.0), (25.0, 50.0)))
        y_labels = {lbl.text: lbl for lbl in layout.labels_for("y")}
        self.assertEqual(y_labels["2"].anchor, (12.0, 50.0))
        self.assertEqual(y_labels["2"].align, "middle-right")

    def test_origin_ticks_suppressed_when_zero_in_bounds(self) -> None:
        chart = LineChart(StaticChartDataSource(LineData.from_pairs("s", [(-2, -1), (2, 3)])))
        layout = chart.attach_viewport(200, 200)
        self.assertNotIn(0.0, [t.value for t in layout.ticks_for("x")])
        self.assertNotIn("0", [lbl.text for lbl in layout.labels_for("x")])
        self.assertNotIn(0.0, [t.value for t in layout.ticks_for("y")])
        self.assertNotIn("0", [lbl.text for lbl in layout.labels_for("y")])
        self.assertEqual(len(layout.ticks_for("x")), 4)

    def test_all_negative_domain_draws_every_tick(self) -> None:
        chart = LineChart(StaticChartDataSource(LineData.from_pairs("neg", [(-3, 1), (-1, 2)])))
        layout = chart.attach_viewport(100, 100)
        self.assertEqual([t.value for t in layout.ticks_for("x")], [-3.0, -2.5, -2.0, -1.5, -1.0])
        self.assertEqual(len(layout.labels_for("x")), 5)
        # Y axis line sits at x=0, right of the plotted data.
        self.assertGreater(layout.y_axis.start[0], 80.0)

    def test_single_point_uses_margin_anchor(self) -> None:
        chart = LineChart(StaticChartDataSource(LineData.from_pairs("one", [(5, 5)])))
        layout = chart.attach_viewport(100, 100)
        self.assertEqual(layout.paths[0].points, ((20.0, 80.0),))
        self.assertEqual(layout.markers[0].point, (15.0, 75.0))

    def test_empty_source_yields_axis_only_chart(self) -> None:
        chart = LineChart(StaticChartDataSource())
        layout = chart.attach_viewport(100, 100)
        self.assertEqual(layout.paths, ())
        self.assertEqual(layout.markers, ())
        self.assertEqual(layout.ticks, ())
        self.assertEqual(layout.context.domain, 0.0)

    def test_none_from_source_is_treated_as_empty(self) -> None:
        class NoneSource:
            def get_series(self):
                return None

        layout = LineChart(NoneSource()).attach_viewport(50, 50)
        self.assertEqual(layout.paths, ())

    def test_repeated_pass_produces_no_updates(self) -> None:
        chart = LineChart(StaticChartDataSource(_square_series()))
        chart.attach_viewport(100, 100)
        self.assertEqual(chart.layout().updates, ())

    def test_resize_updates_only_moved_points(self) -> None:
        chart = LineChart(StaticChartDataSource(_square_series()))
        chart.attach_viewport(100, 100)
        layout = chart.attach_viewport(200, 100)
        self.assertEqual([u.entry_index for u in layout.updates], [1, 2])

    def test_series_order_is_reversed_for_stroking(self) -> None:
        first = LineData.from_pairs("first", [(0, 0), (1, 1)], color=(255, 0, 0, 255))
        second = LineData.from_pairs("second", [(0, 1), (1, 0)], color=(0, 255, 0, 255))
        layout = LineChart(StaticChartDataSource(first, second)).attach_viewport(100, 100)
        self.assertEqual([p.name for p in layout.paths], ["second", "first"])
        self.assertEqual([(m.series_index, m.entry_index) for m in layout.markers], [(1, 1), (1, 0), (0, 1), (0, 0)])
        self.assertEqual(layout.markers[0].color, (0, 255, 0, 255))
        self.assertEqual(layout.markers[0].size, 10.0)

    def test_reload_replaces_views_and_bounds(self) -> None:
        source = CountingSource(_square_series())
        chart = LineChart(source)
        chart.attach_viewport(100, 100)
        old_views = chart.point_views
        source.lines = [LineData.from_pairs("new", [(0, 0), (10, 10)])]
        layout = chart.reload()
        assert layout is not None
        self.assertEqual(source.calls, 2)
        self.assertEqual(chart.load_count, 2)
        self.assertEqual(layout.context.x_max, 10.0)
        self.assertEqual(len(layout.updates), 2)
        old_ids = {id(v) for v in old_views}
        self.assertFalse(any(id(v) in old_ids for v in chart.point_views))

    def test_failed_reload_keeps_previous_data(self) -> None:
        class FlakySource(CountingSource):
            def get_series(self) -> list[LineData]:
                if self.calls >= 1:
                    self.calls += 1
                    raise OSError("source offline")
                return super().get_series()

        source = FlakySource(LineData.from_pairs("s", [(0, 0), (1, 1)]))
        chart = LineChart(source)
        chart.attach_viewport(100, 100)
        with self.assertRaises(OSError):
            chart.reload()
        self.assertEqual(chart.load_count, 1)
        layout = chart.attach_viewport(120, 100)
        self.assertEqual((layout.context.x_max, layout.context.y_max), (1.0, 1.0))
        self.assertEqual(len(layout.markers), 2)

    def test_reload_before_viewport_defers_layout(self) -> None:
        source = CountingSource(_square_series())
        chart = LineChart(source)
        self.assertIsNone(chart.reload())
        self.assertIs(chart.state, ChartState.LOADED)
        chart.attach_viewport(100, 100)
        self.assertEqual(source.calls, 1)

    def test_renderer_receives_each_pass(self) -> None:
        renderer = RecordingRenderer()
        chart = LineChart(StaticChartDataSource(_square_series()), renderer=renderer)
        layout = chart.attach_viewport(100, 100)
        chart.layout()
        self.assertEqual(len(renderer.layouts), 2)
        self.assertIs(renderer.layouts[0], layout)

    def test_policy_errors_propagate(self) -> None:
        axes = ChartAxes(x=ExplodingPolicy(), y=NumericAxisPolicy())
        chart = LineChart(StaticChartDataSource(_square_series()), axes=axes)
        with self.assertRaises(RuntimeError):
            chart.attach_viewport(100, 100)

    def test_custom_config_geometry(self) -> None:
        config = ChartConfig(edge_margin=10.0, tick_size=4.0, point_size=6.0)
        layout = LineChart(StaticChartDataSource(_square_series()), config=config).attach_viewport(100, 100)
        self.assertEqual(layout.transform.apply(2.0, 4.0), (90.0, 10.0))
        tick = next(t for t in layout.ticks_for("x") if t.value == 1.0)
        self.assertEqual((tick.start, tick.end), ((50.0, 88.0), (50.0, 92.0)))
        self.assertEqual(layout.markers[0].point, (87.0, 7.0))

    def test_date_axis_chart(self) -> None:
        start = datetime(2024, 3, 1, tzinfo=timezone.utc)
        line = LineData.from_pairs("temps", [(start + timedelta(days=i), float(i % 3)) for i in range(5)])
        axes = ChartAxes(x=DateAxisPolicy(), y=NumericAxisPolicy())
        layout = LineChart(StaticChartDataSource(line), axes=axes).attach_viewport(240, 120)
        # The Y axis is placed at the first date, i.e. the left plot edge.
        self.assertAlmostEqual(layout.y_axis.start[0], 20.0, places=6)
        self.assertEqual(layout.labels_for("x")[0].text, "2024-03-01")
        self.assertNotIn(start, [t.value for t in layout.ticks_for("x")])
        self.assertAlmostEqual(layout.paths[0].points[-1][0], 220.0, places=6)

    def test_logs_load_and_pass(self) -> None:
        chart = LineChart(StaticChartDataSource(_square_series()))
        with self.assertLogs("graphon_plot.chart", level="DEBUG") as captured:
            chart.attach_viewport(100, 100)
        output = "\n".join(captured.output)
        self.assertIn("loaded 1 series (3 entries)", output)
        self.assertIn("3/3 points moved", output)

    def test_warns_on_viewport_smaller_than_margins(self) -> None:
        chart = LineChart(StaticChartDataSource(_square_series()))
        with self.assertLogs("graphon_plot.chart", level="WARNING"):
            layout = chart.attach_viewport(30, 30)
        self.assertEqual(layout.transform.apply(2.0, 4.0), (20.0, 20.0))


if __name__ == "__main__":
    unittest.main()
