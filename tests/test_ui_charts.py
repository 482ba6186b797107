"""Tests for chart scaling and rendering."""

from __future__ import annotations

import io

from rich.console import Console

from genesis_trace.colors import strip
from genesis_trace.output import OutputSink
from genesis_trace.ui import ChartPoint, ChartRenderer
from genesis_trace.ui.charts import pie_shares, resample


def _make_renderer(*, color: bool = False) -> tuple[ChartRenderer, io.StringIO]:
    buffer = io.StringIO()
    console = Console(
        file=buffer,
        width=100,
        force_terminal=color,
        color_system="standard" if color else None,
    )
    return ChartRenderer(output=OutputSink(console)), buffer


def test_bar_lengths_are_proportional_to_the_maximum() -> None:
    charts, buffer = _make_renderer(color=True)
    lines = charts.bar_chart(
        [ChartPoint("a", 50), {"label": "b", "value": 100}, ("zero", 0)],
        width=50,
    )
    plain = [strip(line) for line in lines]
    assert [line.count("█") for line in plain] == [25, 50, 0]
    assert plain[2].startswith("zero ")
    assert strip(buffer.getvalue()).count("\n") == 3


def test_bar_labels_are_padded_and_values_formatted() -> None:
    charts, _ = _make_renderer()
    lines = charts.format_bar_chart(
        [("cpu", 3), ("memory", 6)],
        width=4,
        value_formatter=lambda value: f"{value:.0f}%",
    )
    assert lines == ["cpu    ██   3%", "memory ████ 6%"]


def test_bar_chart_without_labels_or_values() -> None:
    charts, _ = _make_renderer()
    lines = charts.format_bar_chart([("a", 1), ("b", 4)], width=8, show_labels=False, show_values=False)
    assert lines == ["██      ", "████████"]


def test_all_zero_bars_render_empty() -> None:
    charts, _ = _make_renderer()
    lines = charts.format_bar_chart([("a", 0), ("b", 0)], width=5, show_values=False)
    assert lines == ["a      ", "b      "]


def test_pie_shares_sum_to_one_hundred() -> None:
    shares = pie_shares([1, 1, 1])
    assert shares == [33.4, 33.3, 33.3]
    assert round(sum(shares), 6) == 100.0
    assert pie_shares([0, 0]) == [0.0, 0.0]


def test_pie_legend_lines() -> None:
    charts, _ = _make_renderer()
    lines = charts.format_pie_chart([("north", 75), ("south", 25)], legend_width=8, label_width=6)
    assert lines == [
        "◕ north  ██████    75.0% (75)",
        "◔ south  ██        25.0% (25)",
    ]


def test_sparkline_scales_between_min_and_max() -> None:
    charts, buffer = _make_renderer()
    assert charts.format_sparkline([0, 7, 14]) == "▁▄█"
    assert charts.sparkline([1, 2]) == "▁█"
    assert buffer.getvalue() == "▁█\n"
    assert charts.format_sparkline([]) == ""


def test_constant_sparkline_repeats_one_glyph() -> None:
    charts, _ = _make_renderer()
    line = charts.format_sparkline([5, 5, 5, 5])
    assert line == "▅▅▅▅"


def test_line_chart_plots_points_strokes_and_axis() -> None:
    charts, _ = _make_renderer()
    lines = charts.format_line_chart([0, 2, 1], height=3)
    assert lines == [
        " ●│",
        " │●",
        "●│ ",
        "└───┘",
    ]


def test_line_chart_resamples_to_width() -> None:
    assert resample([1, 2, 3, 4], 2) == [1, 3]
    assert resample([1, 2], 4) == [1, 1, 2, 2]
    charts, _ = _make_renderer()
    lines = charts.format_line_chart(list(range(10)), width=5, height=4)
    assert all(len(line) == 5 for line in lines[:-1])
    assert lines[-1] == "└─────┘"


def test_empty_data_shows_placeholder() -> None:
    charts, _ = _make_renderer()
    assert charts.format_bar_chart([]) == ["No data to display"]
    assert charts.format_line_chart([]) == ["No data to display"]
