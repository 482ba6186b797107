"""Text charts: bars, pie legends, sparklines and line plots."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from ..colors import CODES, visible_width
from ..formatting import number, pad, round_half_up, truncate
from .base import Renderer

SPARK_GLYPHS = "▁▂▃▄▅▆▇█"
PIE_GLYPHS = "○◔◑◕●"
BAR_GLYPH = "█"
POINT_GLYPH = "●"
STROKE_GLYPH = "│"
NO_DATA = "No data to display"

# tenths of a percent
_PIE_UNITS = 1000


@dataclass(frozen=True, slots=True)
class ChartPoint:
    label: str
    value: float


ChartInput = ChartPoint | tuple[str, float] | Mapping[str, Any]


def _points(data: Iterable[ChartInput]) -> list[ChartPoint]:
    points = []
    for item in data:
        if isinstance(item, ChartPoint):
            points.append(item)
        elif isinstance(item, Mapping):
            points.append(ChartPoint(str(item["label"]), float(item["value"])))
        else:
            label, value = item
            points.append(ChartPoint(str(label), float(value)))
    return points


def pie_shares(values: Sequence[float]) -> list[float]:
    """Percentages to one decimal that sum to exactly 100.0 (largest remainder).

    Ties in the remainder go to the earlier slice. A zero total yields zeros.
    """
    total = sum(values)
    if total <= 0:
        return [0.0 for _ in values]
    exact = [value * _PIE_UNITS / total for value in values]
    units = [math.floor(share) for share in exact]
    leftover = _PIE_UNITS - sum(units)
    by_remainder = sorted(range(len(values)), key=lambda i: exact[i] - units[i], reverse=True)
    for index in by_remainder[:leftover]:
        units[index] += 1
    return [unit / 10 for unit in units]


def spark_index(value: float, low: float, high: float) -> int:
    if high == low:
        return len(SPARK_GLYPHS) // 2
    scaled = (value - low) / (high - low)
    return min(len(SPARK_GLYPHS) - 1, math.floor(scaled * (len(SPARK_GLYPHS) - 1)))


def resample(samples: Sequence[float], width: int) -> list[float]:
    """Nearest-bucket resampling to exactly ``width`` columns."""
    count = len(samples)
    if count == width:
        return list(samples)
    return [samples[min(count - 1, math.floor(i * count / width))] for i in range(width)]


class ChartRenderer(Renderer):
    """Stateless chart formatting bound to a theme and output."""

    def _palette(self) -> list[str]:
        colors = self.theme.colors
        return [
            colors.primary,
            colors.accent,
            colors.success,
            colors.warning,
            colors.secondary,
            colors.error,
            colors.info,
        ]

    def format_bar_chart(
        self,
        data: Iterable[ChartInput],
        *,
        width: int = 40,
        show_values: bool = True,
        show_labels: bool = True,
        color: str | None = None,
        value_formatter: Callable[[float], str] | None = None,
    ) -> list[str]:
        """Bars scaled so the largest value spans ``width`` glyphs."""
        points = _points(data)
        if not points:
            return [self.paint(NO_DATA, CODES["dim"])]
        width = max(1, width)
        peak = max(point.value for point in points)
        label_width = max(visible_width(point.label) for point in points)
        render_value = value_formatter or number
        bar_color = color or self.theme.colors.primary

        lines = []
        for point in points:
            ratio = point.value / peak if peak > 0 else 0.0
            length = max(0, round_half_up(width * ratio))
            bar = pad(self.paint(BAR_GLYPH * length, bar_color), width)
            parts = []
            if show_labels:
                parts.append(pad(point.label, label_width))
            parts.append(bar)
            if show_values:
                parts.append(self.paint(render_value(point.value), self.theme.colors.muted))
            lines.append(" ".join(parts))
        return lines

    def bar_chart(self, data: Iterable[ChartInput], **options: Any) -> list[str]:
        return self.emit(self.format_bar_chart(data, **options))

    def format_pie_chart(
        self,
        data: Iterable[ChartInput],
        *,
        legend_width: int = 20,
        label_width: int = 20,
    ) -> list[str]:
        """Legend of slices: glyph, label, proportional block, percentage, value."""
        points = _points(data)
        if not points:
            return [self.paint(NO_DATA, CODES["dim"])]
        if any(point.value < 0 for point in points):
            raise ValueError("Pie chart values must be >= 0.")
        shares = pie_shares([point.value for point in points])
        palette = self._palette()
        lines = []
        for index, (point, share) in enumerate(zip(points, shares)):
            color = palette[index % len(palette)]
            glyph = PIE_GLYPHS[math.floor(share / 100 * (len(PIE_GLYPHS) - 1))]
            block = BAR_GLYPH * round_half_up(share / 100 * legend_width)
            lines.append(
                " ".join(
                    [
                        self.paint(glyph, color),
                        pad(truncate(point.label, label_width), label_width),
                        pad(self.paint(block, color), legend_width),
                        f"{share:5.1f}%",
                        self.paint(f"({number(point.value)})", self.theme.colors.muted),
                    ]
                )
            )
        return lines

    def pie_chart(self, data: Iterable[ChartInput], **options: Any) -> list[str]:
        return self.emit(self.format_pie_chart(data, **options))

    def format_sparkline(self, samples: Sequence[float]) -> str:
        if not samples:
            return ""
        low, high = min(samples), max(samples)
        return "".join(SPARK_GLYPHS[spark_index(value, low, high)] for value in samples)

    def sparkline(self, samples: Sequence[float], *, color: str | None = None) -> str:
        line = self.paint(self.format_sparkline(samples), color)
        self.output.line(line)
        return line

    def format_line_chart(
        self,
        samples: Sequence[float],
        *,
        width: int | None = None,
        height: int = 10,
        color: str | None = None,
    ) -> list[str]:
        """Plot one point per column, join neighbours with vertical strokes, add an axis."""
        if not samples:
            return [self.paint(NO_DATA, CODES["dim"])]
        width = max(1, width or len(samples))
        height = max(1, height)
        series = resample(samples, width)
        low, high = min(series), max(series)

        def row_of(value: float) -> int:
            level = 0.5 if high == low else (value - low) / (high - low)
            return round_half_up((1 - level) * (height - 1))

        grid = [[" "] * width for _ in range(height)]
        previous: int | None = None
        for column, value in enumerate(series):
            row = row_of(value)
            grid[row][column] = POINT_GLYPH
            if previous is not None:
                for between in range(min(row, previous), max(row, previous) + 1):
                    if grid[between][column] == " ":
                        grid[between][column] = STROKE_GLYPH
            previous = row

        line_color = color or self.theme.colors.primary
        lines = [self.paint("".join(cells), line_color) for cells in grid]
        axis = self.theme.glyphs("single")
        lines.append(
            self.paint(
                axis.bottom_left + axis.horizontal * width + axis.bottom_right,
                self.theme.colors.muted,
            )
        )
        return lines

    def line_chart(self, samples: Sequence[float], **options: Any) -> list[str]:
        return self.emit(self.format_line_chart(samples, **options))
