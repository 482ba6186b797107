"""Bordered tables and key/value listings."""

from __future__ import annotations

import inspect
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, replace
from typing import Any, Literal

from ..colors import CODES, visible_width
from ..formatting import Align, ELLIPSIS, fit, number
from .base import Renderer

MIN_COLUMN_WIDTH = 3
INDEX_KEY = "#"

Row = Mapping[str, Any]


@dataclass(slots=True)
class ColumnDef:
    """One table column.

    ``formatter`` receives the raw value, or ``(value, row, index)`` when it
    requires three positional arguments. Missing and ``None`` values render
    an empty cell without calling it. Without ``width`` the column sizes
    to its content; without ``align`` numeric columns go right.
    """

    key: str
    label: str | None = None
    width: int | None = None
    align: Align | None = None
    formatter: Callable[..., Any] | None = None

    @property
    def header(self) -> str:
        return self.label if self.label is not None else self.key


def _takes_row_context(formatter: Callable[..., Any]) -> bool:
    try:
        params = inspect.signature(formatter).parameters.values()
    except (TypeError, ValueError):
        return False
    positional = 0
    for param in params:
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return True
        if param.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ) and param.default is inspect.Parameter.empty:
            positional += 1
    return positional >= 3


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _default_cell(value: Any) -> str:
    if value is None:
        return ""
    if _is_number(value):
        return number(value)
    return str(value)


def _sort_key(value: Any, as_text: bool = False) -> tuple[int, Any]:
    if value is None:
        return (1, "")
    return (0, str(value) if as_text else value)


def _sort_rows(rows: list[Row], key: str, descending: bool) -> list[Row]:
    """Stable sort on raw values; None sorts last, mixed types compare as text."""
    try:
        return sorted(rows, key=lambda row: _sort_key(row.get(key)), reverse=descending)
    except TypeError:
        return sorted(
            rows,
            key=lambda row: _sort_key(row.get(key), as_text=True),
            reverse=descending,
        )


def narrow_widths(widths: list[int], max_width: int) -> list[int]:
    """Scale widths down proportionally so their sum fits, keeping a 3-column floor."""
    total = sum(widths)
    if total <= max_width:
        return list(widths)
    ratio = max_width / total
    return [max(MIN_COLUMN_WIDTH, int(width * ratio)) for width in widths]


class TableRenderer(Renderer):
    """Render rows of mappings as a bordered, aligned table.

    Rendering is a pure function of rows, columns and options; missing keys
    produce empty cells.
    """

    def _resolve_columns(
        self,
        rows: list[Row],
        columns: Sequence[ColumnDef | str] | None,
        show_index: bool,
    ) -> list[ColumnDef]:
        if columns:
            resolved = [
                column if isinstance(column, ColumnDef) else ColumnDef(key=column)
                for column in columns
            ]
        else:
            resolved = [ColumnDef(key=key) for key in (rows[0] if rows else {})]
        for position, column in enumerate(resolved):
            if column.align is None:
                values = [row.get(column.key) for row in rows if row.get(column.key) is not None]
                numeric = bool(values) and all(_is_number(value) for value in values)
                resolved[position] = replace(column, align="right" if numeric else "left")
        if show_index and not any(column.key == INDEX_KEY for column in resolved):
            resolved.insert(0, ColumnDef(key=INDEX_KEY, align="right"))
        return resolved

    def _cells(self, rows: list[Row], columns: list[ColumnDef]) -> list[list[str]]:
        contextual = {
            id(column): column.formatter is not None and _takes_row_context(column.formatter)
            for column in columns
        }
        table: list[list[str]] = []
        for index, row in enumerate(rows):
            cells = []
            for column in columns:
                if column.key == INDEX_KEY and INDEX_KEY not in row:
                    cells.append(str(index + 1))
                    continue
                value = row.get(column.key)
                if value is None or column.formatter is None:
                    cells.append(_default_cell(value))
                elif contextual[id(column)]:
                    cells.append(str(column.formatter(value, row, index)))
                else:
                    cells.append(str(column.formatter(value)))
            table.append(cells)
        return table

    def _border(self, widths: list[int], left: str, middle: str, right: str) -> str:
        horizontal = self.theme.box.horizontal
        segments = middle.join(horizontal * (width + 2) for width in widths)
        return self.paint(f"{left}{segments}{right}", self.theme.colors.muted)

    def _row(self, cells: list[str], widths: list[int], aligns: list[Align], color: str | None = None) -> str:
        side = self.paint(self.theme.box.vertical, self.theme.colors.muted)
        parts = [
            self.paint(fit(cell, width, align), color)
            for cell, width, align in zip(cells, widths, aligns)
        ]
        return side + " " + f" {side} ".join(parts) + " " + side

    def format(
        self,
        rows: Iterable[Row],
        columns: Sequence[ColumnDef | str] | None = None,
        *,
        show_index: bool = False,
        sort_by: str | None = None,
        sort_order: Literal["asc", "desc"] = "asc",
        max_width: int | None = None,
        row_limit: int | None = None,
        empty_message: str = "No data to display",
        uppercase_headers: bool = False,
        zebra: bool = True,
    ) -> list[str]:
        rows = list(rows)
        if not rows:
            return [self.paint(empty_message, CODES["dim"])]
        if sort_by is not None:
            rows = _sort_rows(rows, sort_by, sort_order == "desc")

        resolved = self._resolve_columns(rows, columns, show_index)
        cells = self._cells(rows, resolved)
        headers = [column.header.upper() if uppercase_headers else column.header for column in resolved]
        widths = [
            column.width
            if column.width is not None
            else max([visible_width(header)] + [visible_width(row[i]) for row in cells])
            for i, (column, header) in enumerate(zip(resolved, headers))
        ]
        widths = [max(1, width) for width in widths]
        if max_width is not None:
            widths = narrow_widths(widths, max_width)
        aligns: list[Align] = [column.align or "left" for column in resolved]

        box = self.theme.box
        header_color = self.theme.colors.primary + CODES["bright"]
        lines = [
            self._border(widths, box.top_left, box.tee_top, box.top_right),
            self._row(headers, widths, ["center"] * len(widths), header_color),
            self._border(widths, box.tee_left, box.cross, box.tee_right),
        ]

        shown = cells if row_limit is None else cells[: max(0, row_limit)]
        for index, row in enumerate(shown):
            stripe = self.theme.colors.muted if zebra and index % 2 == 1 else None
            lines.append(self._row(row, widths, aligns, stripe))

        hidden = len(cells) - len(shown)
        if hidden > 0:
            noun = "row" if hidden == 1 else "rows"
            notice = f"{ELLIPSIS} {hidden} more {noun} {ELLIPSIS}"
            span = sum(width + 3 for width in widths) - 3
            side = self.paint(box.vertical, self.theme.colors.muted)
            lines.append(f"{side} {self.paint(fit(notice, span, 'center'), CODES['dim'])} {side}")

        lines.append(self._border(widths, box.bottom_left, box.tee_bottom, box.bottom_right))
        return lines

    def render(
        self,
        rows: Iterable[Row],
        columns: Sequence[ColumnDef | str] | None = None,
        **options: Any,
    ) -> list[str]:
        return self.emit(self.format(rows, columns, **options))

    def format_key_value(self, pairs: Mapping[str, Any] | Iterable[tuple[str, Any]]) -> list[str]:
        """Two-column table whose label column is as wide as the longest label."""
        items = list(pairs.items()) if isinstance(pairs, Mapping) else list(pairs)
        if not items:
            return []
        labels = [str(label) for label, _ in items]
        values = [_default_cell(value) for _, value in items]
        widths = [
            max(visible_width(label) for label in labels),
            max(visible_width(value) for value in values),
        ]
        widths = [max(1, width) for width in widths]
        box = self.theme.box
        lines = [self._border(widths, box.top_left, box.tee_top, box.top_right)]
        for label, value in zip(labels, values):
            cells = [self.paint(label, self.theme.colors.secondary), value]
            lines.append(self._row(cells, widths, ["left", "left"]))
        lines.append(self._border(widths, box.bottom_left, box.tee_bottom, box.bottom_right))
        return lines

    def render_key_value(self, pairs: Mapping[str, Any] | Iterable[tuple[str, Any]]) -> list[str]:
        return self.emit(self.format_key_value(pairs))
