"""genesis-trace CLI: theme listing, widget showcase and pipeline summaries."""

from __future__ import annotations

import argparse
import asyncio
import sys
import time
from pathlib import Path

from rich.console import Console

from .colors import colorize
from .config import ConfigBuilder, EngineSettings, load_settings
from .exceptions import ConfigError, ResultsFileError
from .formatting import byte_size, currency, duration, percentage
from .log_setup import setup_logger
from .logger import Logger
from .models import LogLevel
from .output import OutputSink
from .pipeline import load_results, pipeline_exit_code, status_counts
from .themes import Theme, available_themes, get_theme
from .ui import (
    BannerRenderer,
    BoxRenderer,
    ChartRenderer,
    ColumnDef,
    ProgressBar,
    Spinner,
    TableRenderer,
)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments."""
    parser = argparse.ArgumentParser(
        prog="genesis-trace",
        description="Terminal logging and rendering toolkit.",
    )
    parser.add_argument(
        "--theme",
        default=None,
        help="Theme name (defaults to GENESIS_TRACE_THEME or 'default').",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable ANSI colors.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print engine diagnostics down to debug level on stderr.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("themes", help="List registered themes.")

    showcase = sub.add_parser("showcase", help="Render every widget once.")
    showcase.add_argument(
        "--delay",
        type=float,
        default=0.05,
        help="Seconds between animation updates.",
    )

    pipeline = sub.add_parser("pipeline", help="Summarize a JSON file of job results.")
    pipeline.add_argument("results", type=Path, help="JSON array of job results.")
    return parser.parse_args(argv)


def _cmd_themes(output: OutputSink, theme: Theme, use_color: bool) -> int:
    rows = []
    for name in available_themes():
        candidate = get_theme(name)
        glyphs = candidate.box
        swatch = " ".join(
            colorize(candidate.symbol(level), candidate.get(level), use_color)
            for level in LogLevel
        )
        rows.append(
            {
                "name": name,
                "box": candidate.box_style,
                "corners": glyphs.top_left + glyphs.top_right + glyphs.bottom_left + glyphs.bottom_right,
                "symbols": swatch,
            }
        )
    TableRenderer(theme, output, colorize=use_color).render(rows, uppercase_headers=True)
    return 0


def _cmd_showcase(
    output: OutputSink,
    theme: Theme,
    settings: EngineSettings,
    delay: float,
    use_color: bool,
) -> int:
    BannerRenderer(theme, output, colorize=use_color).render(
        "genesis-trace",
        subtitle=f"Theme: {theme.name}",
        description="Structured logging and terminal rendering.",
        version="0.1.0",
        width=min(72, output.width),
    )

    config = ConfigBuilder.from_settings(settings).theme(theme).log_level("debug").build()
    logger = Logger(config, output=output)
    worker = logger.child("showcase")
    worker.debug("Resolved configuration", {"theme": theme.name})
    worker.info("Loading sample data", {"rows": 4})
    worker.success("Sample data ready")
    worker.warning("Cache is cold", {"hit_rate": percentage(0.12)})

    boxes = BoxRenderer(theme, output, colorize=use_color)
    boxes.render(
        ["Boxes pad content to the widest line.", "Colors never shift alignment."],
        title="Box",
    )
    boxes.message("Deployment finished", "success")

    rows = [
        {"region": "north", "revenue": 182_400.5, "orders": 1_204, "payload": 2_400_000},
        {"region": "south", "revenue": 96_210.0, "orders": 812, "payload": 980_000},
        {"region": "east", "revenue": 143_000.25, "orders": 1_031},
        {"region": "west", "revenue": 61_950.75, "orders": 455, "payload": 410_000},
    ]
    TableRenderer(theme, output, colorize=use_color).render(
        rows,
        [
            ColumnDef("region", "Region"),
            ColumnDef("revenue", "Revenue", align="right", formatter=currency),
            ColumnDef("orders", "Orders"),
            ColumnDef("payload", "Payload", formatter=byte_size),
        ],
        show_index=True,
        sort_by="revenue",
        sort_order="desc",
    )

    charts = ChartRenderer(theme, output, colorize=use_color)
    charts.bar_chart([(row["region"], row["orders"]) for row in rows], width=30)
    charts.pie_chart([(row["region"], row["revenue"]) for row in rows])
    samples = [3, 5, 4, 8, 12, 9, 7, 11, 14, 10, 6, 9]
    charts.sparkline(samples, color=theme.colors.accent)
    charts.line_chart(samples, width=24, height=6)

    bar = ProgressBar(len(rows), width=30, output=output, theme=theme, colorize=use_color)
    for index, row in enumerate(rows, 1):
        time.sleep(delay)
        bar.update(index, row["region"])
    bar.complete("done")

    spinner = Spinner("Syncing", output=output, theme=theme, colorize=use_color)
    spinner.start()
    for step in range(8):
        time.sleep(delay)
        spinner.update(f"Syncing ({step + 1}/8)")
    spinner.succeed("Synced")

    worker.error("Simulated failure", {"job": "showcase"})
    asyncio.run(logger.shutdown())
    return 0


def _cmd_pipeline(output: OutputSink, theme: Theme, results_path: Path, use_color: bool) -> int:
    results = load_results(results_path)
    TableRenderer(theme, output, colorize=use_color).render(
        [result.model_dump() for result in results],
        [
            ColumnDef("job", "Job"),
            ColumnDef("status", "Status"),
            ColumnDef("duration_ms", "Duration", align="right", formatter=duration),
            ColumnDef("warnings", "Warnings"),
            ColumnDef("error", "Error"),
        ],
        show_index=True,
        empty_message="No jobs in results file.",
    )
    if results:
        ChartRenderer(theme, output, colorize=use_color).bar_chart(
            [(result.job, result.duration_ms) for result in results],
            width=30,
            value_formatter=duration,
        )

    exit_code = pipeline_exit_code(results)
    counts = status_counts(results)
    summary = ", ".join(f"{count} {status}" for status, count in counts.items())
    BoxRenderer(theme, output, colorize=use_color).message(
        f"Pipeline {'failed' if exit_code else 'passed'}: {summary}",
        "error" if exit_code else "success",
    )
    return exit_code


def main(argv: list[str] | None = None) -> int:
    """Run the selected command and return its exit code."""
    args = parse_args(argv)
    logger = setup_logger(level="debug" if args.verbose else "warning")

    try:
        settings = load_settings()
        theme = get_theme(args.theme or settings.theme)
    except ConfigError as exc:
        logger.error("Configuration failure: %s", exc)
        return 2

    output = OutputSink(Console(highlight=False, no_color=args.no_color))
    use_color = output.color_enabled

    if args.command == "themes":
        return _cmd_themes(output, theme, use_color)
    if args.command == "showcase":
        try:
            return _cmd_showcase(output, theme, settings, args.delay, use_color)
        except ConfigError as exc:
            logger.error("Configuration failure: %s", exc)
            return 2
    try:
        return _cmd_pipeline(output, theme, args.results, use_color)
    except ResultsFileError as exc:
        logger.error("Results failure: %s", exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())
