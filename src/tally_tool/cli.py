"""CLI: resumen por período, promedios y racha de un archivo de eventos."""

from __future__ import annotations

import argparse
import logging
from datetime import datetime
from pathlib import Path

from tally_tool.csv_export import export_filename, export_to_csv, write_csv
from tally_tool.excel_writer import ExcelLayout, write_summary_xlsx
from tally_tool.grouping import groups_to_frame
from tally_tool.model import Period
from tally_tool.periods import CalendarConfig, period_label
from tally_tool.settings import load_settings
from tally_tool.sources.base import EventSource
from tally_tool.sources.csv_events import CsvEventsPaths, CsvEventsSource
from tally_tool.sources.json_events import JsonEventsPaths, JsonEventsSource
from tally_tool.summary import summarize

logger = logging.getLogger(__name__)


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed argparse namespace.
    """
    parser = argparse.ArgumentParser(
        description="Agrupación por período, promedios y racha de eventos."
    )
    parser.add_argument(
        "--events",
        required=True,
        help="Archivo de eventos (.json o .csv exportado).",
    )
    parser.add_argument(
        "--period",
        choices=[p.value for p in Period],
        default=Period.DAY.value,
        help="Agrupación a listar (default: day).",
    )
    parser.add_argument("--goal", type=int, default=None, help="Objetivo diario.")
    parser.add_argument(
        "--best", type=int, default=None, help="Mejor racha guardada."
    )
    parser.add_argument("--timezone", default=None, help="Zona IANA.")
    parser.add_argument("--week-start", default=None, help="Primer día de semana.")
    parser.add_argument(
        "--out-dir",
        default=None,
        help="Directorio para exportar CSV y Excel (opcional).",
    )
    parser.add_argument("--verbose", action="store_true", help="Log DEBUG.")
    return parser.parse_args()


def setup_logging(verbose: bool) -> None:
    """Configura logging de consola."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def _source_for(path: Path, config: CalendarConfig) -> EventSource:
    if path.suffix.lower() == ".csv":
        return CsvEventsSource(CsvEventsPaths(path=path), config)
    return JsonEventsSource(JsonEventsPaths(path=path), config)


def main() -> int:
    """Run the summary CLI.

    Returns:
        Exit code (0 on success).
    """
    ns = parse_args()
    setup_logging(ns.verbose)

    settings = load_settings()
    config = CalendarConfig.from_names(
        ns.timezone if ns.timezone is not None else settings.timezone,
        ns.week_start if ns.week_start is not None else settings.week_start,
    )
    goal = ns.goal if ns.goal is not None else settings.daily_goal
    best = ns.best if ns.best is not None else settings.best_streak

    source = _source_for(Path(ns.events).expanduser(), config)
    source.validate()
    events = source.load_events()
    logger.info("Loaded %d events from %s", len(events), ns.events)

    now = datetime.now(tz=config.zone)
    period = Period(ns.period)
    summary = summarize(
        events,
        config,
        daily_goal=goal,
        stored_best_streak=best,
        period=period,
        now=now,
    )

    for group in summary.groups:
        print(f"{period_label(group.period_start, period)}: {group.count}")
    print(f"OK: 7-day average: {summary.statistics.seven_day_average:.2f}")
    print(f"OK: 30-day average: {summary.statistics.thirty_day_average:.2f}")
    print(
        f"OK: Today: {summary.streak.today_count}/{goal} "
        f"(goal met: {'yes' if summary.streak.today_goal_met else 'no'})"
    )
    print(f"OK: Current streak: {summary.streak.current_streak}")
    print(f"OK: Best streak: {summary.streak.best_streak}")

    if ns.out_dir:
        out_dir = Path(ns.out_dir).expanduser().resolve()
        csv_path = out_dir / export_filename(now)
        write_csv(export_to_csv(events, goal, config, now=now), csv_path)
        ts = now.strftime("%Y-%m-%d_%H-%M-%S")
        xlsx_path = out_dir / f"tally_resumen_{period.value}_{ts}.xlsx"
        write_summary_xlsx(
            groups_to_frame(summary.groups),
            xlsx_path,
            ExcelLayout(),
            daily_goal=goal if period is Period.DAY else 0,
        )
        print(f"OK: CSV: {csv_path}")
        print(f"OK: Excel: {xlsx_path}")
    return 0
