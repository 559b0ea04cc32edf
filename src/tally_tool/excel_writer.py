"""Generación de Excel formateado con el resumen por período."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd
from openpyxl.styles import Alignment, Border, Font, Side

_DIA_SEMANA: tuple[str, ...] = ("lun", "mar", "mie", "jue", "vie", "sab", "dom")

_THIN = Side(style="thin")
_BORDER = Border(left=_THIN, right=_THIN, top=_THIN, bottom=_THIN)

_HEADER_MAP: dict[str, str] = {
    "weekday": "Día",
    "label": "Período",
    "count": "Eventos",
    "goal_met": "Objetivo\ncumplido",
}


@dataclass(frozen=True)
class ExcelLayout:
    """Layout/formatting configuration for the summary sheet."""

    sheet_name: str = "Resumen"


def _add_weekday_column(export_df: pd.DataFrame) -> pd.DataFrame:
    """Añade columna weekday (Día) a partir de date y quita date."""
    if "date" not in export_df.columns or export_df.empty:
        return export_df.drop(columns=["date"], errors="ignore")
    export_df = export_df.copy()
    export_df["weekday"] = [_DIA_SEMANA[d.weekday()] for d in export_df["date"]]
    export_df = export_df.drop(columns=["date"])
    cols = ["weekday"] + [c for c in export_df.columns if c != "weekday"]
    return export_df[cols]


def _add_goal_column(export_df: pd.DataFrame, daily_goal: int) -> pd.DataFrame:
    """Marca sí/no por período cuando hay objetivo configurado."""
    if daily_goal <= 0 or "count" not in export_df.columns:
        return export_df
    export_df = export_df.copy()
    export_df["goal_met"] = export_df["count"].map(
        lambda c: "sí" if c <= daily_goal else "no"
    )
    return export_df


def write_summary_xlsx(
    df: pd.DataFrame,
    out_path: Path,
    layout: ExcelLayout,
    *,
    daily_goal: int = 0,
) -> None:
    """Write a formatted Excel file with one row per period.

    Args:
        df: Groups as returned by ``groups_to_frame`` (date, label, count).
        out_path: Output path for the XLSX file.
        layout: Excel layout parameters.
        daily_goal: Adds a goal column when > 0 (meaningful for day groups).
    """
    out_path.parent.mkdir(parents=True, exist_ok=True)

    export_df = _add_weekday_column(df)
    export_df = _add_goal_column(export_df, daily_goal)
    export_df = export_df.rename(columns=_HEADER_MAP)

    with pd.ExcelWriter(out_path, engine="openpyxl") as writer:
        export_df.to_excel(writer, index=False, sheet_name=layout.sheet_name)
        ws = writer.book[layout.sheet_name]
        _format_sheet(ws)


def _style_cells(ws: Any) -> None:
    """Bordes y centrado en todas las celdas; cabecera en negrita."""
    for row in ws.iter_rows():
        for cell in row:
            cell.border = _BORDER
            if cell.row == 1:
                cell.font = Font(bold=True)
                cell.alignment = Alignment(
                    horizontal="center", vertical="center", wrap_text=True
                )
            else:
                cell.alignment = Alignment(horizontal="center", vertical="center")


def _apply_column_widths(ws: Any) -> None:
    """Establece anchos de columna según la cabecera."""
    widths = {
        "Día": 6,
        "Período": 24,
        "Eventos": 10,
        "Objetivo\ncumplido": 11,
    }
    for cell in ws[1]:
        width = widths.get(str(cell.value))
        if width is not None:
            ws.column_dimensions[cell.column_letter].width = width


def _format_sheet(ws: Any) -> None:
    """Apply borders, widths and number formats to a worksheet.

    Args:
        ws: openpyxl worksheet.
    """
    _style_cells(ws)
    _apply_column_widths(ws)
    for cell in ws[1]:
        if cell.value == "Eventos":
            col = cell.column
            for row in ws.iter_rows(min_row=2, min_col=col, max_col=col):
                row[0].number_format = "#,##0"
