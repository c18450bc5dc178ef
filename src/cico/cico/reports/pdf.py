from __future__ import annotations

import io
from datetime import datetime
from typing import Optional, Sequence
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from ..common.datetime_utils import now_utc
from ..core.constants import APP_NAME
from .layout import EMPTY_MESSAGE, ReportTable, build_table
from .model import DateRange, ReportRow, ScheduledReport

HEADER_BG = colors.HexColor("#1d4ed8")
GROUP_BG = colors.HexColor("#f0f9ff")
GRID = colors.HexColor("#e5e7eb")


def _table_style(table: ReportTable) -> TableStyle:
    style = [
        ("BACKGROUND", (0, 0), (-1, 0), HEADER_BG),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 9),
        ("BOTTOMPADDING", (0, 0), (-1, 0), 8),
        ("ALIGN", (0, 0), (-1, -1), "LEFT"),
        ("GRID", (0, 0), (-1, -1), 0.5, GRID),
    ]
    for i, row in enumerate(table.rows, start=1):
        if row.is_group:
            style.append(("SPAN", (0, i), (-1, i)))
            style.append(("BACKGROUND", (0, i), (-1, i), GROUP_BG))
            style.append(("FONTNAME", (0, i), (-1, i), "Helvetica-Bold"))
    return TableStyle(style)


def _table_data(table: ReportTable) -> list[list[str]]:
    width = len(table.headers)
    data = [list(table.headers)]
    for row in table.rows:
        cells = list(row.cells)
        data.append(cells + [""] * (width - len(cells)))
    return data


def render_table_pdf(table: ReportTable, *, generated_at: Optional[datetime] = None) -> bytes:
    generated_at = generated_at or now_utc()
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=letter, title=table.title)
    styles = getSampleStyleSheet()

    elements = [
        Paragraph(escape(table.title), styles["Title"]),
        Paragraph(escape(table.company_name), styles["Heading3"]),
        Paragraph(escape(table.period_label), styles["Normal"]),
        Paragraph(f"{table.total_label}: {table.total}", styles["Normal"]),
        Spacer(1, 0.25 * inch),
    ]

    if table.is_empty:
        elements.append(Paragraph(EMPTY_MESSAGE, styles["Italic"]))
    else:
        t = Table(_table_data(table), repeatRows=1)
        t.setStyle(_table_style(table))
        elements.append(t)

    elements.append(Spacer(1, 0.25 * inch))
    elements.append(
        Paragraph(f"Generated by {APP_NAME} on {generated_at.strftime('%Y-%m-%d %H:%M UTC')}", styles["Normal"])
    )
    doc.build(elements)
    return buffer.getvalue()


def render_report_pdf(
    report: ScheduledReport,
    rows: Sequence[ReportRow],
    date_range: DateRange,
    *,
    generated_at: Optional[datetime] = None,
) -> bytes:
    return render_table_pdf(build_table(report, rows, date_range), generated_at=generated_at)


def pdf_filename(report: ScheduledReport, date_range: DateRange) -> str:
    stem = "".join(c if c.isalnum() else "_" for c in report.title.lower()).strip("_")
    return f"{stem}_{date_range.start.date().isoformat()}_{date_range.end.date().isoformat()}.pdf"
