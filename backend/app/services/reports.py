from __future__ import annotations

import io
from datetime import datetime, timezone

from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from app.schemas.association_reports import AssociationReportOut
from app.utils.decimal_math import money


def _draw_header(pdf: canvas.Canvas, title: str, subtitle: str) -> None:
    pdf.setFont("Helvetica-Bold", 14)
    pdf.drawString(50, 800, title)
    pdf.setFont("Helvetica", 10)
    pdf.drawString(50, 785, subtitle)
    pdf.line(50, 780, 550, 780)


def _draw_rows(pdf: canvas.Canvas, y: int, rows: list[tuple[str, str]]) -> int:
    for label, value in rows:
        if y < 80:
            pdf.showPage()
            y = 800
        pdf.setFont("Helvetica-Bold", 10)
        pdf.drawString(50, y, label)
        pdf.setFont("Helvetica", 10)
        pdf.drawString(250, y, value)
        y -= 18
    return y


def render_association_report_pdf(report: AssociationReportOut) -> bytes:
    stream = io.BytesIO()
    pdf = canvas.Canvas(stream, pagesize=A4)
    generated = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")
    _draw_header(
        pdf,
        f"Association Performance Report - {report.association_name}",
        f"{report.location} | Status: {report.status.upper()} | Generated {generated}",
    )

    summary = report.summary
    metrics = report.metrics
    y = _draw_rows(
        pdf,
        750,
        [
            ("Members", f"{summary.members} ({summary.active_members} active)"),
            ("Revenue", f"PHP {money(summary.revenue):,.2f}"),
            ("Expenses", f"PHP {money(summary.expenses):,.2f}"),
            ("Net Profit", f"PHP {money(summary.net_profit):,.2f}"),
            ("Sustainability", f"{summary.sustainability_score:.2f}%"),
            ("Compliance", f"{summary.compliance_rate:.2f}%"),
            ("Last Report", summary.last_report_date.isoformat() if summary.last_report_date else "-"),
        ],
    )

    y -= 10
    pdf.setFont("Helvetica-Bold", 12)
    pdf.drawString(50, y, "Performance Rating")
    y -= 20
    _draw_rows(
        pdf,
        y,
        [
            ("Financial Health (30%)", f"{metrics.financial_health:.2f}"),
            ("Membership Engagement (30%)", f"{metrics.membership_engagement:.2f}"),
            ("Operational Efficiency (20%)", f"{metrics.operational_efficiency:.2f}"),
            ("Compliance (20%)", f"{metrics.compliance_score:.2f}"),
            ("Weighted Average", f"{metrics.weighted_average:.2f}"),
            ("Plus Factor", f"{metrics.plus_factor:.2f}"),
            ("Overall Rating", f"{metrics.overall_rating:.2f} - {metrics.descriptive_rating}"),
        ],
    )

    pdf.save()
    return stream.getvalue()
