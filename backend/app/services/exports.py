from __future__ import annotations

import csv
import io
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Iterable

from openpyxl import Workbook

from app.models.activity_log import ActivityLog
from app.models.financial_report import FinancialReport
from app.models.monitoring import MonitoringRecord
from app.models.project import Project
from app.schemas.association_reports import AssociationReportOut
from app.services.caretaker_performance import CaretakerScore
from app.services.projects import project_association_names
from app.utils.decimal_math import money

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@dataclass
class ExportTable:
    name: str
    sheet_title: str
    headers: list[str]
    rows: list[dict[str, Any]] = field(default_factory=list)

    def filename(self, extension: str, today: date | None = None) -> str:
        return f"{self.name}-{(today or date.today()).isoformat()}.{extension}"


def _status(value: Any) -> str:
    return value.value if hasattr(value, "value") else str(value)


def _date(value: date | None) -> str:
    return value.isoformat() if value else ""


def projects_table(projects: Iterable[Project]) -> ExportTable:
    table = ExportTable(
        name="projects-management",
        sheet_title="Projects",
        headers=["Project Name", "Associations", "Status", "Enterprise Type", "Location", "Start Date"],
    )
    for project in projects:
        table.rows.append(
            {
                "Project Name": project.project_name,
                "Associations": ", ".join(project_association_names(project)),
                "Status": _status(project.status),
                "Enterprise Type": project.enterprise_type,
                "Location": f"{project.city_municipality}, {project.province}",
                "Start Date": _date(project.start_date),
            }
        )
    return table


def financial_reports_table(reports: Iterable[FinancialReport]) -> ExportTable:
    table = ExportTable(
        name="financial-reports",
        sheet_title="FinancialReports",
        headers=[
            "Association",
            "Caretaker",
            "Period",
            "Sales",
            "Costs",
            "Profit",
            "Share 80%",
            "Association Share 20%",
            "Monitoring 2%",
            "Expenses",
            "Balance",
            "Report Date",
        ],
    )
    for report in reports:
        table.rows.append(
            {
                "Association": report.association_name,
                "Caretaker": report.caretaker_name or "",
                "Period": report.period,
                "Sales": money(report.sales),
                "Costs": money(report.costs),
                "Profit": money(report.profit),
                "Share 80%": money(report.share80),
                "Association Share 20%": money(report.ass_share20),
                "Monitoring 2%": money(report.monitoring2),
                "Expenses": money(report.expenses),
                "Balance": money(report.balance),
                "Report Date": _date(report.report_date),
            }
        )
    return table


def monitoring_table(records: Iterable[MonitoringRecord], project_names: dict[int, str]) -> ExportTable:
    table = ExportTable(
        name="monitoring-records",
        sheet_title="MonitoringRecords",
        headers=[
            "Monitoring Date",
            "Project Name",
            "Field Officer",
            "Provincial Coordinator",
            "Gross Sales",
            "Net Income",
            "Monitoring Type",
            "Status",
            "Monitoring Year",
        ],
    )
    for record in records:
        table.rows.append(
            {
                "Monitoring Date": _date(record.monitoring_date),
                "Project Name": project_names.get(record.project_id, ""),
                "Field Officer": record.field_officer_id,
                "Provincial Coordinator": record.provincial_coordinator or "",
                "Gross Sales": money(record.monthly_gross_sales),
                "Net Income": money(record.monthly_net_income),
                "Monitoring Type": record.monitoring_type,
                "Status": record.status,
                "Monitoring Year": record.monitoring_year,
            }
        )
    return table


def association_reports_table(reports: Iterable[AssociationReportOut]) -> ExportTable:
    table = ExportTable(
        name="association-reports",
        sheet_title="AssociationReports",
        headers=[
            "Association",
            "Location",
            "Members",
            "Active Members",
            "Revenue",
            "Expenses",
            "Net Profit",
            "Financial Health",
            "Membership Engagement",
            "Operational Efficiency",
            "Compliance",
            "Overall Rating",
            "Descriptive Rating",
        ],
    )
    for report in reports:
        table.rows.append(
            {
                "Association": report.association_name,
                "Location": report.location,
                "Members": report.summary.members,
                "Active Members": report.summary.active_members,
                "Revenue": report.summary.revenue,
                "Expenses": report.summary.expenses,
                "Net Profit": report.summary.net_profit,
                "Financial Health": report.metrics.financial_health,
                "Membership Engagement": report.metrics.membership_engagement,
                "Operational Efficiency": report.metrics.operational_efficiency,
                "Compliance": report.metrics.compliance_score,
                "Overall Rating": report.metrics.overall_rating,
                "Descriptive Rating": report.metrics.descriptive_rating,
            }
        )
    return table


def caretakers_table(
    scores: Iterable[CaretakerScore],
    emails: dict[int, str],
    started: dict[int, date | None],
) -> ExportTable:
    table = ExportTable(
        name="caretakers",
        sheet_title="Caretakers",
        headers=["Caretaker Name", "Email", "Status", "Association", "Date Started", "Performance Rating"],
    )
    for item in scores:
        average = item.average_rating
        table.rows.append(
            {
                "Caretaker Name": item.name,
                "Email": emails.get(item.caretaker_id, ""),
                "Status": _status(item.status),
                "Association": item.association_name,
                "Date Started": _date(started.get(item.caretaker_id)),
                "Performance Rating": f"{average:.1f}" if average is not None else "",
            }
        )
    return table


def activity_logs_table(entries: Iterable[ActivityLog]) -> ExportTable:
    table = ExportTable(
        name="activity-logs",
        sheet_title="ActivityLogs",
        headers=["Timestamp", "User", "Action", "Module", "Details", "IP Address", "Status"],
    )
    for entry in entries:
        table.rows.append(
            {
                "Timestamp": entry.timestamp.isoformat() if entry.timestamp else "",
                "User": entry.user,
                "Action": entry.action,
                "Module": entry.module,
                "Details": entry.details,
                "IP Address": entry.ip_address,
                "Status": _status(entry.status),
            }
        )
    return table


def render_csv(table: ExportTable) -> str:
    output = io.StringIO()
    writer = csv.DictWriter(output, fieldnames=table.headers)
    writer.writeheader()
    writer.writerows(table.rows)
    return output.getvalue()


def render_xlsx(table: ExportTable) -> io.BytesIO:
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = table.sheet_title
    sheet.append(table.headers)
    for row in table.rows:
        sheet.append([row[key] for key in table.headers])

    stream = io.BytesIO()
    workbook.save(stream)
    stream.seek(0)
    return stream
