import csv
import io
from datetime import date
from decimal import Decimal

from openpyxl import load_workbook

from app.models.association import Association
from app.models.financial_report import FinancialReport
from app.models.project import Project
from app.services.exports import financial_reports_table, projects_table, render_csv, render_xlsx
from app.services.financials import apply_breakdown


def _projects() -> list[Project]:
    alpha = Association(id=1, name="Alpha", location="Capas")
    beta = Association(id=2, name="Beta", location="Bamban")
    return [
        Project(
            project_name="Hog Fattening",
            status="active",
            enterprise_type="Swine",
            city_municipality="Capas",
            province="Tarlac",
            start_date=date(2025, 6, 1),
            associations=[alpha, beta],
        ),
        Project(project_name="Egg Layer", status="pending", enterprise_type="Poultry", city_municipality="Bamban"),
        Project(project_name="Rice Trading", status="completed", enterprise_type="Trading", city_municipality="Gerona"),
    ]


def test_projects_csv_has_header_plus_one_row_per_project() -> None:
    content = render_csv(projects_table(_projects()))
    rows = list(csv.reader(io.StringIO(content)))
    assert len(rows) == 3 + 1
    assert rows[0] == ["Project Name", "Associations", "Status", "Enterprise Type", "Location", "Start Date"]
    assert rows[1] == ["Hog Fattening", "Alpha, Beta", "active", "Swine", "Capas, Tarlac", "2025-06-01"]
    assert rows[2][1] == "Unknown Association"
    assert rows[2][5] == ""


def test_empty_export_is_header_only() -> None:
    rows = list(csv.reader(io.StringIO(render_csv(projects_table([])))))
    assert len(rows) == 1


def test_project_export_filename_carries_date() -> None:
    assert projects_table([]).filename("csv", today=date(2026, 10, 19)) == "projects-management-2026-10-19.csv"


def test_financial_reports_xlsx_matches_csv_rows() -> None:
    reports = [
        apply_breakdown(
            FinancialReport(
                association_name="Alpha",
                period=f"2026-Q{quarter}",
                sales=Decimal("1000"),
                costs=Decimal("400"),
                expenses=Decimal("0"),
                report_date=date(2026, quarter * 3, 28),
            )
        )
        for quarter in (1, 2)
    ]
    table = financial_reports_table(reports)
    csv_rows = list(csv.DictReader(io.StringIO(render_csv(table))))
    assert len(csv_rows) == 2
    assert csv_rows[0]["Profit"] == "600.00"
    assert csv_rows[0]["Monitoring 2%"] == "12.00"
    assert csv_rows[0]["Balance"] == "588.00"

    sheet = load_workbook(render_xlsx(table)).active
    assert sheet.title == "FinancialReports"
    assert sheet.max_row == 3
    assert [cell.value for cell in sheet[1]] == table.headers
