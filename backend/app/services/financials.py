from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.models.financial_report import FinancialReport
from app.utils.decimal_math import money

PROGRAM_SHARE_RATE = Decimal("0.80")
ASSOCIATION_SHARE_RATE = Decimal("0.20")
MONITORING_FEE_RATE = Decimal("0.02")


@dataclass(frozen=True)
class FinancialBreakdown:
    profit: Decimal
    share80: Decimal
    ass_share20: Decimal
    monitoring2: Decimal
    balance: Decimal


def compute_financial_breakdown(
    sales: Decimal | int | str,
    costs: Decimal | int | str,
    expenses: Decimal | int | str = 0,
) -> FinancialBreakdown:
    sales_amount = money(sales)
    costs_amount = money(costs)
    expenses_amount = money(expenses)
    if sales_amount < 0 or costs_amount < 0 or expenses_amount < 0:
        raise ValueError("Sales, costs and expenses must be non-negative.")

    profit = money(sales_amount - costs_amount)
    monitoring2 = money(profit * MONITORING_FEE_RATE)
    return FinancialBreakdown(
        profit=profit,
        share80=money(profit * PROGRAM_SHARE_RATE),
        ass_share20=money(profit * ASSOCIATION_SHARE_RATE),
        monitoring2=monitoring2,
        balance=money(profit - expenses_amount - monitoring2),
    )


def apply_breakdown(report: FinancialReport) -> FinancialReport:
    breakdown = compute_financial_breakdown(report.sales, report.costs, report.expenses)
    report.sales = money(report.sales)
    report.costs = money(report.costs)
    report.expenses = money(report.expenses)
    report.profit = breakdown.profit
    report.share80 = breakdown.share80
    report.ass_share20 = breakdown.ass_share20
    report.monitoring2 = breakdown.monitoring2
    report.balance = breakdown.balance
    return report


def get_report_or_404(db: Session, report_id: int) -> FinancialReport:
    report = db.get(FinancialReport, report_id)
    if report is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Financial report not found.")
    return report
