from decimal import Decimal

import pytest

from app.models.financial_report import FinancialReport
from app.services.financials import apply_breakdown, compute_financial_breakdown
from app.services.monitoring import compute_monitoring_figures
from app.utils.decimal_math import money


def test_profit_shares_and_balance() -> None:
    breakdown = compute_financial_breakdown(money("1000"), money("400"), money("50"))
    assert breakdown.profit == money("600")
    assert breakdown.share80 == money("480")
    assert breakdown.ass_share20 == money("120")
    assert breakdown.monitoring2 == money("12")
    assert breakdown.balance == money("538")


def test_balance_without_expenses_only_deducts_monitoring_fee() -> None:
    breakdown = compute_financial_breakdown(1000, 400)
    assert breakdown.balance == breakdown.profit - breakdown.monitoring2 == money("588")


def test_loss_makes_every_share_negative() -> None:
    breakdown = compute_financial_breakdown(money("300"), money("500"), money("10"))
    assert breakdown.profit == money("-200")
    assert breakdown.share80 == money("-160")
    assert breakdown.ass_share20 == money("-40")
    assert breakdown.monitoring2 == money("-4")
    assert breakdown.balance == money("-206")


def test_shares_round_half_up_to_cents() -> None:
    breakdown = compute_financial_breakdown(money("100.25"), money("0"))
    assert breakdown.monitoring2 == money("2.01")
    assert breakdown.share80 == money("80.20")
    assert breakdown.ass_share20 == money("20.05")


@pytest.mark.parametrize(
    "sales, costs, expenses",
    [
        (Decimal("-1"), Decimal("0"), Decimal("0")),
        (Decimal("10"), Decimal("-1"), Decimal("0")),
        (Decimal("10"), Decimal("1"), Decimal("-5")),
    ],
)
def test_negative_inputs_rejected(sales: Decimal, costs: Decimal, expenses: Decimal) -> None:
    with pytest.raises(ValueError):
        compute_financial_breakdown(sales, costs, expenses)


def test_apply_breakdown_recomputes_report_in_place() -> None:
    report = FinancialReport(sales=Decimal("2500"), costs=Decimal("1000"), expenses=Decimal("100"))
    apply_breakdown(report)
    assert report.profit == money("1500")
    assert report.balance == money("1370")

    report.costs = Decimal("2000")
    apply_breakdown(report)
    assert report.profit == money("500")
    assert report.monitoring2 == money("10")
    assert report.balance == money("390")


def test_monitoring_gross_profit_and_net_income() -> None:
    gross_profit, net_income = compute_monitoring_figures("15000", "9000", "2500.50")
    assert gross_profit == money("6000")
    assert net_income == money("3499.50")
