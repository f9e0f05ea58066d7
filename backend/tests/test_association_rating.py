import math

import pytest

from app.services.association_rating import (
    ReportSummary,
    calculate_performance_metrics,
    descriptive_rating,
)


def _fields(metrics) -> list[float]:
    return [
        metrics.financial_health,
        metrics.membership_engagement,
        metrics.operational_efficiency,
        metrics.compliance_score,
        metrics.weighted_average,
        metrics.overall_rating,
    ]


def test_perfect_association_scores_five_everywhere() -> None:
    metrics = calculate_performance_metrics(
        ReportSummary(
            members=30,
            active_members=30,
            revenue=200000,
            expenses=100000,
            net_profit=100000,
            sustainability_score=100,
            compliance_rate=100,
        )
    )
    assert _fields(metrics) == [5.0] * 6
    assert metrics.plus_factor == 0
    assert metrics.descriptive_rating == "Outstanding"


def test_weighted_average_mixes_sub_scores() -> None:
    metrics = calculate_performance_metrics(
        ReportSummary(
            members=20,
            active_members=10,
            net_profit=25000,
            sustainability_score=50,
            compliance_rate=75,
        )
    )
    assert metrics.financial_health == 3.0
    assert metrics.membership_engagement == 3.0
    assert metrics.operational_efficiency == 3.0
    assert metrics.compliance_score == 4.0
    assert metrics.weighted_average == 3.2
    assert metrics.overall_rating == 3.2
    assert metrics.descriptive_rating == "Fair"


def test_negative_profit_bottoms_out_financial_health() -> None:
    metrics = calculate_performance_metrics(ReportSummary(members=10, active_members=5, net_profit=-5000))
    assert metrics.financial_health == 1.0


def test_zero_members_does_not_divide_by_zero() -> None:
    metrics = calculate_performance_metrics(ReportSummary(members=0, active_members=0))
    assert metrics.membership_engagement == 1.0


@pytest.mark.parametrize(
    "summary",
    [
        ReportSummary(),
        ReportSummary(members=5, active_members=50, net_profit=10**9, sustainability_score=400, compliance_rate=900),
        ReportSummary(members=-3, active_members=-7, net_profit=-10**9, sustainability_score=-50, compliance_rate=-1),
        ReportSummary(members=10, active_members=5, net_profit=math.nan, sustainability_score=math.inf),
    ],
)
def test_every_score_is_clamped_between_one_and_five(summary: ReportSummary) -> None:
    metrics = calculate_performance_metrics(summary)
    for value in _fields(metrics):
        assert 1.0 <= value <= 5.0


@pytest.mark.parametrize(
    "rating, label",
    [
        (5.0, "Outstanding"),
        (4.5, "Outstanding"),
        (4.49999, "Very Satisfactory"),
        (4.0, "Very Satisfactory"),
        (3.5, "Satisfactory"),
        (3.0, "Fair"),
        (2.99, "Needs Improvement"),
        (1.0, "Needs Improvement"),
    ],
)
def test_descriptive_rating_boundaries(rating: float, label: str) -> None:
    assert descriptive_rating(rating) == label


def test_label_uses_unrounded_rating() -> None:
    # every sub-score lands on 4.496, shown as 4.5 but still below the Outstanding band
    metrics = calculate_performance_metrics(
        ReportSummary(
            members=1000,
            active_members=874,
            net_profit=43700,
            sustainability_score=87.4,
            compliance_rate=87.4,
        )
    )
    assert metrics.overall_rating == 4.5
    assert metrics.descriptive_rating == "Very Satisfactory"
