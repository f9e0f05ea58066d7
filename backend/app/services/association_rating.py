"""Association performance rating.

Four sub-scores on a 1..5 scale are blended into a weighted average:

    financial health        30%
    membership engagement   30%
    operational efficiency  20%
    compliance              20%

Every figure is clamped to [1, 5] and rounded to two decimals. The
descriptive label is taken from the clamped but unrounded overall rating so
that e.g. 4.4999 never rounds up into "Outstanding".
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal

NET_PROFIT_TARGET = 50000.0
MIN_SCORE = 1.0
MAX_SCORE = 5.0

WEIGHTS = {
    "financial_health": 0.3,
    "membership_engagement": 0.3,
    "operational_efficiency": 0.2,
    "compliance_score": 0.2,
}

RATING_BANDS = (
    (4.5, "Outstanding"),
    (4.0, "Very Satisfactory"),
    (3.5, "Satisfactory"),
    (3.0, "Fair"),
)
LOWEST_BAND = "Needs Improvement"


@dataclass(frozen=True)
class ReportSummary:
    members: int = 0
    active_members: int = 0
    revenue: Decimal | float = 0
    expenses: Decimal | float = 0
    net_profit: Decimal | float = 0
    sustainability_score: float = 0
    compliance_rate: float = 0


@dataclass(frozen=True)
class PerformanceMetrics:
    financial_health: float
    membership_engagement: float
    operational_efficiency: float
    compliance_score: float
    weighted_average: float
    plus_factor: float
    overall_rating: float
    descriptive_rating: str


def _finite(value: Decimal | float | int | None) -> float:
    if value is None:
        return 0.0
    number = float(value)
    if not math.isfinite(number):
        return 0.0
    return number


def _clamp(value: float, low: float = MIN_SCORE, high: float = MAX_SCORE) -> float:
    return max(low, min(high, value))


def _score(value: float) -> float:
    return round(_clamp(value), 2)


def descriptive_rating(rating: float) -> str:
    for threshold, label in RATING_BANDS:
        if rating >= threshold:
            return label
    return LOWEST_BAND


def calculate_performance_metrics(summary: ReportSummary) -> PerformanceMetrics:
    net_profit = _finite(summary.net_profit)
    if net_profit >= 0:
        financial_health = 1 + min(net_profit / NET_PROFIT_TARGET, 1.0) * 4
    else:
        financial_health = MIN_SCORE

    total = _finite(summary.members)
    if total <= 0:
        total = 1.0
    active = max(_finite(summary.active_members), 0.0)
    membership_engagement = 1 + (active / total) * 4

    sustainability = _clamp(_finite(summary.sustainability_score), 0.0, 100.0)
    operational_efficiency = 1 + sustainability / 100 * 4

    compliance = _clamp(_finite(summary.compliance_rate), 0.0, 100.0)
    compliance_score = 1 + compliance / 100 * 4

    weighted_average = (
        WEIGHTS["financial_health"] * _clamp(financial_health)
        + WEIGHTS["membership_engagement"] * _clamp(membership_engagement)
        + WEIGHTS["operational_efficiency"] * _clamp(operational_efficiency)
        + WEIGHTS["compliance_score"] * _clamp(compliance_score)
    )
    plus_factor = 0.0
    overall = _clamp(weighted_average + plus_factor)

    return PerformanceMetrics(
        financial_health=_score(financial_health),
        membership_engagement=_score(membership_engagement),
        operational_efficiency=_score(operational_efficiency),
        compliance_score=_score(compliance_score),
        weighted_average=_score(weighted_average),
        plus_factor=plus_factor,
        overall_rating=round(overall, 2),
        descriptive_rating=descriptive_rating(overall),
    )
