"""Caretaker performance aggregation.

A caretaker's score is the mean of its assessment ratings (0..5) scaled to
0..100. Caretakers with no assessments are unrated: they count towards the
headcounts but never towards averages, rankings or alerts.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, timedelta
from statistics import mean

from app.models.caretaker import Caretaker, PerformanceAssessment
from app.models.enums import CaretakerStatus

SCORE_SCALE = 20
TOP_PERFORMER_SCORE = 80.0
NEEDS_IMPROVEMENT_SCORE = 60.0
CRITICAL_SCORE = 50.0
NO_ASSOCIATION = "No Association"

CATEGORY_KEYS = (
    "punctuality",
    "communication",
    "patient_care",
    "professionalism",
    "technical_skills",
)

SCORE_LABELS = (
    (90.0, "Excellent"),
    (80.0, "Very Good"),
    (70.0, "Good"),
    (60.0, "Satisfactory"),
)

TREND_PERIODS = {"week", "month", "quarter", "year"}


@dataclass
class CaretakerScore:
    caretaker_id: int
    name: str
    association_name: str
    status: CaretakerStatus
    assessments: list[PerformanceAssessment] = field(default_factory=list)

    @property
    def assessment_count(self) -> int:
        return len(self.assessments)

    @property
    def average_rating(self) -> float | None:
        if not self.assessments:
            return None
        return mean(float(item.rating) for item in self.assessments)

    @property
    def raw_score(self) -> float | None:
        average = self.average_rating
        if average is None:
            return None
        return average * SCORE_SCALE

    @property
    def score(self) -> float | None:
        """Display value; thresholds are applied to ``raw_score``."""
        raw = self.raw_score
        return round(raw, 2) if raw is not None else None


@dataclass(frozen=True)
class PerformanceSummary:
    total_caretakers: int
    active_caretakers: int
    on_leave_caretakers: int
    average_score: float
    top_performers: int
    needs_improvement: int
    total_assessments: int


@dataclass(frozen=True)
class AssociationRollup:
    association_name: str
    caretaker_count: int
    rated_caretakers: int
    total_score: float
    average_score: float


@dataclass(frozen=True)
class PerformanceAlert:
    caretaker_id: int
    name: str
    score: float
    level: str
    priority: str
    message: str


@dataclass(frozen=True)
class TrendPoint:
    label: str
    score: float
    assessments: int
    categories: dict[str, float]


def score_label(score: float) -> str:
    for threshold, label in SCORE_LABELS:
        if score >= threshold:
            return label
    return "Needs Improvement"


def is_top_performer(score: float | None) -> bool:
    return score is not None and score > TOP_PERFORMER_SCORE


def build_scores(
    caretakers: list[Caretaker], assessments: list[PerformanceAssessment]
) -> list[CaretakerScore]:
    by_caretaker: dict[int, list[PerformanceAssessment]] = defaultdict(list)
    for assessment in assessments:
        by_caretaker[assessment.caretaker_id].append(assessment)
    return [
        CaretakerScore(
            caretaker_id=caretaker.id,
            name=caretaker.full_name,
            association_name=caretaker.association.name if caretaker.association else NO_ASSOCIATION,
            status=CaretakerStatus(caretaker.status),
            assessments=by_caretaker.get(caretaker.id, []),
        )
        for caretaker in caretakers
    ]


def summarize(scores: list[CaretakerScore]) -> PerformanceSummary:
    rated = [item.raw_score for item in scores if item.raw_score is not None]
    return PerformanceSummary(
        total_caretakers=len(scores),
        active_caretakers=sum(1 for item in scores if item.status == CaretakerStatus.active),
        on_leave_caretakers=sum(1 for item in scores if item.status == CaretakerStatus.on_leave),
        average_score=round(mean(rated), 2) if rated else 0.0,
        top_performers=sum(1 for score in rated if is_top_performer(score)),
        needs_improvement=sum(1 for score in rated if score < NEEDS_IMPROVEMENT_SCORE),
        total_assessments=sum(item.assessment_count for item in scores),
    )


def top_performers(scores: list[CaretakerScore], limit: int = 10) -> list[tuple[int, CaretakerScore]]:
    rated = [item for item in scores if item.raw_score is not None]
    rated.sort(key=lambda item: (-item.raw_score, item.name))
    return list(enumerate(rated[:limit], start=1))


def association_rollup(scores: list[CaretakerScore]) -> list[AssociationRollup]:
    groups: dict[str, list[CaretakerScore]] = defaultdict(list)
    for item in scores:
        groups[item.association_name].append(item)

    rows = []
    for name, members in groups.items():
        rated = [item.score for item in members if item.score is not None]
        total = round(sum(rated), 2)
        rows.append(
            AssociationRollup(
                association_name=name,
                caretaker_count=len(members),
                rated_caretakers=len(rated),
                total_score=total,
                average_score=round(total / len(rated), 2) if rated else 0.0,
            )
        )
    rows.sort(key=lambda row: (-row.average_score, row.association_name))
    return rows


def performance_alerts(scores: list[CaretakerScore]) -> list[PerformanceAlert]:
    alerts = []
    for item in scores:
        raw = item.raw_score
        if raw is None:
            continue
        score = item.score
        if raw < CRITICAL_SCORE:
            alerts.append(
                PerformanceAlert(
                    caretaker_id=item.caretaker_id,
                    name=item.name,
                    score=score,
                    level="critical",
                    priority="high",
                    message=f"{item.name} is critically underperforming ({score:.1f}).",
                )
            )
        elif raw < NEEDS_IMPROVEMENT_SCORE:
            alerts.append(
                PerformanceAlert(
                    caretaker_id=item.caretaker_id,
                    name=item.name,
                    score=score,
                    level="warning",
                    priority="medium",
                    message=f"{item.name} needs improvement ({score:.1f}).",
                )
            )
    alerts.sort(key=lambda alert: alert.score)
    return alerts


def _category_value(assessment: PerformanceAssessment, key: str) -> float:
    categories = assessment.categories or {}
    value = categories.get(key)
    # an unscored (0 or missing) category falls back to the overall rating
    return float(value) if value else float(assessment.rating)


def category_performance(assessments: list[PerformanceAssessment]) -> dict[str, float]:
    if not assessments:
        return {key: 0.0 for key in CATEGORY_KEYS}
    return {
        key: round(mean(_category_value(item, key) for item in assessments) * SCORE_SCALE, 2)
        for key in CATEGORY_KEYS
    }


def _month_start(day: date, months_back: int) -> date:
    index = day.year * 12 + (day.month - 1) - months_back
    return date(index // 12, index % 12 + 1, 1)


def _buckets(period: str, today: date) -> list[tuple[str, date, date]]:
    """Return ``(label, start, end_exclusive)`` buckets, oldest first."""
    if period == "week":
        days = [today - timedelta(days=offset) for offset in range(6, -1, -1)]
        return [(day.isoformat(), day, day + timedelta(days=1)) for day in days]
    if period == "quarter":
        current = (today.month - 1) // 3
        buckets = []
        for back in range(3, -1, -1):
            index = today.year * 4 + current - back
            year, quarter = divmod(index, 4)
            start = date(year, quarter * 3 + 1, 1)
            end = _month_start(start, -3)
            buckets.append((f"Q{quarter + 1}-{year}", start, end))
        return buckets
    # month and year both cover the last twelve calendar months
    buckets = []
    for back in range(11, -1, -1):
        start = _month_start(today, back)
        buckets.append((start.strftime("%Y-%m"), start, _month_start(start, -1)))
    return buckets


def performance_trends(
    assessments: list[PerformanceAssessment], period: str = "month", today: date | None = None
) -> list[TrendPoint]:
    if period not in TREND_PERIODS:
        raise ValueError(f"Unsupported trend period: {period}")
    today = today or date.today()
    points = []
    for label, start, end in _buckets(period, today):
        bucket = [item for item in assessments if start <= item.assessment_date < end]
        score = round(mean(float(item.rating) for item in bucket) * SCORE_SCALE, 2) if bucket else 0.0
        points.append(
            TrendPoint(
                label=label,
                score=score,
                assessments=len(bucket),
                categories=category_performance(bucket),
            )
        )
    return points
