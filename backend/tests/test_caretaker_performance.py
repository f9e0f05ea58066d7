from datetime import date

import pytest

from app.models.association import Association
from app.models.caretaker import Caretaker, PerformanceAssessment
from app.models.enums import CaretakerStatus
from app.services.caretaker_performance import (
    NO_ASSOCIATION,
    association_rollup,
    build_scores,
    category_performance,
    is_top_performer,
    performance_alerts,
    performance_trends,
    score_label,
    summarize,
    top_performers,
)


def _caretaker(
    caretaker_id: int,
    first_name: str,
    association: Association | None = None,
    status: CaretakerStatus = CaretakerStatus.active,
) -> Caretaker:
    return Caretaker(
        id=caretaker_id,
        first_name=first_name,
        last_name="Dela Cruz",
        association=association,
        status=status,
    )


def _assess(caretaker_id: int, rating: float, day: date = date(2026, 5, 1), categories: dict | None = None):
    return PerformanceAssessment(
        caretaker_id=caretaker_id,
        assessment_date=day,
        rating=rating,
        assessed_by="Coordinator",
        categories=categories,
    )


def test_score_is_average_rating_times_twenty() -> None:
    scores = build_scores([_caretaker(1, "Ana")], [_assess(1, 4), _assess(1, 5), _assess(1, 3)])
    assert scores[0].average_rating == 4.0
    assert scores[0].score == 80.0


def test_exactly_eighty_is_not_a_top_performer() -> None:
    scores = build_scores([_caretaker(1, "Ana")], [_assess(1, 4), _assess(1, 5), _assess(1, 3)])
    assert is_top_performer(scores[0].score) is False
    assert summarize(scores).top_performers == 0
    assert is_top_performer(80.01) is True


def test_summary_counts_and_average_skip_unrated() -> None:
    caretakers = [
        _caretaker(1, "Ana"),
        _caretaker(2, "Ben", status=CaretakerStatus.on_leave),
        _caretaker(3, "Cora", status=CaretakerStatus.inactive),
        _caretaker(4, "Dan"),
    ]
    assessments = [_assess(1, 4.5), _assess(2, 2.5), _assess(3, 3.5), _assess(3, 3.5)]
    summary = summarize(build_scores(caretakers, assessments))
    assert summary.total_caretakers == 4
    assert summary.active_caretakers == 2
    assert summary.on_leave_caretakers == 1
    assert summary.average_score == 70.0
    assert summary.top_performers == 1
    assert summary.needs_improvement == 1
    assert summary.total_assessments == 4


def test_summary_with_no_assessments_is_zero() -> None:
    summary = summarize(build_scores([_caretaker(1, "Ana")], []))
    assert summary.average_score == 0.0
    assert summary.top_performers == 0


def test_top_performers_ranked_by_score() -> None:
    caretakers = [_caretaker(1, "Ana"), _caretaker(2, "Ben"), _caretaker(3, "Cora"), _caretaker(4, "Dan")]
    assessments = [_assess(1, 3.0), _assess(2, 4.8), _assess(3, 4.1)]
    ranked = top_performers(build_scores(caretakers, assessments), limit=2)
    assert [(rank, item.caretaker_id) for rank, item in ranked] == [(1, 2), (2, 3)]


def test_association_rollup_groups_and_averages_rated_only() -> None:
    north = Association(id=1, name="North Hog Raisers")
    south = Association(id=2, name="South Growers")
    caretakers = [
        _caretaker(1, "Ana", north),
        _caretaker(2, "Ben", north),
        _caretaker(3, "Cora", north),
        _caretaker(4, "Dan", south),
        _caretaker(5, "Eli"),
    ]
    assessments = [_assess(1, 4.0), _assess(2, 5.0), _assess(4, 3.0), _assess(5, 2.0)]
    rows = association_rollup(build_scores(caretakers, assessments))
    assert [row.association_name for row in rows] == ["North Hog Raisers", "South Growers", NO_ASSOCIATION]
    assert rows[0].caretaker_count == 3
    assert rows[0].rated_caretakers == 2
    assert rows[0].total_score == 180.0
    assert rows[0].average_score == 90.0
    assert rows[2].average_score == 40.0


def test_alert_levels() -> None:
    caretakers = [_caretaker(1, "Ana"), _caretaker(2, "Ben"), _caretaker(3, "Cora")]
    assessments = [_assess(1, 2.0), _assess(2, 2.8), _assess(3, 3.0)]
    alerts = performance_alerts(build_scores(caretakers, assessments))
    assert [(alert.caretaker_id, alert.level, alert.priority) for alert in alerts] == [
        (1, "critical", "high"),
        (2, "warning", "medium"),
    ]


@pytest.mark.parametrize(
    "score, label",
    [
        (95.0, "Excellent"),
        (90.0, "Excellent"),
        (85.0, "Very Good"),
        (80.0, "Very Good"),
        (70.0, "Good"),
        (60.0, "Satisfactory"),
        (59.9, "Needs Improvement"),
    ],
)
def test_score_labels(score: float, label: str) -> None:
    assert score_label(score) == label


def test_category_scores_fall_back_to_overall_rating() -> None:
    assessments = [
        _assess(1, 4.0, categories={"punctuality": 5.0}),
        _assess(1, 3.0),
    ]
    categories = category_performance(assessments)
    assert categories["punctuality"] == 80.0
    assert categories["communication"] == 70.0


def test_monthly_trend_buckets_are_deterministic() -> None:
    assessments = [
        _assess(1, 4.0, date(2026, 9, 3)),
        _assess(1, 5.0, date(2026, 9, 20)),
        _assess(1, 3.0, date(2026, 10, 1)),
        _assess(1, 1.0, date(2024, 1, 1)),
    ]
    points = performance_trends(assessments, "month", today=date(2026, 10, 19))
    assert len(points) == 12
    assert points[0].label == "2025-11"
    assert points[-2].label == "2026-09"
    assert points[-2].score == 90.0
    assert points[-2].assessments == 2
    assert points[-1].score == 60.0
    assert points[0].score == 0.0
    assert performance_trends(assessments, "month", today=date(2026, 10, 19)) == points


def test_week_and_quarter_trend_windows() -> None:
    assessments = [_assess(1, 4.0, date(2026, 10, 19)), _assess(1, 2.0, date(2026, 8, 1))]
    week = performance_trends(assessments, "week", today=date(2026, 10, 19))
    assert len(week) == 7
    assert week[-1].label == "2026-10-19"
    assert week[-1].score == 80.0

    quarters = performance_trends(assessments, "quarter", today=date(2026, 10, 19))
    assert [point.label for point in quarters] == ["Q1-2026", "Q2-2026", "Q3-2026", "Q4-2026"]
    assert quarters[2].score == 40.0
    assert quarters[3].score == 80.0


def test_unknown_trend_period_rejected() -> None:
    with pytest.raises(ValueError):
        performance_trends([], "decade")


@pytest.mark.parametrize(
    ("rating", "top", "needs_improvement"),
    [
        (4.0001, 1, 0),
        (4.0, 0, 0),
        (3.0, 0, 0),
        (2.9999, 0, 1),
    ],
)
def test_thresholds_use_unrounded_score(rating: float, top: int, needs_improvement: int) -> None:
    scores = build_scores([_caretaker(1, "Ana")], [_assess(1, rating)])
    summary = summarize(scores)
    assert summary.top_performers == top
    assert summary.needs_improvement == needs_improvement


def test_just_below_sixty_raises_a_warning() -> None:
    scores = build_scores([_caretaker(1, "Ana")], [_assess(1, 2.9999)])
    assert scores[0].score == 60.0
    alerts = performance_alerts(scores)
    assert [alert.level for alert in alerts] == ["warning"]


def test_zero_category_score_falls_back_to_overall_rating() -> None:
    categories = category_performance([_assess(1, 4.0, categories={"punctuality": 0, "communication": 2.0})])
    assert categories["punctuality"] == 80.0
    assert categories["communication"] == 40.0
