from dataclasses import asdict
from typing import Literal

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.models.caretaker import Caretaker, PerformanceAssessment
from app.schemas.performance import (
    AssociationPerformanceOut,
    CategoryPerformanceOut,
    PerformanceAlertOut,
    PerformanceSummaryOut,
    TopPerformerOut,
    TrendPointOut,
)
from app.services.caretaker_performance import (
    CaretakerScore,
    association_rollup,
    build_scores,
    category_performance,
    performance_alerts,
    performance_trends,
    score_label,
    summarize,
    top_performers,
)


router = APIRouter(prefix="/performance", tags=["performance"])


def _load(db: Session) -> tuple[list[CaretakerScore], list[PerformanceAssessment]]:
    caretakers = list(db.scalars(select(Caretaker).order_by(Caretaker.id)).all())
    assessments = list(db.scalars(select(PerformanceAssessment)).all())
    return build_scores(caretakers, assessments), assessments


@router.get("/summary", response_model=PerformanceSummaryOut)
def get_summary(db: Session = Depends(get_db)) -> PerformanceSummaryOut:
    scores, _ = _load(db)
    return PerformanceSummaryOut(**asdict(summarize(scores)))


@router.get("/top-performers", response_model=list[TopPerformerOut])
def get_top_performers(
    limit: int = Query(default=10, ge=1, le=100),
    db: Session = Depends(get_db),
) -> list[TopPerformerOut]:
    scores, _ = _load(db)
    return [
        TopPerformerOut(
            rank=rank,
            caretaker_id=item.caretaker_id,
            name=item.name,
            association_name=item.association_name,
            average_rating=round(item.average_rating, 2),
            score=item.score,
            label=score_label(item.raw_score),
            assessment_count=item.assessment_count,
        )
        for rank, item in top_performers(scores, limit=limit)
    ]


@router.get("/associations", response_model=list[AssociationPerformanceOut])
def get_association_performance(db: Session = Depends(get_db)) -> list[AssociationPerformanceOut]:
    scores, _ = _load(db)
    return [AssociationPerformanceOut(**asdict(row)) for row in association_rollup(scores)]


@router.get("/alerts", response_model=list[PerformanceAlertOut])
def get_alerts(db: Session = Depends(get_db)) -> list[PerformanceAlertOut]:
    scores, _ = _load(db)
    return [PerformanceAlertOut(**asdict(alert)) for alert in performance_alerts(scores)]


@router.get("/trends", response_model=list[TrendPointOut])
def get_trends(
    period: Literal["week", "month", "quarter", "year"] = "month",
    db: Session = Depends(get_db),
) -> list[TrendPointOut]:
    _, assessments = _load(db)
    return [TrendPointOut(**asdict(point)) for point in performance_trends(assessments, period)]


@router.get("/categories", response_model=list[CategoryPerformanceOut])
def get_categories(db: Session = Depends(get_db)) -> list[CategoryPerformanceOut]:
    _, assessments = _load(db)
    return [
        CategoryPerformanceOut(category=key, score=value)
        for key, value in category_performance(assessments).items()
    ]
