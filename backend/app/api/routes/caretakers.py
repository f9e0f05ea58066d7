from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from app.api.deps import Actor, get_actor, get_db
from app.db.base import apply_changes
from app.models.association import Association
from app.models.caretaker import Caretaker, PerformanceAssessment
from app.models.enums import CaretakerStatus
from app.schemas.caretakers import (
    AssessmentCreateRequest,
    AssessmentOut,
    CaretakerCreateRequest,
    CaretakerOut,
    CaretakerUpdateRequest,
)
from app.schemas.performance import CaretakerProfileOut, CategoryPerformanceOut
from app.services.activity import record_activity
from app.services.caretaker_performance import build_scores, category_performance, score_label


router = APIRouter(prefix="/caretakers", tags=["caretakers"])

MODULE = "Caretaker Management"


def get_caretaker_or_404(db: Session, caretaker_id: int) -> Caretaker:
    caretaker = db.get(Caretaker, caretaker_id)
    if caretaker is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Caretaker not found.")
    return caretaker


def _check_association(db: Session, association_id: int | None) -> None:
    if association_id is not None and db.get(Association, association_id) is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Association not found.")


@router.get("", response_model=list[CaretakerOut])
def list_caretakers(
    search: str | None = None,
    status_filter: CaretakerStatus | None = Query(default=None, alias="status"),
    association_id: int | None = None,
    db: Session = Depends(get_db),
) -> list[Caretaker]:
    statement = select(Caretaker).order_by(Caretaker.last_name, Caretaker.first_name)
    if status_filter is not None:
        statement = statement.where(Caretaker.status == status_filter)
    if association_id is not None:
        statement = statement.where(Caretaker.association_id == association_id)
    if search:
        pattern = f"%{search}%"
        statement = statement.where(
            or_(
                Caretaker.first_name.ilike(pattern),
                Caretaker.last_name.ilike(pattern),
                Caretaker.email.ilike(pattern),
            )
        )
    return list(db.scalars(statement).all())


@router.get("/assessments", response_model=list[AssessmentOut])
def list_assessments(
    caretaker_id: int | None = None,
    db: Session = Depends(get_db),
) -> list[PerformanceAssessment]:
    statement = select(PerformanceAssessment).order_by(
        PerformanceAssessment.assessment_date.desc(), PerformanceAssessment.id.desc()
    )
    if caretaker_id is not None:
        statement = statement.where(PerformanceAssessment.caretaker_id == caretaker_id)
    return list(db.scalars(statement).all())


@router.post("/assessments", response_model=AssessmentOut, status_code=status.HTTP_201_CREATED)
def create_assessment(
    payload: AssessmentCreateRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> PerformanceAssessment:
    caretaker = get_caretaker_or_404(db, payload.caretaker_id)
    assessment = PerformanceAssessment(
        caretaker_id=caretaker.id,
        assessment_date=payload.assessment_date,
        rating=payload.rating,
        comments=payload.comments,
        areas_of_improvement=payload.areas_of_improvement,
        strengths=payload.strengths,
        assessed_by=payload.assessed_by,
        categories=payload.categories.model_dump(exclude_none=True) if payload.categories else None,
    )
    db.add(assessment)
    db.flush()
    record_activity(
        db,
        module=MODULE,
        action="ASSESS",
        details=f"Assessed {caretaker.full_name}: {payload.rating:.1f}/5",
        user=actor.user,
        ip_address=actor.ip_address,
        metadata={"caretaker_id": caretaker.id, "assessment_id": assessment.id},
    )
    db.commit()
    db.refresh(assessment)
    return assessment


@router.get("/{caretaker_id}", response_model=CaretakerOut)
def get_caretaker(caretaker_id: int, db: Session = Depends(get_db)) -> Caretaker:
    return get_caretaker_or_404(db, caretaker_id)


@router.get("/{caretaker_id}/performance", response_model=CaretakerProfileOut)
def caretaker_profile(caretaker_id: int, db: Session = Depends(get_db)) -> CaretakerProfileOut:
    caretaker = get_caretaker_or_404(db, caretaker_id)
    assessments = sorted(caretaker.assessments, key=lambda item: item.assessment_date)
    entry = build_scores([caretaker], assessments)[0]
    return CaretakerProfileOut(
        caretaker_id=caretaker.id,
        name=entry.name,
        association_name=entry.association_name,
        status=entry.status.value,
        assessment_count=entry.assessment_count,
        average_rating=round(entry.average_rating, 2) if entry.average_rating is not None else None,
        score=entry.score,
        label=score_label(entry.raw_score) if entry.raw_score is not None else None,
        last_assessment_date=assessments[-1].assessment_date if assessments else None,
        categories=[
            CategoryPerformanceOut(category=key, score=value)
            for key, value in category_performance(assessments).items()
        ],
    )


@router.post("", response_model=CaretakerOut, status_code=status.HTTP_201_CREATED)
def create_caretaker(
    payload: CaretakerCreateRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> Caretaker:
    _check_association(db, payload.association_id)
    caretaker = Caretaker(**payload.model_dump())
    db.add(caretaker)
    db.flush()
    record_activity(
        db,
        module=MODULE,
        action="CREATE",
        details=f"Added caretaker {caretaker.full_name}",
        user=actor.user,
        ip_address=actor.ip_address,
        metadata={"caretaker_id": caretaker.id},
    )
    db.commit()
    db.refresh(caretaker)
    return caretaker


@router.patch("/{caretaker_id}", response_model=CaretakerOut)
def update_caretaker(
    caretaker_id: int,
    payload: CaretakerUpdateRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> Caretaker:
    caretaker = get_caretaker_or_404(db, caretaker_id)
    changes = payload.model_dump(exclude_unset=True)
    if "association_id" in changes:
        _check_association(db, changes["association_id"])
    apply_changes(caretaker, changes)
    record_activity(
        db,
        module=MODULE,
        action="UPDATE",
        details=f"Updated caretaker {caretaker.full_name}",
        user=actor.user,
        ip_address=actor.ip_address,
        metadata={"caretaker_id": caretaker.id, "fields": sorted(changes)},
    )
    db.commit()
    db.refresh(caretaker)
    return caretaker


@router.delete("/{caretaker_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_caretaker(
    caretaker_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> None:
    caretaker = get_caretaker_or_404(db, caretaker_id)
    name = caretaker.full_name
    db.delete(caretaker)
    record_activity(
        db,
        module=MODULE,
        action="DELETE",
        details=f"Removed caretaker {name}",
        user=actor.user,
        ip_address=actor.ip_address,
        metadata={"caretaker_id": caretaker_id},
    )
    db.commit()
    return None
