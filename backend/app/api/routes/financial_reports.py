from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.api.deps import Actor, get_actor, get_db
from app.db.base import apply_changes
from app.models.association import Association
from app.models.caretaker import Caretaker
from app.models.financial_report import FinancialReport
from app.schemas.dashboard import DashboardStatsOut
from app.schemas.financial_reports import (
    FinancialReportCreateRequest,
    FinancialReportOut,
    FinancialReportUpdateRequest,
)
from app.services.activity import record_activity
from app.services.dashboard import build_dashboard_stats
from app.services.financials import apply_breakdown, get_report_or_404


router = APIRouter(prefix="/financial-reports", tags=["financial-reports"])

MODULE = "Financial Reports"


def _caretaker_or_400(db: Session, caretaker_id: int | None) -> Caretaker | None:
    if caretaker_id is None:
        return None
    caretaker = db.get(Caretaker, caretaker_id)
    if caretaker is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Caretaker not found.")
    return caretaker


def query_reports(
    db: Session,
    *,
    association_id: int | None = None,
    caretaker_id: int | None = None,
    period: str | None = None,
) -> list[FinancialReport]:
    statement = select(FinancialReport).order_by(
        FinancialReport.report_date.desc(), FinancialReport.id.desc()
    )
    if association_id is not None:
        statement = statement.where(FinancialReport.association_id == association_id)
    if caretaker_id is not None:
        statement = statement.where(FinancialReport.caretaker_id == caretaker_id)
    if period:
        statement = statement.where(FinancialReport.period == period)
    return list(db.scalars(statement).all())


@router.get("", response_model=list[FinancialReportOut])
def list_reports(
    association_id: int | None = None,
    caretaker_id: int | None = None,
    period: str | None = None,
    db: Session = Depends(get_db),
) -> list[FinancialReport]:
    return query_reports(db, association_id=association_id, caretaker_id=caretaker_id, period=period)


@router.get("/summary", response_model=DashboardStatsOut)
def report_summary(
    association_id: int | None = None,
    period: str | None = None,
    db: Session = Depends(get_db),
) -> DashboardStatsOut:
    reports = query_reports(db, association_id=association_id, period=period)
    if association_id is not None:
        total_associations = 1 if reports else 0
    else:
        total_associations = int(
            db.scalar(select(func.count(Association.id)).where(Association.archived.is_(False))) or 0
        )
    return build_dashboard_stats(reports, total_associations)


@router.get("/{report_id}", response_model=FinancialReportOut)
def get_report(report_id: int, db: Session = Depends(get_db)) -> FinancialReport:
    return get_report_or_404(db, report_id)


@router.post("", response_model=FinancialReportOut, status_code=status.HTTP_201_CREATED)
def create_report(
    payload: FinancialReportCreateRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> FinancialReport:
    association = db.get(Association, payload.association_id)
    if association is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Association not found.")
    caretaker = _caretaker_or_400(db, payload.caretaker_id)
    report = FinancialReport(
        association_id=association.id,
        association_name=association.name,
        caretaker_id=caretaker.id if caretaker else None,
        caretaker_name=caretaker.full_name if caretaker else None,
        period=payload.period,
        sales=payload.sales,
        costs=payload.costs,
        expenses=payload.expenses,
        report_date=payload.report_date,
    )
    apply_breakdown(report)
    db.add(report)
    db.flush()
    record_activity(
        db,
        module=MODULE,
        action="CREATE",
        details=f"Created financial report for {association.name} ({report.period})",
        user=actor.user,
        ip_address=actor.ip_address,
        metadata={"report_id": report.id, "profit": str(report.profit), "balance": str(report.balance)},
    )
    db.commit()
    db.refresh(report)
    return report


@router.patch("/{report_id}", response_model=FinancialReportOut)
def update_report(
    report_id: int,
    payload: FinancialReportUpdateRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> FinancialReport:
    report = get_report_or_404(db, report_id)
    changes = payload.model_dump(exclude_unset=True)
    if "caretaker_id" in changes:
        caretaker = _caretaker_or_400(db, changes.pop("caretaker_id"))
        report.caretaker_id = caretaker.id if caretaker else None
        report.caretaker_name = caretaker.full_name if caretaker else None
    apply_changes(report, changes)
    apply_breakdown(report)
    record_activity(
        db,
        module=MODULE,
        action="UPDATE",
        details=f"Updated financial report #{report.id} for {report.association_name}",
        user=actor.user,
        ip_address=actor.ip_address,
        metadata={"report_id": report.id, "fields": sorted(payload.model_dump(exclude_unset=True))},
    )
    db.commit()
    db.refresh(report)
    return report


@router.delete("/{report_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_report(
    report_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> None:
    report = get_report_or_404(db, report_id)
    db.delete(report)
    record_activity(
        db,
        module=MODULE,
        action="DELETE",
        details=f"Deleted financial report #{report_id} for {report.association_name}",
        user=actor.user,
        ip_address=actor.ip_address,
        metadata={"report_id": report_id},
    )
    db.commit()
    return None
