from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session

from app.api.deps import Actor, get_actor, get_db
from app.models.enums import AssociationStatus
from app.schemas.association_reports import AssociationReportOut
from app.services.activity import record_activity
from app.services.association_reports import build_association_report, list_association_reports
from app.services.associations import get_association_or_404
from app.services.reports import render_association_report_pdf


router = APIRouter(prefix="/association-reports", tags=["association-reports"])


@router.get("", response_model=list[AssociationReportOut])
def list_reports(
    search: str | None = None,
    status_filter: AssociationStatus | None = Query(default=None, alias="status"),
    rating: str | None = None,
    include_archived: bool = False,
    db: Session = Depends(get_db),
) -> list[AssociationReportOut]:
    return list_association_reports(
        db, search=search, status=status_filter, rating=rating, include_archived=include_archived
    )


@router.get("/{association_id}", response_model=AssociationReportOut)
def get_report(association_id: int, db: Session = Depends(get_db)) -> AssociationReportOut:
    return build_association_report(db, get_association_or_404(db, association_id))


@router.get("/{association_id}/pdf")
def download_pdf(
    association_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> Response:
    report = build_association_report(db, get_association_or_404(db, association_id))
    content = render_association_report_pdf(report)
    record_activity(
        db,
        module="Association Reports",
        action="EXPORT",
        details=f"Generated PDF report for {report.association_name}",
        user=actor.user,
        ip_address=actor.ip_address,
        metadata={"association_id": association_id, "overall_rating": report.metrics.overall_rating},
    )
    db.commit()
    filename = f"association-report-{association_id}.pdf"
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
