from typing import Literal

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.api.deps import Actor, get_actor, get_db
from app.api.routes.financial_reports import query_reports
from app.api.routes.monitoring import query_records
from app.api.routes.projects import query_projects
from app.models.caretaker import Caretaker, PerformanceAssessment
from app.models.enums import ActivityStatus, AssociationStatus, ProjectStatus
from app.models.project import Project
from app.services.activity import filtered_activities, record_activity
from app.services.association_reports import list_association_reports
from app.services.caretaker_performance import build_scores
from app.services.exports import (
    XLSX_MEDIA_TYPE,
    ExportTable,
    activity_logs_table,
    association_reports_table,
    caretakers_table,
    financial_reports_table,
    monitoring_table,
    projects_table,
    render_csv,
    render_xlsx,
)


router = APIRouter(prefix="/exports", tags=["exports"])

ExportFormat = Literal["csv", "xlsx"]


def _respond(db: Session, actor: Actor, table: ExportTable, export_format: ExportFormat, module: str):
    record_activity(
        db,
        module=module,
        action="EXPORT",
        details=f"Exported {len(table.rows)} rows as {export_format.upper()}",
        user=actor.user,
        ip_address=actor.ip_address,
        metadata={"export": table.name, "format": export_format, "rows": len(table.rows)},
    )
    db.commit()

    filename = table.filename(export_format)
    headers = {"Content-Disposition": f'attachment; filename="{filename}"'}
    if export_format == "xlsx":
        return StreamingResponse(render_xlsx(table), media_type=XLSX_MEDIA_TYPE, headers=headers)
    return StreamingResponse(
        iter([render_csv(table)]),
        media_type="text/csv",
        headers=headers,
    )


@router.get("/projects")
def export_projects(
    export_format: ExportFormat = Query(default="csv", alias="format"),
    search: str | None = None,
    status_filter: ProjectStatus | None = Query(default=None, alias="status"),
    enterprise_type: str | None = None,
    association_id: int | None = None,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    projects = query_projects(
        db,
        search=search,
        status_filter=status_filter,
        enterprise_type=enterprise_type,
        association_id=association_id,
    )
    return _respond(db, actor, projects_table(projects), export_format, "Projects Management")


@router.get("/financial-reports")
def export_financial_reports(
    export_format: ExportFormat = Query(default="csv", alias="format"),
    association_id: int | None = None,
    caretaker_id: int | None = None,
    period: str | None = None,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    reports = query_reports(db, association_id=association_id, caretaker_id=caretaker_id, period=period)
    return _respond(db, actor, financial_reports_table(reports), export_format, "Financial Reports")


@router.get("/monitoring")
def export_monitoring(
    export_format: ExportFormat = Query(default="csv", alias="format"),
    project_id: int | None = None,
    field_officer_id: str | None = None,
    status_filter: str | None = Query(default=None, alias="status"),
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    records = query_records(
        db,
        project_id=project_id,
        field_officer_id=field_officer_id,
        status_filter=status_filter,
    )
    project_names = dict(db.execute(select(Project.id, Project.project_name)).all())
    return _respond(db, actor, monitoring_table(records, project_names), export_format, "Project Monitoring")


@router.get("/association-reports")
def export_association_reports(
    export_format: ExportFormat = Query(default="csv", alias="format"),
    search: str | None = None,
    status_filter: AssociationStatus | None = Query(default=None, alias="status"),
    rating: str | None = None,
    include_archived: bool = False,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    reports = list_association_reports(
        db, search=search, status=status_filter, rating=rating, include_archived=include_archived
    )
    return _respond(db, actor, association_reports_table(reports), export_format, "Association Reports")


@router.get("/caretakers")
def export_caretakers(
    export_format: ExportFormat = Query(default="csv", alias="format"),
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    caretakers = list(db.scalars(select(Caretaker).order_by(Caretaker.last_name, Caretaker.first_name)).all())
    assessments = list(db.scalars(select(PerformanceAssessment)).all())
    table = caretakers_table(
        build_scores(caretakers, assessments),
        emails={caretaker.id: caretaker.email or "" for caretaker in caretakers},
        started={caretaker.id: caretaker.date_started for caretaker in caretakers},
    )
    return _respond(db, actor, table, export_format, "Caretaker Management")


@router.get("/activity-logs")
def export_activity_logs(
    export_format: ExportFormat = Query(default="csv", alias="format"),
    search: str | None = None,
    module: str | None = None,
    status_filter: ActivityStatus | None = Query(default=None, alias="status"),
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
):
    entries = filtered_activities(db, search=search, module=module, status=status_filter)
    return _respond(db, actor, activity_logs_table(entries), export_format, "Activity Log")
