from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.api.deps import Actor, get_actor, get_db
from app.db.base import apply_changes
from app.models.association import Association
from app.models.enums import IssueStatus
from app.models.issue import Issue
from app.models.project import Project
from app.schemas.issues import (
    IssueCreateRequest,
    IssueOut,
    IssueStatusChangeRequest,
    IssueUpdateRequest,
)
from app.services.activity import record_activity
from app.services.issues import get_issue_or_404, next_issue_code, transition_issue


router = APIRouter(prefix="/issues-challenges", tags=["issues"])

MODULE = "Issues & Challenges"


@router.get("", response_model=list[IssueOut])
def list_issues(
    project_id: int | None = None,
    association_id: int | None = None,
    status_filter: IssueStatus | None = Query(default=None, alias="status"),
    include_archived: bool = False,
    db: Session = Depends(get_db),
) -> list[Issue]:
    statement = select(Issue).order_by(Issue.date_reported.desc(), Issue.id.desc())
    if not include_archived:
        statement = statement.where(Issue.is_archived.is_(False))
    if project_id is not None:
        statement = statement.where(Issue.project_id == project_id)
    if association_id is not None:
        statement = statement.where(Issue.association_id == association_id)
    if status_filter is not None:
        statement = statement.where(Issue.status == status_filter)
    return list(db.scalars(statement).all())


@router.get("/{issue_id}", response_model=IssueOut)
def get_issue(issue_id: int, db: Session = Depends(get_db)) -> Issue:
    return get_issue_or_404(db, issue_id)


@router.post("", response_model=IssueOut, status_code=status.HTTP_201_CREATED)
def create_issue(
    payload: IssueCreateRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> Issue:
    if db.get(Project, payload.project_id) is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Project not found.")
    if db.get(Association, payload.association_id) is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Association not found.")
    issue = Issue(**payload.model_dump(), issue_code=next_issue_code(db, payload.date_reported.year))
    if issue.status == IssueStatus.resolved:
        issue.date_resolved = payload.date_reported
    db.add(issue)
    db.flush()
    record_activity(
        db,
        module=MODULE,
        action="CREATE",
        details=f"Reported issue {issue.issue_code}: {issue.major_issue_challenge}",
        user=actor.user,
        ip_address=actor.ip_address,
        metadata={"issue_id": issue.id, "priority": payload.priority.value},
    )
    db.commit()
    db.refresh(issue)
    return issue


@router.patch("/{issue_id}", response_model=IssueOut)
def update_issue(
    issue_id: int,
    payload: IssueUpdateRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> Issue:
    issue = get_issue_or_404(db, issue_id)
    changes = payload.model_dump(exclude_unset=True)
    apply_changes(issue, changes)
    record_activity(
        db,
        module=MODULE,
        action="UPDATE",
        details=f"Updated issue {issue.issue_code}",
        user=actor.user,
        ip_address=actor.ip_address,
        metadata={"issue_id": issue.id, "fields": sorted(changes)},
    )
    db.commit()
    db.refresh(issue)
    return issue


@router.post("/{issue_id}/status", response_model=IssueOut)
def change_status(
    issue_id: int,
    payload: IssueStatusChangeRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> Issue:
    issue = get_issue_or_404(db, issue_id)
    previous = IssueStatus(issue.status)
    transition_issue(
        issue,
        payload.status,
        resolution_notes=payload.resolution_notes,
        resolved_on=payload.date_resolved,
    )
    record_activity(
        db,
        module=MODULE,
        action="STATUS_CHANGE",
        details=f"Issue {issue.issue_code} moved from {previous.value} to {payload.status.value}",
        user=actor.user,
        ip_address=actor.ip_address,
        metadata={"issue_id": issue.id, "from": previous.value, "to": payload.status.value},
    )
    db.commit()
    db.refresh(issue)
    return issue


def _set_archived(db: Session, issue_id: int, actor: Actor, archived: bool) -> Issue:
    issue = get_issue_or_404(db, issue_id)
    if issue.is_archived == archived:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Issue is already archived." if archived else "Issue is not archived.",
        )
    issue.is_archived = archived
    record_activity(
        db,
        module=MODULE,
        action="ARCHIVE" if archived else "RESTORE",
        details=f"{'Archived' if archived else 'Restored'} issue {issue.issue_code}",
        user=actor.user,
        ip_address=actor.ip_address,
        metadata={"issue_id": issue.id},
    )
    db.commit()
    db.refresh(issue)
    return issue


@router.post("/{issue_id}/archive", response_model=IssueOut)
def archive_issue(
    issue_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> Issue:
    return _set_archived(db, issue_id, actor, True)


@router.post("/{issue_id}/restore", response_model=IssueOut)
def restore_issue(
    issue_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> Issue:
    return _set_archived(db, issue_id, actor, False)


@router.delete("/{issue_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_issue(
    issue_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> None:
    issue = get_issue_or_404(db, issue_id)
    code = issue.issue_code
    db.delete(issue)
    record_activity(
        db,
        module=MODULE,
        action="DELETE",
        details=f"Deleted issue {code}",
        user=actor.user,
        ip_address=actor.ip_address,
        metadata={"issue_id": issue_id},
    )
    db.commit()
    return None
