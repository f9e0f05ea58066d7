from __future__ import annotations

from datetime import date

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.enums import IssueStatus
from app.models.issue import Issue

ISSUE_TRANSITIONS: dict[IssueStatus, set[IssueStatus]] = {
    IssueStatus.open: {IssueStatus.in_progress, IssueStatus.resolved, IssueStatus.closed},
    IssueStatus.in_progress: {IssueStatus.resolved, IssueStatus.closed},
    IssueStatus.resolved: {IssueStatus.in_progress, IssueStatus.closed},
    IssueStatus.closed: set(),
}


def format_issue_code(year: int, sequence: int) -> str:
    return f"ISS-{year}-{sequence:03d}"


def next_issue_code(db: Session, year: int) -> str:
    prefix = f"ISS-{year}-"
    codes = db.scalars(select(Issue.issue_code).where(Issue.issue_code.like(f"{prefix}%"))).all()
    sequences = [int(code[len(prefix):]) for code in codes if code[len(prefix):].isdigit()]
    return format_issue_code(year, max(sequences, default=0) + 1)


def get_issue_or_404(db: Session, issue_id: int) -> Issue:
    issue = db.get(Issue, issue_id)
    if issue is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Issue not found.")
    return issue


def can_transition(current: IssueStatus, target: IssueStatus) -> bool:
    return target in ISSUE_TRANSITIONS[IssueStatus(current)]


def transition_issue(
    issue: Issue,
    target: IssueStatus,
    *,
    resolution_notes: str | None = None,
    resolved_on: date | None = None,
) -> None:
    current = IssueStatus(issue.status)
    if not can_transition(current, target):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Cannot move issue from {current.value} to {target.value}.",
        )
    issue.status = target
    if target == IssueStatus.resolved:
        issue.date_resolved = resolved_on or date.today()
    elif target != IssueStatus.closed:
        issue.date_resolved = None
    if resolution_notes is not None:
        issue.resolution_notes = resolution_notes
