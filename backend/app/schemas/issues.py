from datetime import date, datetime

from pydantic import BaseModel, Field

from app.models.enums import IssuePriority, IssueStatus
from app.schemas.common import ORMModel


class IssueCreateRequest(BaseModel):
    project_id: int
    association_id: int
    issue_category: str | None = Field(default=None, max_length=100)
    major_issue_challenge: str = Field(min_length=2, max_length=500)
    description: str = ""
    status: IssueStatus = IssueStatus.open
    priority: IssuePriority = IssuePriority.medium
    date_reported: date
    reported_by: str = Field(default="", max_length=255)
    assigned_to: str | None = Field(default=None, max_length=255)


class IssueUpdateRequest(BaseModel):
    issue_category: str | None = Field(default=None, max_length=100)
    major_issue_challenge: str | None = Field(default=None, min_length=2, max_length=500)
    description: str | None = None
    priority: IssuePriority | None = None
    reported_by: str | None = Field(default=None, max_length=255)
    assigned_to: str | None = Field(default=None, max_length=255)
    resolution_notes: str | None = None


class IssueStatusChangeRequest(BaseModel):
    status: IssueStatus
    resolution_notes: str | None = None
    date_resolved: date | None = None


class IssueOut(ORMModel):
    id: int
    issue_code: str
    project_id: int
    association_id: int
    issue_category: str | None = None
    major_issue_challenge: str
    description: str
    status: IssueStatus
    priority: IssuePriority
    date_reported: date
    date_resolved: date | None = None
    reported_by: str
    assigned_to: str | None = None
    resolution_notes: str | None = None
    is_archived: bool
    created_at: datetime
    updated_at: datetime
