from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator

from app.models.enums import SiteVisitStatus
from app.schemas.common import ORMModel


def _normalize_status(value: object) -> object:
    if isinstance(value, str):
        return value.strip().lower().replace("-", "_")
    return value


class SiteVisitCreateRequest(BaseModel):
    project_id: int
    association_name: str = Field(min_length=1, max_length=255)
    visit_number: int = Field(ge=1)
    visit_date: date
    status: SiteVisitStatus = SiteVisitStatus.scheduled
    visit_purpose: str = Field(min_length=1)
    location: str = Field(min_length=1, max_length=255)
    participants: list[str] = Field(default_factory=list)
    findings: str = ""
    recommendations: str = ""
    next_steps: str = ""
    caretakers: list[str] = Field(default_factory=list)
    assigned_caretaker_id: int | None = None
    created_by: str = Field(default="Admin User", max_length=255)

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, value: object) -> object:
        return _normalize_status(value)


class SiteVisitUpdateRequest(BaseModel):
    project_id: int | None = None
    association_name: str | None = Field(default=None, min_length=1, max_length=255)
    visit_number: int | None = Field(default=None, ge=1)
    visit_date: date | None = None
    status: SiteVisitStatus | None = None
    visit_purpose: str | None = Field(default=None, min_length=1)
    location: str | None = Field(default=None, min_length=1, max_length=255)
    participants: list[str] | None = None
    findings: str | None = None
    recommendations: str | None = None
    next_steps: str | None = None
    caretakers: list[str] | None = None
    assigned_caretaker_id: int | None = None

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, value: object) -> object:
        return _normalize_status(value)


class SiteVisitOut(ORMModel):
    id: int
    project_id: int
    project_name: str
    association_name: str
    visit_number: int
    visit_date: date
    status: SiteVisitStatus
    visit_purpose: str
    location: str
    participants: list[str]
    findings: str
    recommendations: str
    next_steps: str
    caretakers: list[str]
    assigned_caretaker_id: int | None = None
    created_by: str
    is_archived: bool
    archived_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class ProjectRankingOut(BaseModel):
    project_id: int
    project_name: str
    association_name: str
    location: str
    visit_count: int
    completed_visits: int
    completion_rate: float
    progress_percentage: int
    last_visit_date: date | None = None
    last_visit_status: str
    days_since_last_visit: int
    score: int
    status: str
    renewal_eligible: bool
    pig_addition_eligible: bool
