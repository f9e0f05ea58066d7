from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from app.models.enums import AssociationStatus
from app.schemas.common import ORMModel


class AssociationCreateRequest(BaseModel):
    name: str = Field(min_length=2, max_length=255)
    date_formulated: date | None = None
    location: str = Field(min_length=1, max_length=255)
    region: str | None = Field(default=None, max_length=100)
    province: str | None = Field(default=None, max_length=100)
    contact_person: str = Field(default="", max_length=255)
    contact_number: str = Field(default="", max_length=50)
    email: str = Field(default="", max_length=255)
    operational_reason: str = ""
    no_active_members: int = Field(default=0, ge=0)
    no_inactive_members: int = Field(default=0, ge=0)
    status: AssociationStatus = AssociationStatus.active
    covid_affected: bool = False
    profit_sharing: bool = False
    profit_sharing_amount: Decimal = Field(default=Decimal("0"), ge=0)
    loan_scheme: bool = False
    loan_scheme_amount: Decimal = Field(default=Decimal("0"), ge=0)
    registrations_certifications: list[str] = Field(default_factory=list)
    final_org_adjectival_rating: str = ""
    final_org_rating_assessment: str = ""


class AssociationUpdateRequest(BaseModel):
    name: str | None = Field(default=None, min_length=2, max_length=255)
    date_formulated: date | None = None
    location: str | None = Field(default=None, min_length=1, max_length=255)
    region: str | None = Field(default=None, max_length=100)
    province: str | None = Field(default=None, max_length=100)
    contact_person: str | None = Field(default=None, max_length=255)
    contact_number: str | None = Field(default=None, max_length=50)
    email: str | None = Field(default=None, max_length=255)
    operational_reason: str | None = None
    no_active_members: int | None = Field(default=None, ge=0)
    no_inactive_members: int | None = Field(default=None, ge=0)
    status: AssociationStatus | None = None
    covid_affected: bool | None = None
    profit_sharing: bool | None = None
    profit_sharing_amount: Decimal | None = Field(default=None, ge=0)
    loan_scheme: bool | None = None
    loan_scheme_amount: Decimal | None = Field(default=None, ge=0)
    registrations_certifications: list[str] | None = None
    final_org_adjectival_rating: str | None = None
    final_org_rating_assessment: str | None = None


class AssociationOut(ORMModel):
    id: int
    name: str
    date_formulated: date | None = None
    status: AssociationStatus
    location: str
    region: str | None = None
    province: str | None = None
    contact_person: str
    contact_number: str
    email: str
    operational_reason: str
    no_active_members: int
    no_inactive_members: int
    covid_affected: bool
    profit_sharing: bool
    profit_sharing_amount: Decimal
    loan_scheme: bool
    loan_scheme_amount: Decimal
    registrations_certifications: list[str]
    final_org_adjectival_rating: str
    final_org_rating_assessment: str
    archived: bool
    created_at: datetime
    updated_at: datetime


class AssociationStatsOut(BaseModel):
    total_associations: int
    total_members: int
    growth_rate: int
