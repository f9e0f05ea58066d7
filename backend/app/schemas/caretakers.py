from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator

from app.models.enums import CaretakerStatus
from app.schemas.common import ORMModel


def _normalize_status(value: object) -> object:
    if isinstance(value, str):
        return value.strip().lower().replace("-", "_")
    return value


class CaretakerCreateRequest(BaseModel):
    first_name: str = Field(min_length=1, max_length=100)
    middle_name: str | None = Field(default=None, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    extension: str | None = Field(default=None, max_length=20)
    participant_type: str = Field(default="", max_length=100)
    sex: str = Field(default="", max_length=20)
    is_lgbtq_member: bool = False
    contact_number: str | None = Field(default=None, max_length=50)
    email: str | None = Field(default=None, max_length=255)
    association_id: int | None = None
    barangay: str = Field(default="", max_length=100)
    city_municipality: str = Field(default="", max_length=100)
    province: str = Field(default="", max_length=100)
    region: str = Field(default="", max_length=100)
    modality: str = Field(default="", max_length=100)
    date_provided: date | None = None
    date_started: date | None = None
    status: CaretakerStatus = CaretakerStatus.active

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, value: object) -> object:
        return _normalize_status(value)


class CaretakerUpdateRequest(BaseModel):
    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    middle_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    extension: str | None = Field(default=None, max_length=20)
    participant_type: str | None = Field(default=None, max_length=100)
    sex: str | None = Field(default=None, max_length=20)
    is_lgbtq_member: bool | None = None
    contact_number: str | None = Field(default=None, max_length=50)
    email: str | None = Field(default=None, max_length=255)
    association_id: int | None = None
    barangay: str | None = Field(default=None, max_length=100)
    city_municipality: str | None = Field(default=None, max_length=100)
    province: str | None = Field(default=None, max_length=100)
    region: str | None = Field(default=None, max_length=100)
    modality: str | None = Field(default=None, max_length=100)
    date_provided: date | None = None
    date_started: date | None = None
    status: CaretakerStatus | None = None

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, value: object) -> object:
        return _normalize_status(value)


class CaretakerOut(ORMModel):
    id: int
    first_name: str
    middle_name: str | None = None
    last_name: str
    extension: str | None = None
    full_name: str
    participant_type: str
    sex: str
    is_lgbtq_member: bool
    contact_number: str | None = None
    email: str | None = None
    association_id: int | None = None
    barangay: str
    city_municipality: str
    province: str
    region: str
    modality: str
    date_provided: date | None = None
    date_started: date | None = None
    status: CaretakerStatus
    created_at: datetime
    updated_at: datetime


class AssessmentCategories(BaseModel):
    punctuality: float | None = Field(default=None, ge=0, le=5)
    communication: float | None = Field(default=None, ge=0, le=5)
    patient_care: float | None = Field(default=None, ge=0, le=5)
    professionalism: float | None = Field(default=None, ge=0, le=5)
    technical_skills: float | None = Field(default=None, ge=0, le=5)


class AssessmentCreateRequest(BaseModel):
    caretaker_id: int
    assessment_date: date
    rating: float = Field(ge=0, le=5)
    comments: str | None = None
    areas_of_improvement: list[str] = Field(default_factory=list)
    strengths: list[str] = Field(default_factory=list)
    assessed_by: str = Field(min_length=1, max_length=255)
    categories: AssessmentCategories | None = None


class AssessmentOut(ORMModel):
    id: int
    caretaker_id: int
    assessment_date: date
    rating: float
    comments: str | None = None
    areas_of_improvement: list[str]
    strengths: list[str]
    assessed_by: str
    categories: dict[str, float | None] | None = None
    created_at: datetime
