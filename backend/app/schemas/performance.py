from datetime import date

from pydantic import BaseModel


class PerformanceSummaryOut(BaseModel):
    total_caretakers: int
    active_caretakers: int
    on_leave_caretakers: int
    average_score: float
    top_performers: int
    needs_improvement: int
    total_assessments: int


class TopPerformerOut(BaseModel):
    rank: int
    caretaker_id: int
    name: str
    association_name: str
    average_rating: float
    score: float
    label: str
    assessment_count: int


class AssociationPerformanceOut(BaseModel):
    association_name: str
    caretaker_count: int
    rated_caretakers: int
    total_score: float
    average_score: float


class PerformanceAlertOut(BaseModel):
    caretaker_id: int
    name: str
    score: float
    level: str
    priority: str
    message: str


class TrendPointOut(BaseModel):
    label: str
    score: float
    assessments: int
    categories: dict[str, float]


class CategoryPerformanceOut(BaseModel):
    category: str
    score: float


class CaretakerProfileOut(BaseModel):
    caretaker_id: int
    name: str
    association_name: str
    status: str
    assessment_count: int
    average_rating: float | None = None
    score: float | None = None
    label: str | None = None
    last_assessment_date: date | None = None
    categories: list[CategoryPerformanceOut]
