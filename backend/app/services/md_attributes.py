from __future__ import annotations

from collections import Counter
from dataclasses import dataclass

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.enums import LivelihoodStatus
from app.models.md_attribute import MDAttribute

CODE_PREFIX = "MDA-"
SCORE_FIELDS = (
    "market_demand_score",
    "market_supply_score",
    "enterprise_plan_score",
    "financial_stability_score",
)


@dataclass
class MDAttributeStats:
    total_assessments: int
    average_total_score: float
    by_livelihood_status: dict[str, int]


def format_attribute_code(sequence: int) -> str:
    return f"{CODE_PREFIX}{sequence:03d}"


def next_attribute_code(db: Session) -> str:
    codes = db.scalars(select(MDAttribute.attribute_code)).all()
    sequences = [int(code[len(CODE_PREFIX):]) for code in codes if code[len(CODE_PREFIX):].isdigit()]
    return format_attribute_code(max(sequences, default=0) + 1)


def total_score(attribute: MDAttribute) -> int:
    return sum(getattr(attribute, field) or 0 for field in SCORE_FIELDS)


def get_attribute_or_404(db: Session, attribute_id: int) -> MDAttribute:
    attribute = db.get(MDAttribute, attribute_id)
    if attribute is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="MD attribute not found.")
    return attribute


def attribute_stats(attributes: list[MDAttribute]) -> MDAttributeStats:
    counts = Counter(LivelihoodStatus(attribute.livelihood_status).value for attribute in attributes)
    totals = [attribute.total_score for attribute in attributes]
    average = round(sum(totals) / len(totals), 1) if totals else 0.0
    return MDAttributeStats(
        total_assessments=len(attributes),
        average_total_score=average,
        by_livelihood_status={member.value: counts[member.value] for member in LivelihoodStatus},
    )
