"""Site visit bookkeeping and the per-project visit ranking.

A ranking entry groups the visits of one project for one association and
scores the group 0..100: completion rate (40%), recency of the last visit
(30%), number of visits (20%) and whether the last visit recorded substantive
findings (10%).
"""

from __future__ import annotations

import math
from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime, timezone

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.models.enums import SiteVisitStatus
from app.models.site_visit import SiteVisit

NO_VISIT_DAYS = 365
FINDINGS_MIN_LENGTH = 50
RANKING_BANDS = (
    (80.0, "excellent"),
    (60.0, "good"),
    (40.0, "fair"),
)


@dataclass(frozen=True)
class ProjectRanking:
    project_id: int
    project_name: str
    association_name: str
    location: str
    visit_count: int
    completed_visits: int
    completion_rate: float
    progress_percentage: int
    last_visit_date: date | None
    last_visit_status: str
    days_since_last_visit: int
    score: int
    status: str
    renewal_eligible: bool
    pig_addition_eligible: bool


def get_visit_or_404(db: Session, visit_id: int) -> SiteVisit:
    visit = db.get(SiteVisit, visit_id)
    if visit is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Site visit not found.")
    return visit


def archive_visit(visit: SiteVisit) -> None:
    if visit.is_archived:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Site visit is already archived.")
    visit.is_archived = True
    visit.archived_at = datetime.now(timezone.utc)


def restore_visit(visit: SiteVisit) -> None:
    if not visit.is_archived:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Site visit is not archived.")
    visit.is_archived = False
    visit.archived_at = None


def ranking_status(score: float) -> str:
    for threshold, label in RANKING_BANDS:
        if score >= threshold:
            return label
    return "poor"


def _half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _rank_group(visits: list[SiteVisit], today: date) -> ProjectRanking:
    visits = sorted(visits, key=lambda visit: visit.visit_date, reverse=True)
    last = visits[0]
    total = len(visits)
    completed = sum(1 for visit in visits if SiteVisitStatus(visit.status) == SiteVisitStatus.completed)
    last_completed = SiteVisitStatus(last.status) == SiteVisitStatus.completed
    days_since = (today - last.visit_date).days
    completion_rate = completed / total * 100

    score = completion_rate * 0.4
    score += max(0, 100 - days_since * 2) * 0.3
    score += min(100, total * 25) * 0.2
    score += (100 if len(last.findings or "") > FINDINGS_MIN_LENGTH else 0) * 0.1

    return ProjectRanking(
        project_id=last.project_id,
        project_name=last.project_name,
        association_name=last.association_name,
        location=last.location,
        visit_count=total,
        completed_visits=completed,
        completion_rate=round(completion_rate, 2),
        progress_percentage=_half_up(completed / max(total, 4) * 100),
        last_visit_date=last.visit_date,
        last_visit_status=SiteVisitStatus(last.status).value,
        days_since_last_visit=days_since,
        score=_half_up(score),
        status=ranking_status(score),
        renewal_eligible=(
            completed >= 2 and days_since <= 90 and completion_rate >= 70 and last_completed
        ),
        pig_addition_eligible=score >= 65 and completed >= 1 and last_completed and days_since <= 60,
    )


def rank_projects(visits: list[SiteVisit], today: date | None = None) -> list[ProjectRanking]:
    today = today or date.today()
    groups: dict[tuple[int, str], list[SiteVisit]] = defaultdict(list)
    for visit in visits:
        groups[(visit.project_id, visit.association_name)].append(visit)
    rankings = [_rank_group(group, today) for group in groups.values()]
    rankings.sort(key=lambda item: (-item.score, item.project_name, item.association_name))
    return rankings
