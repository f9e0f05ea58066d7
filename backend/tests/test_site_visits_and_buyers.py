import re
from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import get_db
from app.db.base import Base
from app.main import app
from app.models.enums import BuyerStatus, BuyerType, LivelihoodStatus, SiteVisitStatus
from app.models.institutional_buyer import InstitutionalBuyer
from app.models.md_attribute import MDAttribute
from app.models.site_visit import SiteVisit
from app.services.institutional_buyers import buyer_stats, generate_buyer_code
from app.services.md_attributes import attribute_stats, format_attribute_code, total_score
from app.services.site_visits import rank_projects, ranking_status

TODAY = date(2026, 10, 19)
FINDINGS = "Pens are clean, feed stock covers a month and the herd shows no sign of illness."


def _visit(
    project_id: int,
    day: date,
    visit_status: SiteVisitStatus,
    *,
    association_name: str = "Capas Swine Growers",
    findings: str = "",
) -> SiteVisit:
    return SiteVisit(
        project_id=project_id,
        project_name=f"Project {project_id}",
        association_name=association_name,
        visit_number=1,
        visit_date=day,
        status=visit_status,
        visit_purpose="Routine check",
        location="Capas, Tarlac",
        findings=findings,
    )


def test_ranking_scores_and_eligibility() -> None:
    visits = [
        _visit(2, date(2026, 6, 21), SiteVisitStatus.scheduled),
        _visit(1, date(2026, 9, 1), SiteVisitStatus.completed),
        _visit(1, date(2026, 10, 9), SiteVisitStatus.completed, findings=FINDINGS),
    ]
    first, second = rank_projects(visits, TODAY)

    assert first.project_id == 1
    assert first.visit_count == 2
    assert first.days_since_last_visit == 10
    assert first.completion_rate == 100.0
    assert first.progress_percentage == 50
    assert first.score == 84
    assert first.status == "excellent"
    assert first.renewal_eligible is True
    assert first.pig_addition_eligible is True

    assert second.project_id == 2
    assert second.days_since_last_visit == 120
    assert second.score == 5
    assert second.status == "poor"
    assert second.last_visit_status == "scheduled"
    assert second.renewal_eligible is False
    assert second.pig_addition_eligible is False


def test_rankings_group_by_project_and_association() -> None:
    visits = [
        _visit(1, date(2026, 10, 1), SiteVisitStatus.completed),
        _visit(1, date(2026, 10, 2), SiteVisitStatus.completed, association_name="Bamban Layers"),
    ]
    rankings = rank_projects(visits, TODAY)
    assert sorted(item.association_name for item in rankings) == ["Bamban Layers", "Capas Swine Growers"]
    assert all(item.visit_count == 1 for item in rankings)


def test_last_visit_must_be_completed_for_renewal() -> None:
    visits = [
        _visit(1, date(2026, 10, 1), SiteVisitStatus.completed),
        _visit(1, date(2026, 10, 5), SiteVisitStatus.completed),
        _visit(1, date(2026, 10, 10), SiteVisitStatus.completed),
        _visit(1, date(2026, 10, 15), SiteVisitStatus.scheduled),
    ]
    (ranking,) = rank_projects(visits, TODAY)
    assert ranking.completion_rate == 75.0
    assert ranking.renewal_eligible is False
    assert ranking.pig_addition_eligible is False


@pytest.mark.parametrize(
    ("score", "expected"),
    [(80.0, "excellent"), (79.99, "good"), (60.0, "good"), (40.0, "fair"), (39.9, "poor")],
)
def test_ranking_status_bands(score: float, expected: str) -> None:
    assert ranking_status(score) == expected


def test_buyer_code_format() -> None:
    assert re.fullmatch(r"BUY-1760000000000-[A-Z0-9]{9}", generate_buyer_code(1760000000000))


def test_buyer_stats_counts_by_status_and_type() -> None:
    buyers = [
        InstitutionalBuyer(type=BuyerType.government, status=BuyerStatus.active),
        InstitutionalBuyer(type=BuyerType.government, status=BuyerStatus.draft),
        InstitutionalBuyer(type=BuyerType.retail, status=BuyerStatus.active),
    ]
    stats = buyer_stats(buyers)
    assert stats.total_buyers == 3
    assert stats.active_buyers == 2
    assert stats.draft_buyers == 1
    assert stats.buyers_by_type == [("government", 2), ("retail", 1)]


def test_md_attribute_totals_and_stats() -> None:
    first = MDAttribute(
        market_demand_score=8,
        market_supply_score=7,
        enterprise_plan_score=6,
        financial_stability_score=9,
        livelihood_status=LivelihoodStatus.improved,
    )
    first.total_score = total_score(first)
    second = MDAttribute(
        market_demand_score=5,
        market_supply_score=5,
        enterprise_plan_score=5,
        financial_stability_score=6,
        livelihood_status=LivelihoodStatus.stable,
    )
    second.total_score = total_score(second)

    assert first.total_score == 30
    stats = attribute_stats([first, second])
    assert stats.total_assessments == 2
    assert stats.average_total_score == 25.5
    assert stats.by_livelihood_status == {"improved": 1, "stable": 1, "declined": 0}
    assert format_attribute_code(7) == "MDA-007"


def _client() -> TestClient:
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)

    def override_get_db():
        db = factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


def _project(client: TestClient) -> dict:
    association = client.post(
        "/api/associations",
        json={"name": "Capas Swine Growers", "location": "Capas, Tarlac", "no_active_members": 12},
    ).json()
    return client.post(
        "/api/projects",
        json={"enterprise_setup": {"project_name": "Hog Fattening"}, "association_id": association["id"]},
    ).json()


def test_site_visit_flow_over_http() -> None:
    client = _client()
    project = _project(client)
    response = client.post(
        "/api/site-visits",
        json={
            "project_id": project["id"],
            "association_name": "Capas Swine Growers",
            "visit_number": 1,
            "visit_date": "2026-10-09",
            "status": "Completed",
            "visit_purpose": "Initial inspection",
            "location": "Capas, Tarlac",
        },
    )
    assert response.status_code == 201
    visit = response.json()
    assert visit["project_name"] == "Hog Fattening"
    assert visit["status"] == "completed"

    rankings = client.get("/api/site-visits/rankings", params={"as_of": "2026-10-19"}).json()
    assert rankings[0]["days_since_last_visit"] == 10
    assert rankings[0]["visit_count"] == 1

    missing = client.post(
        "/api/site-visits",
        json={
            "project_id": 999,
            "association_name": "Capas Swine Growers",
            "visit_number": 2,
            "visit_date": "2026-10-12",
            "visit_purpose": "Follow-up",
            "location": "Capas, Tarlac",
        },
    )
    assert missing.status_code == 400

    assert client.post(f"/api/site-visits/{visit['id']}/archive").json()["is_archived"] is True
    assert client.post(f"/api/site-visits/{visit['id']}/archive").status_code == 409
    assert client.get("/api/site-visits").json() == []
    assert client.get("/api/site-visits/rankings").json() == []
    assert client.post(f"/api/site-visits/{visit['id']}/restore").json()["is_archived"] is False


def test_institutional_buyer_flow_over_http() -> None:
    client = _client()
    payload = {
        "buyer_name": "Tarlac Provincial Hospital",
        "contact_person": "Dr. Santos",
        "contact_number": "0917-000-1111",
        "email": "procurement@tph.gov.ph",
        "type": "healthcare",
    }
    created = client.post("/api/institutional-buyers", json=payload)
    assert created.status_code == 201
    buyer = created.json()
    assert buyer["buyer_code"].startswith("BUY-")
    assert buyer["status"] == "active"

    duplicate_email = client.post(
        "/api/institutional-buyers", json={**payload, "contact_number": "0917-000-2222"}
    )
    assert duplicate_email.status_code == 409
    duplicate_number = client.post(
        "/api/institutional-buyers", json={**payload, "email": "other@tph.gov.ph"}
    )
    assert duplicate_number.status_code == 409

    client.post(
        "/api/institutional-buyers",
        json={
            **payload,
            "buyer_name": "Capas Central School",
            "contact_number": "0917-000-3333",
            "email": "canteen@ccs.edu.ph",
            "type": "educational",
            "status": "draft",
        },
    )
    stats = client.get("/api/institutional-buyers/stats").json()
    assert stats["total_buyers"] == 2
    assert stats["active_buyers"] == 1
    assert stats["draft_buyers"] == 1

    page = client.get("/api/institutional-buyers", params={"search": "hospital"}).json()
    assert page["pagination"]["total_items"] == 1
    assert page["buyers"][0]["id"] == buyer["id"]

    updated = client.patch(
        f"/api/institutional-buyers/{buyer['id']}", json={"buyer_name": None, "address": "Tarlac City"}
    )
    assert updated.json()["buyer_name"] == "Tarlac Provincial Hospital"
    assert updated.json()["address"] == "Tarlac City"

    client.post(f"/api/institutional-buyers/{buyer['id']}/archive")
    assert client.get("/api/institutional-buyers/stats").json()["total_buyers"] == 1
    assert client.post(f"/api/institutional-buyers/{buyer['id']}/archive").status_code == 409
    assert client.delete(f"/api/institutional-buyers/{buyer['id']}").status_code == 204
    assert client.get(f"/api/institutional-buyers/{buyer['id']}").status_code == 404


def test_md_attribute_flow_over_http() -> None:
    client = _client()
    project = _project(client)
    body = {
        "project_id": project["id"],
        "assessment_date": "2026-10-01",
        "market_demand_score": 8,
        "market_supply_score": 7,
        "enterprise_plan_score": 6,
        "financial_stability_score": 9,
        "livelihood_status": "improved",
        "assessed_by": "Coordinator",
    }
    first = client.post("/api/md-attributes", json=body).json()
    assert first["attribute_code"] == "MDA-001"
    assert first["total_score"] == 30
    second = client.post("/api/md-attributes", json=body).json()
    assert second["attribute_code"] == "MDA-002"

    updated = client.patch(f"/api/md-attributes/{first['id']}", json={"market_demand_score": 10}).json()
    assert updated["total_score"] == 32
    assert client.patch(f"/api/md-attributes/{first['id']}", json={"market_demand_score": 11}).status_code == 422

    stats = client.get("/api/md-attributes/stats").json()
    assert stats["total_assessments"] == 2
    assert stats["average_total_score"] == 31.0
    assert client.post("/api/md-attributes", json={**body, "project_id": 999}).status_code == 400
