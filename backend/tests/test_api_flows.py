from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from app.api.deps import get_db
from app.api.routes import activity_logs
from app.db.base import Base
from app.main import RATE_LIMIT_SWEEP_SIZE, _over_limit, _request_windows, app


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


def _association(client: TestClient, name: str = "Capas Swine Growers") -> dict:
    response = client.post(
        "/api/associations",
        json={"name": name, "location": "Capas, Tarlac", "no_active_members": 12, "no_inactive_members": 3},
        headers={"X-User": "maria"},
    )
    assert response.status_code == 201
    return response.json()


def test_health_endpoints() -> None:
    client = _client()
    assert client.get("/healthz").json()["ok"] is True
    assert client.get("/api/health").json()["database"] == "up"


def test_association_lifecycle_and_stats() -> None:
    client = _client()
    created = _association(client)
    _association(client, "Bamban Layers")

    stats = client.get("/api/associations/stats").json()
    assert stats == {"total_associations": 2, "total_members": 24, "growth_rate": 100}

    archived = client.post(f"/api/associations/{created['id']}/archive").json()
    assert archived["status"] == "archived"
    assert archived["archived"] is True
    assert [row["name"] for row in client.get("/api/associations").json()] == ["Bamban Layers"]
    assert client.post(f"/api/associations/{created['id']}/archive").status_code == 409

    restored = client.post(f"/api/associations/{created['id']}/restore").json()
    assert restored["status"] == "active"
    assert restored["archived"] is False
    assert client.get("/api/associations/999").status_code == 404

    report = client.get(f"/api/association-reports/{created['id']}").json()
    assert report["metrics"]["descriptive_rating"] == "Needs Improvement"
    pdf = client.get(f"/api/association-reports/{created['id']}/pdf")
    assert pdf.headers["content-type"] == "application/pdf"
    assert pdf.content.startswith(b"%PDF")


def test_flat_project_payload_is_normalised_and_extended() -> None:
    client = _client()
    association = _association(client)
    response = client.post(
        "/api/projects",
        json={
            "project_name": "Hog Fattening",
            "enterprise_type": "Swine",
            "province": "Tarlac",
            "association_ids": [association["id"]],
        },
    )
    assert response.status_code == 201
    project = response.json()
    assert project["enterprise_setup"]["status"] == "active"
    assert project["association_names"] == ["Capas Swine Growers"]
    assert project["association_name"] == "Capas Swine Growers"
    assert project["association_location"] == "Capas, Tarlac"
    assert project["financial_information"]["total_sales"] == "0.00"

    updated = client.patch(
        f"/api/projects/{project['id']}",
        json={"operational_information": {"being_delivered": True}},
    ).json()
    assert updated["operational_information"]["being_delivered"] is True
    assert updated["operational_information"]["availed_services"] == []

    assert len(client.get("/api/projects", params={"search": "capas"}).json()) == 1
    assert client.get("/api/projects", params={"search": "rice"}).json() == []

    export = client.get("/api/exports/projects")
    assert export.status_code == 200
    assert export.headers["content-type"].startswith("text/csv")
    assert "projects-management-" in export.headers["content-disposition"]
    assert len(export.text.strip().splitlines()) == 1 + 1


def test_financial_report_figures_and_activity_trail() -> None:
    client = _client()
    association = _association(client)
    response = client.post(
        "/api/financial-reports",
        json={
            "association_id": association["id"],
            "period": "2026-Q3",
            "sales": "1000",
            "costs": "400",
            "expenses": "50",
            "report_date": "2026-09-30",
        },
        headers={"X-User": "juan", "X-Forwarded-For": "10.0.0.8, 10.0.0.1"},
    )
    assert response.status_code == 201
    report = response.json()
    assert report["profit"] == "600.00"
    assert report["share80"] == "480.00"
    assert report["ass_share20"] == "120.00"
    assert report["monitoring2"] == "12.00"
    assert report["balance"] == "538.00"

    updated = client.patch(f"/api/financial-reports/{report['id']}", json={"costs": "500"}).json()
    assert updated["profit"] == "500.00"
    assert updated["balance"] == "440.00"

    logs = client.get("/api/activity-logs", params={"module": "Financial Reports"}).json()
    assert logs["pagination"]["total_items"] == 2
    created = logs["activities"][1]
    assert created["action"] == "CREATE"
    assert created["user"] == "juan"
    assert created["ip_address"] == "10.0.0.8"
    assert created["metadata"]["profit"] == "600.00"


def test_issue_status_flow_over_http() -> None:
    client = _client()
    association = _association(client)
    project = client.post(
        "/api/projects",
        json={"enterprise_setup": {"project_name": "Egg Layer"}, "association_id": association["id"]},
    ).json()
    issue = client.post(
        "/api/issues-challenges",
        json={
            "project_id": project["id"],
            "association_id": association["id"],
            "major_issue_challenge": "Feed prices",
            "date_reported": "2026-04-02",
        },
    ).json()
    assert issue["issue_code"] == "ISS-2026-001"
    assert issue["status"] == "open"

    resolved = client.post(f"/api/issues-challenges/{issue['id']}/status", json={"status": "resolved"}).json()
    assert resolved["status"] == "resolved"
    assert resolved["date_resolved"] is not None

    closed = client.post(f"/api/issues-challenges/{issue['id']}/status", json={"status": "closed"})
    assert closed.status_code == 200
    reopened = client.post(f"/api/issues-challenges/{issue['id']}/status", json={"status": "open"})
    assert reopened.status_code == 409


def test_activity_log_endpoint_defaults_and_failure() -> None:
    client = _client()
    created = client.post("/api/activity-logs", json={}).json()
    assert created["success"] is True
    assert created["activity"]["user"] == "System"
    assert created["activity"]["action"] == "Unknown Action"
    assert created["activity"]["module"] == "General"
    assert created["activity"]["status"] == "success"

    def broken(*args, **kwargs):
        raise SQLAlchemyError("database is locked")

    original = activity_logs.record_activity
    activity_logs.record_activity = broken
    try:
        failed = client.post("/api/activity-logs", json={"action": "LOGIN"})
    finally:
        activity_logs.record_activity = original
    assert failed.status_code == 200
    assert failed.json()["success"] is False

    cleared = client.delete("/api/activity-logs").json()
    assert cleared == {"success": True, "deleted": 1}
    assert client.get("/api/activity-logs").json()["pagination"]["total_items"] == 0


def test_caretaker_status_spelling_and_performance() -> None:
    client = _client()
    caretaker = client.post(
        "/api/caretakers",
        json={"first_name": "Ana", "last_name": "Reyes", "status": "on-leave"},
    ).json()
    assert caretaker["status"] == "on_leave"

    for rating in (4, 5, 3):
        response = client.post(
            "/api/caretakers/assessments",
            json={
                "caretaker_id": caretaker["id"],
                "assessment_date": "2026-09-01",
                "rating": rating,
                "assessed_by": "Coordinator",
            },
        )
        assert response.status_code == 201

    summary = client.get("/api/performance/summary").json()
    assert summary["average_score"] == 80.0
    assert summary["top_performers"] == 0
    assert summary["on_leave_caretakers"] == 1

    profile = client.get(f"/api/caretakers/{caretaker['id']}/performance").json()
    assert profile["score"] == 80.0
    assert profile["label"] == "Very Good"


def test_null_on_required_field_leaves_value_untouched() -> None:
    client = _client()
    association = _association(client)
    response = client.patch(f"/api/associations/{association['id']}", json={"name": None, "region": None})
    assert response.status_code == 200
    assert response.json()["name"] == "Capas Swine Growers"
    assert response.json()["region"] is None

    caretaker = client.post(
        "/api/caretakers",
        json={"first_name": "Ana", "last_name": "Reyes", "sex": "Female"},
    ).json()
    response = client.patch(f"/api/caretakers/{caretaker['id']}", json={"sex": None})
    assert response.status_code == 200
    assert response.json()["sex"] == "Female"


def test_association_reports_can_include_archived() -> None:
    client = _client()
    association = _association(client)
    client.post(f"/api/associations/{association['id']}/archive")

    assert client.get("/api/association-reports").json() == []
    reports = client.get("/api/association-reports", params={"include_archived": "true"}).json()
    assert len(reports) == 1

    export = client.get("/api/exports/association-reports", params={"include_archived": "true"})
    assert len(export.text.strip().splitlines()) == 1 + 1


def test_partial_operational_information_is_validated() -> None:
    client = _client()
    association = _association(client)
    project = client.post(
        "/api/projects",
        json={"enterprise_setup": {"project_name": "Egg Layer"}, "association_id": association["id"]},
    ).json()

    wrong_type = client.patch(f"/api/projects/{project['id']}", json={"operational_information": {"assets": "x"}})
    assert wrong_type.status_code == 422
    unknown = client.patch(f"/api/projects/{project['id']}", json={"operational_information": {"colour": "red"}})
    assert unknown.status_code == 422

    updated = client.patch(
        f"/api/projects/{project['id']}",
        json={"operational_information": {"assets": ["Feed mill"], "being_delivered": None}},
    )
    assert updated.status_code == 200
    assert updated.json()["operational_information"]["assets"] == ["Feed mill"]


def test_activity_log_export_applies_filters() -> None:
    client = _client()
    _association(client)
    _association(client, "Bamban Layers")
    client.post("/api/caretakers", json={"first_name": "Ana", "last_name": "Reyes"})

    export = client.get("/api/exports/activity-logs", params={"module": "Associations"})
    assert export.status_code == 200
    lines = export.text.strip().splitlines()
    assert len(lines) == 1 + 2
    assert all("Associations" in line for line in lines[1:])

    searched = client.get("/api/exports/activity-logs", params={"search": "Bamban"})
    assert len(searched.text.strip().splitlines()) == 1 + 1


def test_idle_rate_limit_windows_are_dropped() -> None:
    _request_windows.clear()
    for n in range(RATE_LIMIT_SWEEP_SIZE):
        _request_windows[f"10.0.{n // 256}.{n % 256}:/api/associations"].append(0.0)
    try:
        assert _over_limit("10.9.9.9:/api/associations", 10_000.0) is False
        assert list(_request_windows) == ["10.9.9.9:/api/associations"]
    finally:
        _request_windows.clear()
