from app.models.association import Association
from app.models.project import Project
from app.schemas.projects import ProjectCreateRequest
from app.services.projects import UNKNOWN_ASSOCIATION, extend_project
from app.utils.normalization import merge_section, normalize_project_structure


def test_flat_payload_is_nested_with_defaults() -> None:
    normalized = normalize_project_structure(
        {"project_name": "Hog Fattening", "enterprise_type": "Swine", "province": "Tarlac", "association_id": 3}
    )
    assert normalized["enterprise_setup"]["project_name"] == "Hog Fattening"
    assert normalized["enterprise_setup"]["status"] == "active"
    assert normalized["enterprise_setup"]["city_municipality"] == ""
    assert normalized["financial_information"]["total_sales"] == 0
    assert normalized["operational_information"]["availed_services"] == []
    assert normalized["market_assessment"]["market_demand_code"] == ""
    assert normalized["partnership_engagements"] == []
    assert normalized["association_id"] == 3
    assert "project_name" not in normalized


def test_nested_payload_is_untouched() -> None:
    raw = {"enterprise_setup": {"project_name": "Rice Trading", "status": "pending"}}
    assert normalize_project_structure(raw) is raw


def test_defaults_are_not_shared_between_projects() -> None:
    first = normalize_project_structure({"project_name": "A"})
    second = normalize_project_structure({"project_name": "B"})
    first["operational_information"]["assets"].append("Tractor")
    assert second["operational_information"]["assets"] == []


def test_create_request_accepts_flat_shape() -> None:
    payload = ProjectCreateRequest.model_validate(
        {"project_name": "Egg Layer", "enterprise_type": "Poultry", "status": "completed"}
    )
    assert payload.enterprise_setup.project_name == "Egg Layer"
    assert payload.enterprise_setup.status == "completed"
    assert payload.financial_information.cash_on_bank == 0


def test_merge_section_keeps_existing_keys() -> None:
    merged = merge_section({"assets": ["Pen"], "being_delivered": False}, {"being_delivered": True})
    assert merged == {"assets": ["Pen"], "being_delivered": True}


def test_extension_prefers_linked_associations() -> None:
    first = Association(id=1, name="Alpha", location="Tarlac City", region="Region III", province=None)
    second = Association(id=2, name="Beta", location="Capas", region="Region III", province="Tarlac")
    project = Project(project_name="Hog", region="Region III", province="Tarlac", associations=[first, second])
    extension = extend_project(project)
    assert extension["association_names"] == ["Alpha", "Beta"]
    assert extension["association_ids"] == [1, 2]
    assert extension["association_name"] == "Alpha, Beta"
    assert extension["association_location"] == "Tarlac City"
    assert extension["association_region"] == "Region III"
    # first association has no province, so the enterprise setup fills in
    assert extension["association_province"] == "Tarlac"


def test_extension_falls_back_to_primary_association() -> None:
    primary = Association(id=7, name="Gamma", location="Bamban", region="Region III", province="Tarlac")
    project = Project(project_name="Hog", region="", province="", association_id=7, primary_association=primary)
    extension = extend_project(project)
    assert extension["association_names"] == ["Gamma"]
    assert extension["association_ids"] == [7]
    assert extension["association_location"] == "Bamban"


def test_extension_without_any_association() -> None:
    project = Project(project_name="Solo", region="Region I", province="Pangasinan")
    extension = extend_project(project)
    assert extension["association_names"] == [UNKNOWN_ASSOCIATION]
    assert extension["association_name"] == UNKNOWN_ASSOCIATION
    assert extension["association_ids"] == []
    assert extension["association_location"] == ""
    assert extension["association_province"] == "Pangasinan"
