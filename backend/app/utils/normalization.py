"""Reshaping helpers for project payloads.

Older clients post projects in a flat shape (``project_name``,
``enterprise_type`` ... at the top level). Everything downstream works on
the nested shape, so payloads are normalised before validation.
"""

from __future__ import annotations

import copy
from typing import Any


ENTERPRISE_SETUP_FIELDS = (
    "project_name",
    "enterprise_type",
    "status",
    "start_date",
    "region",
    "province",
    "city_municipality",
    "barangay",
)

DEFAULT_FINANCIAL_INFORMATION: dict[str, Any] = {
    "total_sales": 0,
    "net_income_loss": 0,
    "total_savings_generated": 0,
    "cash_on_hand": 0,
    "cash_on_bank": 0,
}

DEFAULT_OPERATIONAL_INFORMATION: dict[str, Any] = {
    "microfinancing_institutions": False,
    "microfinancing_services": False,
    "enterprise_plan_exists": False,
    "being_delivered": False,
    "availed_services": [],
    "assets": [],
    "institutional_buyers": [],
}

DEFAULT_MARKET_ASSESSMENT: dict[str, Any] = {
    "market_demand_code": "",
    "market_demand_remarks": "",
    "market_supply_code": "",
    "market_supply_remarks": "",
}

DEFAULT_OPERATIONAL_ASSESSMENT: dict[str, Any] = {
    "efficiency_of_resources_code": "",
    "efficiency_remarks": "",
    "capability_skills_acquired_code": "",
    "capability_remarks": "",
}

DEFAULT_FINANCIAL_ASSESSMENT: dict[str, Any] = {
    "financial_standing_code": "",
    "financial_remarks": "",
    "access_repayment_capacity_code": "",
    "access_repayment_remarks": "",
}


def _or_default(value: Any, default: Any) -> Any:
    if value is None:
        return copy.deepcopy(default)
    return value


def normalize_project_structure(raw: dict[str, Any]) -> dict[str, Any]:
    """Return ``raw`` in the nested project shape.

    Payloads that already carry ``enterprise_setup`` are returned untouched.
    """
    if raw.get("enterprise_setup") is not None:
        return raw

    normalized = {key: value for key, value in raw.items() if key not in ENTERPRISE_SETUP_FIELDS}
    normalized["enterprise_setup"] = {
        "project_name": raw.get("project_name") or "",
        "enterprise_type": raw.get("enterprise_type") or "",
        "status": raw.get("status") or "active",
        "start_date": raw.get("start_date") or None,
        "region": raw.get("region") or "",
        "province": raw.get("province") or "",
        "city_municipality": raw.get("city_municipality") or "",
        "barangay": raw.get("barangay") or "",
    }
    normalized["financial_information"] = _or_default(
        raw.get("financial_information"), DEFAULT_FINANCIAL_INFORMATION
    )
    normalized["operational_information"] = _or_default(
        raw.get("operational_information"), DEFAULT_OPERATIONAL_INFORMATION
    )
    normalized["partnership_engagements"] = _or_default(raw.get("partnership_engagements"), [])
    normalized["market_assessment"] = _or_default(raw.get("market_assessment"), DEFAULT_MARKET_ASSESSMENT)
    normalized["operational_assessment"] = _or_default(
        raw.get("operational_assessment"), DEFAULT_OPERATIONAL_ASSESSMENT
    )
    normalized["financial_assessment"] = _or_default(
        raw.get("financial_assessment"), DEFAULT_FINANCIAL_ASSESSMENT
    )
    return normalized


def merge_section(existing: dict[str, Any] | None, update: dict[str, Any]) -> dict[str, Any]:
    merged = dict(existing or {})
    merged.update(update)
    return merged
