from datetime import date, datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.models.enums import ProjectStatus
from app.utils.normalization import normalize_project_structure


class EnterpriseSetup(BaseModel):
    project_name: str = Field(min_length=1, max_length=255)
    enterprise_type: str = Field(default="", max_length=100)
    status: ProjectStatus = ProjectStatus.active
    start_date: date | None = None
    region: str = Field(default="", max_length=100)
    province: str = Field(default="", max_length=100)
    city_municipality: str = Field(default="", max_length=100)
    barangay: str = Field(default="", max_length=100)


class FinancialInformation(BaseModel):
    total_sales: Decimal = Decimal("0")
    net_income_loss: Decimal = Decimal("0")
    total_savings_generated: Decimal = Decimal("0")
    cash_on_hand: Decimal = Decimal("0")
    cash_on_bank: Decimal = Decimal("0")


class MembershipDetails(BaseModel):
    status: str = ""
    start_date: date | None = None
    end_date: date | None = None
    renewal_date: date | None = None
    is_renewable: bool = False
    type: str = ""


class OperationalInformation(BaseModel):
    microfinancing_institutions: bool = False
    microfinancing_services: bool = False
    enterprise_plan_exists: bool = False
    being_delivered: bool = False
    availed_services: list[str] = Field(default_factory=list)
    assets: list[str] = Field(default_factory=list)
    institutional_buyers: list[str] = Field(default_factory=list)
    membership_details: MembershipDetails | None = None


class OperationalInformationPatch(BaseModel):
    """Partial operational information, merged into the stored section."""

    model_config = ConfigDict(extra="forbid")

    microfinancing_institutions: bool | None = None
    microfinancing_services: bool | None = None
    enterprise_plan_exists: bool | None = None
    being_delivered: bool | None = None
    availed_services: list[str] | None = None
    assets: list[str] | None = None
    institutional_buyers: list[str] | None = None
    membership_details: MembershipDetails | None = None


class MarketAssessment(BaseModel):
    market_demand_code: str = ""
    market_demand_remarks: str = ""
    market_supply_code: str = ""
    market_supply_remarks: str = ""


class OperationalAssessment(BaseModel):
    efficiency_of_resources_code: str = ""
    efficiency_remarks: str = ""
    capability_skills_acquired_code: str = ""
    capability_remarks: str = ""


class FinancialAssessment(BaseModel):
    financial_standing_code: str = ""
    financial_remarks: str = ""
    access_repayment_capacity_code: str = ""
    access_repayment_remarks: str = ""


class Participant(BaseModel):
    first_name: str = ""
    last_name: str = ""
    sex: str = ""
    birth_date: date | None = None
    civil_status: str = ""
    contact_number: str = ""
    email: str = ""


class ProjectCreateRequest(BaseModel):
    enterprise_setup: EnterpriseSetup
    financial_information: FinancialInformation = Field(default_factory=FinancialInformation)
    operational_information: OperationalInformation = Field(default_factory=OperationalInformation)
    market_assessment: MarketAssessment = Field(default_factory=MarketAssessment)
    operational_assessment: OperationalAssessment = Field(default_factory=OperationalAssessment)
    financial_assessment: FinancialAssessment = Field(default_factory=FinancialAssessment)
    participant: Participant | None = None
    partnership_engagements: list[dict[str, Any]] = Field(default_factory=list)
    association_id: int | None = None
    association_ids: list[int] = Field(default_factory=list)
    is_association_member: bool = False
    membership_type: str | None = Field(default=None, max_length=100)
    caretaker_id: int | None = None

    @model_validator(mode="before")
    @classmethod
    def _normalize_flat_payload(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return normalize_project_structure(data)
        return data


class ProjectUpdateRequest(BaseModel):
    enterprise_setup: EnterpriseSetup | None = None
    financial_information: FinancialInformation | None = None
    operational_information: OperationalInformationPatch | None = None
    market_assessment: MarketAssessment | None = None
    operational_assessment: OperationalAssessment | None = None
    financial_assessment: FinancialAssessment | None = None
    participant: Participant | None = None
    partnership_engagements: list[dict[str, Any]] | None = None
    association_id: int | None = None
    association_ids: list[int] | None = None
    is_association_member: bool | None = None
    membership_type: str | None = Field(default=None, max_length=100)
    caretaker_id: int | None = None


class LinkedAssociationOut(BaseModel):
    id: int
    name: str
    location: str
    no_active_members: int
    region: str | None = None
    province: str | None = None


class ProjectOut(BaseModel):
    id: int
    enterprise_setup: EnterpriseSetup
    financial_information: FinancialInformation
    operational_information: dict[str, Any]
    market_assessment: dict[str, Any]
    operational_assessment: dict[str, Any]
    financial_assessment: dict[str, Any]
    participant: dict[str, Any] | None = None
    partnership_engagements: list[dict[str, Any]]
    association_id: int | None = None
    is_association_member: bool
    membership_type: str | None = None
    caretaker_id: int | None = None
    multiple_associations: list[LinkedAssociationOut]
    association_names: list[str]
    association_ids: list[int]
    association_name: str
    association_location: str
    association_region: str
    association_province: str
    created_at: datetime
    updated_at: datetime
