from app.models.activity_log import ActivityLog
from app.models.asset import Asset
from app.models.association import Association
from app.models.caretaker import Caretaker, PerformanceAssessment
from app.models.enums import (
    ActivityStatus,
    AssetSourceType,
    AssetStatus,
    AssociationStatus,
    BuyerStatus,
    BuyerType,
    CaretakerStatus,
    IssuePriority,
    IssueStatus,
    LivelihoodStatus,
    ProjectStatus,
    SiteVisitStatus,
)
from app.models.financial_report import FinancialReport
from app.models.institutional_buyer import InstitutionalBuyer
from app.models.issue import Issue
from app.models.md_attribute import MDAttribute
from app.models.monitoring import MonitoringRecord
from app.models.project import Project, project_associations
from app.models.site_visit import SiteVisit

__all__ = [
    "ActivityLog",
    "ActivityStatus",
    "Asset",
    "AssetSourceType",
    "AssetStatus",
    "Association",
    "AssociationStatus",
    "BuyerStatus",
    "BuyerType",
    "Caretaker",
    "CaretakerStatus",
    "FinancialReport",
    "InstitutionalBuyer",
    "Issue",
    "IssuePriority",
    "IssueStatus",
    "LivelihoodStatus",
    "MDAttribute",
    "MonitoringRecord",
    "PerformanceAssessment",
    "Project",
    "ProjectStatus",
    "SiteVisit",
    "SiteVisitStatus",
    "project_associations",
]
