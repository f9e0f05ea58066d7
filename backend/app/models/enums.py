import enum


class AssociationStatus(str, enum.Enum):
    active = "active"
    inactive = "inactive"
    pending = "pending"
    suspended = "suspended"
    archived = "archived"


class ProjectStatus(str, enum.Enum):
    active = "active"
    inactive = "inactive"
    pending = "pending"
    completed = "completed"


class AssetSourceType(str, enum.Enum):
    purchased = "purchased"
    donated = "donated"
    leased = "leased"
    government_provided = "government_provided"


class AssetStatus(str, enum.Enum):
    active = "active"
    maintenance = "maintenance"
    disposed = "disposed"
    lost = "lost"
    # soft archive
    archived = "archived"


class IssueStatus(str, enum.Enum):
    open = "open"
    in_progress = "in_progress"
    resolved = "resolved"
    closed = "closed"


class IssuePriority(str, enum.Enum):
    low = "low"
    medium = "medium"
    high = "high"
    critical = "critical"


class CaretakerStatus(str, enum.Enum):
    active = "active"
    inactive = "inactive"
    on_leave = "on_leave"


class ActivityStatus(str, enum.Enum):
    success = "success"
    error = "error"
    warning = "warning"


class SiteVisitStatus(str, enum.Enum):
    scheduled = "scheduled"
    in_progress = "in_progress"
    completed = "completed"
    cancelled = "cancelled"


class BuyerType(str, enum.Enum):
    corporate = "corporate"
    government = "government"
    educational = "educational"
    healthcare = "healthcare"
    retail = "retail"
    other = "other"


class BuyerStatus(str, enum.Enum):
    active = "active"
    draft = "draft"


class LivelihoodStatus(str, enum.Enum):
    improved = "improved"
    stable = "stable"
    declined = "declined"
