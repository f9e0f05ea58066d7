from fastapi import APIRouter

from app.api.routes import (
    activity_logs,
    assets,
    association_reports,
    associations,
    caretakers,
    dashboard,
    exports,
    financial_reports,
    health,
    institutional_buyers,
    issues,
    md_attributes,
    monitoring,
    performance,
    projects,
    site_visits,
)


api_router = APIRouter()
api_router.include_router(health.router)
api_router.include_router(associations.router)
api_router.include_router(projects.router)
api_router.include_router(monitoring.router)
api_router.include_router(site_visits.router)
api_router.include_router(md_attributes.router)
api_router.include_router(financial_reports.router)
api_router.include_router(assets.router)
api_router.include_router(issues.router)
api_router.include_router(institutional_buyers.router)
api_router.include_router(caretakers.router)
api_router.include_router(performance.router)
api_router.include_router(association_reports.router)
api_router.include_router(dashboard.router)
api_router.include_router(exports.router)
api_router.include_router(activity_logs.router)
