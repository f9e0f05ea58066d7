from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.schemas.dashboard import DashboardOverviewOut, DashboardStatsOut
from app.services.dashboard import dashboard_overview, dashboard_stats


router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=DashboardStatsOut)
def get_dashboard_stats(db: Session = Depends(get_db)) -> DashboardStatsOut:
    return dashboard_stats(db)


@router.get("/overview", response_model=DashboardOverviewOut)
def get_dashboard_overview(db: Session = Depends(get_db)) -> DashboardOverviewOut:
    return dashboard_overview(db)
