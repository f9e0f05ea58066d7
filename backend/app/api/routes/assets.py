import math
from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.api.deps import Actor, get_actor, get_db
from app.db.base import apply_changes
from app.models.asset import Asset
from app.models.enums import AssetStatus
from app.models.project import Project
from app.schemas.assets import (
    AssetCreateRequest,
    AssetGroupOut,
    AssetOut,
    AssetPage,
    AssetStatsOut,
    AssetUpdateRequest,
)
from app.schemas.common import PaginationOut
from app.services.activity import record_activity
from app.services.assets import asset_stats, get_asset_or_404, total_value, unique_asset_code


router = APIRouter(prefix="/assets", tags=["assets"])

MODULE = "Asset Management"


def _filters(
    project_id: int | None,
    asset_type: str | None,
    status_filter: AssetStatus | None,
    include_archived: bool,
) -> list:
    filters = []
    if project_id is not None:
        filters.append(Asset.project_id == project_id)
    if asset_type:
        filters.append(Asset.asset_type.ilike(f"%{asset_type}%"))
    if status_filter is not None:
        filters.append(Asset.status == status_filter)
    elif not include_archived:
        filters.append(Asset.status != AssetStatus.archived)
    return filters


@router.get("", response_model=AssetPage)
def list_assets(
    project_id: int | None = None,
    asset_type: str | None = None,
    status_filter: AssetStatus | None = Query(default=None, alias="status"),
    include_archived: bool = False,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=200),
    db: Session = Depends(get_db),
) -> AssetPage:
    filters = _filters(project_id, asset_type, status_filter, include_archived)
    total = int(db.scalar(select(func.count(Asset.id)).where(*filters)) or 0)
    assets = list(
        db.scalars(
            select(Asset)
            .where(*filters)
            .order_by(Asset.created_at.desc(), Asset.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        ).all()
    )
    return AssetPage(
        assets=[AssetOut.model_validate(asset) for asset in assets],
        pagination=PaginationOut(
            current_page=page,
            total_pages=math.ceil(total / limit) if total else 0,
            total_items=total,
            items_per_page=limit,
        ),
    )


@router.get("/stats", response_model=AssetStatsOut)
def get_asset_stats(
    project_id: int | None = None,
    db: Session = Depends(get_db),
) -> AssetStatsOut:
    statement = select(Asset).where(Asset.status != AssetStatus.archived)
    if project_id is not None:
        statement = statement.where(Asset.project_id == project_id)
    stats = asset_stats(list(db.scalars(statement).all()), project_specific=project_id is not None)
    return AssetStatsOut(
        total_assets=stats.total_assets,
        status_distribution=stats.status_distribution,
        total_value=stats.total_value,
        assets_by_type=[AssetGroupOut(**asdict(group)) for group in stats.assets_by_type],
        assets_by_source=[AssetGroupOut(**asdict(group)) for group in stats.assets_by_source],
        project_specific=stats.project_specific,
    )


@router.get("/{asset_id}", response_model=AssetOut)
def get_asset(asset_id: int, db: Session = Depends(get_db)) -> Asset:
    return get_asset_or_404(db, asset_id)


@router.post("", response_model=AssetOut, status_code=status.HTTP_201_CREATED)
def create_asset(
    payload: AssetCreateRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> Asset:
    project = db.get(Project, payload.project_id)
    if project is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Project not found.")
    asset = Asset(
        **payload.model_dump(),
        asset_code=unique_asset_code(db),
        project_name=project.project_name,
        total_value=total_value(payload.quantity, payload.unit_value),
    )
    db.add(asset)
    db.flush()
    record_activity(
        db,
        module=MODULE,
        action="CREATE",
        details=f"Registered asset {asset.asset_name} ({asset.asset_code})",
        user=actor.user,
        ip_address=actor.ip_address,
        metadata={"asset_id": asset.id, "project_id": project.id, "total_value": str(asset.total_value)},
    )
    db.commit()
    db.refresh(asset)
    return asset


@router.patch("/{asset_id}", response_model=AssetOut)
def update_asset(
    asset_id: int,
    payload: AssetUpdateRequest,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> Asset:
    asset = get_asset_or_404(db, asset_id)
    changes = payload.model_dump(exclude_unset=True)
    apply_changes(asset, changes)
    asset.total_value = total_value(asset.quantity, asset.unit_value)
    record_activity(
        db,
        module=MODULE,
        action="UPDATE",
        details=f"Updated asset {asset.asset_name} ({asset.asset_code})",
        user=actor.user,
        ip_address=actor.ip_address,
        metadata={"asset_id": asset.id, "fields": sorted(changes)},
    )
    db.commit()
    db.refresh(asset)
    return asset


@router.post("/{asset_id}/archive", response_model=AssetOut)
def archive_asset(
    asset_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> Asset:
    asset = get_asset_or_404(db, asset_id)
    if asset.status == AssetStatus.archived:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Asset is already archived.")
    asset.status = AssetStatus.archived
    record_activity(
        db,
        module=MODULE,
        action="ARCHIVE",
        details=f"Archived asset {asset.asset_name} ({asset.asset_code})",
        user=actor.user,
        ip_address=actor.ip_address,
        metadata={"asset_id": asset.id},
    )
    db.commit()
    db.refresh(asset)
    return asset


@router.delete("/{asset_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_asset(
    asset_id: int,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_actor),
) -> None:
    asset = get_asset_or_404(db, asset_id)
    db.delete(asset)
    record_activity(
        db,
        module=MODULE,
        action="DELETE",
        details=f"Deleted asset {asset.asset_name} ({asset.asset_code})",
        user=actor.user,
        ip_address=actor.ip_address,
        metadata={"asset_id": asset_id},
    )
    db.commit()
    return None
