from __future__ import annotations

import secrets
import string
import time
from collections import defaultdict
from dataclasses import dataclass
from decimal import Decimal

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.asset import Asset
from app.models.enums import AssetStatus
from app.utils.decimal_math import money

CODE_ALPHABET = string.ascii_uppercase + string.digits
CODE_SUFFIX_LENGTH = 9


@dataclass
class AssetGroup:
    key: str
    count: int
    value: Decimal


@dataclass
class AssetStats:
    total_assets: int
    status_distribution: dict[str, int]
    total_value: Decimal
    assets_by_type: list[AssetGroup]
    assets_by_source: list[AssetGroup]
    project_specific: bool


def generate_asset_code(now_ms: int | None = None) -> str:
    stamp = now_ms if now_ms is not None else int(time.time() * 1000)
    suffix = "".join(secrets.choice(CODE_ALPHABET) for _ in range(CODE_SUFFIX_LENGTH))
    return f"AST-{stamp}-{suffix}"


def unique_asset_code(db: Session) -> str:
    while True:
        code = generate_asset_code()
        if db.scalar(select(Asset.id).where(Asset.asset_code == code)) is None:
            return code


def total_value(quantity: int, unit_value: Decimal | int | str) -> Decimal:
    if quantity <= 0:
        raise ValueError("Quantity must be positive.")
    return money(Decimal(quantity) * money(unit_value))


def get_asset_or_404(db: Session, asset_id: int) -> Asset:
    asset = db.get(Asset, asset_id)
    if asset is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Asset not found.")
    return asset


def _grouped(groups: dict[str, AssetGroup]) -> list[AssetGroup]:
    return sorted(groups.values(), key=lambda group: (-group.value, group.key))


def asset_stats(assets: list[Asset], *, project_specific: bool = False) -> AssetStats:
    distribution: dict[str, int] = defaultdict(int)
    by_type: dict[str, AssetGroup] = {}
    by_source: dict[str, AssetGroup] = {}
    value_total = money(0)

    for asset in assets:
        value = money(asset.total_value)
        value_total += value
        distribution[AssetStatus(asset.status).value] += 1

        type_group = by_type.setdefault(asset.asset_type, AssetGroup(asset.asset_type, 0, money(0)))
        type_group.count += 1
        type_group.value = money(type_group.value + value)

        source_key = asset.source_type.value if hasattr(asset.source_type, "value") else str(asset.source_type)
        source_group = by_source.setdefault(source_key, AssetGroup(source_key, 0, money(0)))
        source_group.count += 1
        source_group.value = money(source_group.value + value)

    return AssetStats(
        total_assets=len(assets),
        status_distribution=dict(distribution),
        total_value=money(value_total),
        assets_by_type=_grouped(by_type),
        assets_by_source=_grouped(by_source),
        project_specific=project_specific,
    )
