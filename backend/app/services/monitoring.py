from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from app.models.monitoring import MonitoringRecord
from app.utils.decimal_math import money


def compute_monitoring_figures(
    gross_sales: Decimal | int | str,
    cost_of_sales: Decimal | int | str,
    operating_expenses: Decimal | int | str,
) -> tuple[Decimal, Decimal]:
    """Return ``(gross_profit, net_income)`` for one monitoring month."""
    gross_profit = money(money(gross_sales) - money(cost_of_sales))
    net_income = money(gross_profit - money(operating_expenses))
    return gross_profit, net_income


def recompute_record(record: MonitoringRecord) -> MonitoringRecord:
    record.monthly_gross_sales = money(record.monthly_gross_sales)
    record.monthly_cost_of_sales = money(record.monthly_cost_of_sales)
    record.monthly_operating_expenses = money(record.monthly_operating_expenses)
    record.monthly_gross_profit, record.monthly_net_income = compute_monitoring_figures(
        record.monthly_gross_sales,
        record.monthly_cost_of_sales,
        record.monthly_operating_expenses,
    )
    return record


def get_record_or_404(db: Session, record_id: int) -> MonitoringRecord:
    record = db.get(MonitoringRecord, record_id)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Monitoring record not found.")
    return record


def archive_record(record: MonitoringRecord) -> None:
    if record.is_archived:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Monitoring record is already archived.")
    record.is_archived = True
    record.archived_at = datetime.now(timezone.utc)


def restore_record(record: MonitoringRecord) -> None:
    if not record.is_archived:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Monitoring record is not archived.")
    record.is_archived = False
    record.archived_at = None
