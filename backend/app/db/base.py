from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import DateTime, func, inspect
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


def apply_changes(instance: Base, changes: dict[str, Any]) -> list[str]:
    """Copy a partial update onto ``instance`` and return the fields written.

    An explicit null is ignored for NOT NULL columns and written through for
    nullable ones.
    """
    columns = inspect(type(instance)).columns
    written = []
    for field, value in changes.items():
        column = columns.get(field)
        if value is None and column is not None and not column.nullable:
            continue
        setattr(instance, field, value)
        written.append(field)
    return written
