# File: /dataview/models/view.py | Version: 1.2 | Title: SQLAlchemy models for stored views and their saved filters
from __future__ import annotations

from datetime import UTC, datetime
from typing import List as TList, Optional

from sqlalchemy import JSON, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dataview.db.base_class import Base


class ViewRecord(Base):
    __tablename__ = "views"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)

    # Physical table the view reads from
    table_name: Mapped[str] = mapped_column(String(255), nullable=False)

    # [{"name", "enabled", "searchable", "key", "ref": {"table", "match_column"}}]
    columns_json: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    # {"update": bool, "delete": bool, ...}
    permissions_json: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    # {"enabled": bool} or NULL
    subview_json: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC)
    )

    filters: Mapped[TList["ViewFilterRecord"]] = relationship(
        back_populates="view", cascade="all, delete-orphan"
    )

    __table_args__ = (Index("ix_views_table_name", "table_name"),)


class ViewFilterRecord(Base):
    __tablename__ = "view_filters"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    view_id: Mapped[int] = mapped_column(
        ForeignKey("views.id", ondelete="CASCADE"), index=True, nullable=False
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    # [{"column", "operator", "value", "logical_or"}]
    where_json: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    view: Mapped["ViewRecord"] = relationship(back_populates="filters")
