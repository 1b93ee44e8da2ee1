"""Issue model for citizen-submitted civic complaints."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Float, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from civic_reporter.db.base import Base

CATEGORIES = ("roads", "sanitation", "lighting", "water", "drainage", "parks", "safety", "other")
STATUSES = ("reported", "in_progress", "resolved")
PRIORITIES = ("low", "medium", "high")

DEFAULT_STATUS = "reported"
DEFAULT_PRIORITY = "medium"


class Issue(Base):
    __tablename__ = "issues"
    # AUTOINCREMENT on SQLite, so ids of removed rows are never handed out again
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=DEFAULT_STATUS, server_default=DEFAULT_STATUS, index=True)
    priority: Mapped[str] = mapped_column(String(10), nullable=False, default=DEFAULT_PRIORITY, server_default=DEFAULT_PRIORITY)
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_path: Mapped[str | None] = mapped_column(String(255), nullable=True)  # filename within upload_dir
    reporter_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    reporter_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    reporter_phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    admin_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
