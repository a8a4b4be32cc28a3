"""SQLAlchemy models for the Trip domain."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from app.infra.database import Base

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
JSONType = JSON().with_variant(JSONB(), "postgresql")


class TripPlanRecord(Base):
    """A generated plan stored for later retrieval and sharing.

    Records are write-once: nothing updates a plan after insertion.

    Attributes:
        id: Unique identifier (UUID) - inherited from Base
        shareable_id: Independent random identifier used in share links
        preferences: Preferences the plan was generated from (camelCase JSON)
        plan: The plan itself (camelCase JSON)
        created_at: Creation timestamp - inherited from Base
        expires_at: When the share link stops resolving
    """

    __tablename__ = "trip_plans"

    shareable_id: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
        index=True,
    )
    preferences: Mapped[dict[str, Any]] = mapped_column(
        JSONType,
        nullable=False,
    )
    plan: Mapped[dict[str, Any]] = mapped_column(
        JSONType,
        nullable=False,
    )
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<TripPlanRecord(id={self.id}, shareable_id={self.shareable_id})>"
