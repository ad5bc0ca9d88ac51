"""
RoadmapProgress SQLAlchemy model.

One row per (user, phase), created lazily on the first checklist interaction.
"""
from datetime import datetime
from typing import Optional

from sqlalchemy import JSON, Boolean, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from collegepath.infra.db.base import Base


class RoadmapProgress(Base):
    """Checklist state for one phase of one user's roadmap."""

    __tablename__ = "roadmap_progress"
    __table_args__ = (
        UniqueConstraint("user_id", "phase", name="uq_roadmap_progress_user_id_phase"),
    )

    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)

    phase: Mapped[str] = mapped_column(String(50), nullable=False)
    # Derived from checklist on every write, never taken from the client
    completed: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    checklist: Mapped[list[dict]] = mapped_column(JSON, nullable=False, default=list)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<RoadmapProgress(user_id={self.user_id}, phase={self.phase}, completed={self.completed})>"
