"""
Essay and EssayVersion SQLAlchemy models.

An Essay owns metadata only; its text lives in an append-only ledger of
EssayVersion rows numbered from 1.
"""
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import JSON, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from collegepath.infra.db.base import Base


class Essay(Base):
    """
    An essay owned by one student.

    ``current_version`` is a pointer to an existing version number, not a count.
    """

    __tablename__ = "essays"

    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    prompt: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    current_version: Mapped[int] = mapped_column(Integer, default=1, nullable=False)

    def __repr__(self) -> str:
        return f"<Essay(id={self.id}, title={self.title}, current_version={self.current_version})>"


class EssayVersion(Base):
    """An immutable numbered snapshot of an essay's content."""

    __tablename__ = "essay_versions"
    __table_args__ = (
        UniqueConstraint("essay_id", "version", name="uq_essay_versions_essay_id_version"),
    )

    essay_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("essays.id", ondelete="CASCADE"), nullable=False, index=True
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    word_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    ai_feedback: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, nullable=True)

    def __repr__(self) -> str:
        return f"<EssayVersion(essay_id={self.essay_id}, version={self.version})>"
