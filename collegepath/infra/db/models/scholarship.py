"""
Scholarship SQLAlchemy model.
"""
from datetime import datetime
from typing import Optional

from sqlalchemy import JSON, Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from collegepath.infra.db.base import Base


class Scholarship(Base):
    """A scholarship listing, keyed by its IEFA id when imported."""

    __tablename__ = "scholarships"

    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)

    iefa_id: Mapped[Optional[str]] = mapped_column(String(100), unique=True, nullable=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    organization: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    amount_usd: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    amount_range: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)  # e.g. "$1,000 - $5,000"
    eligibility: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    deadline: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    application_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    for_kenyan_students: Mapped[bool] = mapped_column(Boolean, default=True)
    need_based: Mapped[bool] = mapped_column(Boolean, default=False)
    merit_based: Mapped[bool] = mapped_column(Boolean, default=False)
    field_of_study: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    host_countries: Mapped[list[str]] = mapped_column(JSON, default=list)
    nationality: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Scholarship(id={self.id}, name={self.name})>"
