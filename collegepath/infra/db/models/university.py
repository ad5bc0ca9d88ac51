"""
University SQLAlchemy model.

Reference data written only by the College Scorecard importer and seed jobs.
"""
from datetime import datetime
from typing import Optional

from sqlalchemy import JSON, Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from collegepath.infra.db.base import Base


class University(Base):
    """A university in the directory."""

    __tablename__ = "universities"

    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)

    # College Scorecard id, the idempotency key for imports
    scorecard_id: Mapped[Optional[int]] = mapped_column(Integer, unique=True, nullable=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    state: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    type: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)  # liberal arts, research, etc

    acceptance_rate: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)  # percentage (0-100)
    average_kcse_score: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    tuition_in_state: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    tuition_out_of_state: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    tuition_usd: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    financial_aid_available: Mapped[bool] = mapped_column(Boolean, default=False)
    meet_full_need: Mapped[bool] = mapped_column(Boolean, default=False)
    application_deadline: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    majors_offered: Mapped[list[str]] = mapped_column(JSON, default=list)
    website_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # College Scorecard statistics
    completion_rate: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    student_size: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    average_cost_of_attendance: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    median_earnings: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)  # 10 years after entry
    sat_score_average: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    act_score_average: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    def __repr__(self) -> str:
        return f"<University(id={self.id}, name={self.name})>"
