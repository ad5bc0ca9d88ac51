"""
User SQLAlchemy model.

A User is a student. Identity itself is handled by the API-key dependency;
this row carries the profile fields used by matching and validation.
"""
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from collegepath.infra.db.base import Base


class User(Base):
    """A student account and academic profile."""

    __tablename__ = "users"

    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    first_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    # Profile
    intended_major: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    academic_scores: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, nullable=True)

    # API key (bcrypt hash only, plaintext is shown once at creation)
    api_key_hash: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    api_key_prefix: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
