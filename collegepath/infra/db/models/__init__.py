"""
SQLAlchemy models for the CollegePath database.

Exports all models for easy importing.
"""
from collegepath.infra.db.base import Base

# Import all models so they're registered with Base
from collegepath.infra.db.models.user import User
from collegepath.infra.db.models.essay import Essay, EssayVersion
from collegepath.infra.db.models.roadmap import RoadmapProgress
from collegepath.infra.db.models.university import University
from collegepath.infra.db.models.scholarship import Scholarship

__all__ = [
    "Base",
    "User",
    "Essay",
    "EssayVersion",
    "RoadmapProgress",
    "University",
    "Scholarship",
]
