"""
Repository layer for database operations.

Provides easy access to all repositories.
"""
from collegepath.infra.db.repositories.base import BaseRepository
from collegepath.infra.db.repositories.directory import ScholarshipRepository, UniversityRepository
from collegepath.infra.db.repositories.essay import EssayRepository
from collegepath.infra.db.repositories.essay_version import EssayVersionRepository
from collegepath.infra.db.repositories.roadmap import RoadmapRepository
from collegepath.infra.db.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "EssayRepository",
    "EssayVersionRepository",
    "RoadmapRepository",
    "ScholarshipRepository",
    "UniversityRepository",
    "UserRepository",
]
