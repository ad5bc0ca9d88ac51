"""
University and scholarship repositories.

Both tables are shared reference data. Writes only come from importers and
are upserts keyed by the external source id.
"""
from datetime import datetime
from typing import Any, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from collegepath.infra.db.models.scholarship import Scholarship
from collegepath.infra.db.models.university import University
from collegepath.infra.db.repositories.base import BaseRepository


class UniversityRepository(BaseRepository[University]):
    """Repository for University reference data."""

    def __init__(self, session: AsyncSession):
        super().__init__(University, session)

    async def list_all(self) -> Sequence[University]:
        result = await self.session.execute(select(University).order_by(University.name))
        return result.scalars().all()

    async def get_by_scorecard_id(self, scorecard_id: int) -> Optional[University]:
        stmt = select(University).where(University.scorecard_id == scorecard_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def upsert(self, data: dict[str, Any]) -> University:
        """Update the record sharing ``scorecard_id``, or insert a new one."""
        scorecard_id = data.get("scorecard_id")
        if scorecard_id is not None:
            existing = await self.get_by_scorecard_id(scorecard_id)
            if existing is not None:
                for key, value in data.items():
                    setattr(existing, key, value)
                existing.updated_at = datetime.utcnow()
                await self.session.commit()
                await self.session.refresh(existing)
                return existing
        return await self.create(**data)


class ScholarshipRepository(BaseRepository[Scholarship]):
    """Repository for Scholarship reference data."""

    def __init__(self, session: AsyncSession):
        super().__init__(Scholarship, session)

    async def list_all(self) -> Sequence[Scholarship]:
        result = await self.session.execute(select(Scholarship).order_by(Scholarship.name))
        return result.scalars().all()

    async def get_by_iefa_id(self, iefa_id: str) -> Optional[Scholarship]:
        stmt = select(Scholarship).where(Scholarship.iefa_id == iefa_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def upsert(self, data: dict[str, Any]) -> Scholarship:
        """Update the record sharing ``iefa_id``, or insert a new one."""
        iefa_id = data.get("iefa_id")
        if iefa_id:
            existing = await self.get_by_iefa_id(iefa_id)
            if existing is not None:
                for key, value in data.items():
                    setattr(existing, key, value)
                existing.updated_at = datetime.utcnow()
                await self.session.commit()
                await self.session.refresh(existing)
                return existing
        return await self.create(**data)
