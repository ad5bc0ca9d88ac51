"""
Roadmap progress repository.
"""
from datetime import datetime
from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from collegepath.infra.db.models.roadmap import RoadmapProgress
from collegepath.infra.db.repositories.base import BaseRepository


class RoadmapRepository(BaseRepository[RoadmapProgress]):
    """Repository for RoadmapProgress rows, keyed by (user_id, phase)."""

    def __init__(self, session: AsyncSession, user_id: Optional[str] = None):
        super().__init__(RoadmapProgress, session, user_id)

    async def list_for_user(self) -> Sequence[RoadmapProgress]:
        stmt = select(RoadmapProgress).order_by(RoadmapProgress.created_at)
        stmt = self._apply_user_filter(stmt)
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def get_by_phase(self, phase: str) -> Optional[RoadmapProgress]:
        stmt = select(RoadmapProgress).where(RoadmapProgress.phase == phase)
        stmt = self._apply_user_filter(stmt)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def upsert(
        self,
        phase: str,
        checklist: list[dict],
        completed: bool,
        notes: Optional[str] = None,
    ) -> RoadmapProgress:
        """Insert or replace the row for this user's phase."""
        existing = await self.get_by_phase(phase)
        if existing is not None:
            existing.checklist = checklist
            existing.completed = completed
            if notes is not None:
                existing.notes = notes
            existing.updated_at = datetime.utcnow()
            await self.session.commit()
            await self.session.refresh(existing)
            return existing

        now = datetime.utcnow()
        return await self.create(
            phase=phase,
            checklist=checklist,
            completed=completed,
            notes=notes,
            created_at=now,
            updated_at=now,
        )
