"""
Essay repository for CRUD operations on essays.
"""
from datetime import datetime
from typing import Optional, Sequence
from uuid import uuid4

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from collegepath.infra.db.models.essay import Essay, EssayVersion
from collegepath.infra.db.repositories.base import BaseRepository


class EssayRepository(BaseRepository[Essay]):
    """Repository for Essay CRUD operations, always scoped to one owner."""

    def __init__(self, session: AsyncSession, user_id: Optional[str] = None):
        super().__init__(Essay, session, user_id)

    async def create_with_initial_version(self, title: str, prompt: Optional[str] = None) -> Essay:
        """Insert an essay and its empty version 1 in a single transaction."""
        now = datetime.utcnow()
        essay = Essay(
            id=str(uuid4()),
            user_id=self.user_id,
            title=title,
            prompt=prompt,
            current_version=1,
            created_at=now,
            updated_at=now,
        )
        first = EssayVersion(
            id=str(uuid4()),
            essay_id=essay.id,
            version=1,
            content="",
            word_count=0,
            created_at=now,
        )
        self.session.add(essay)
        # Parent row must be flushed first so the version's FK resolves
        await self.session.flush()
        self.session.add(first)
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        await self.session.refresh(essay)
        return essay

    async def list_recent(self) -> Sequence[Essay]:
        """Get the owner's essays, most recently updated first."""
        stmt = select(Essay).order_by(Essay.updated_at.desc(), Essay.created_at.desc())
        stmt = self._apply_user_filter(stmt)
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def update(self, id: str, **kwargs) -> Optional[Essay]:
        """Update metadata fields; ``updated_at`` is always refreshed."""
        kwargs["updated_at"] = datetime.utcnow()
        return await super().update(id, **kwargs)

    async def delete_with_versions(self, id: str) -> bool:
        """Delete an essay and every version it owns."""
        essay = await self.get_by_id(id)
        if essay is None:
            return False
        await self.session.execute(delete(EssayVersion).where(EssayVersion.essay_id == id))
        await self.session.execute(delete(Essay).where(Essay.id == id))
        await self.session.commit()
        return True
