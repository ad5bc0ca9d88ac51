"""
Essay version repository: an append-only ledger of essay content.

Version numbers are supplied by the caller. The (essay_id, version) unique
constraint turns a lost race into ``ConcurrentEditConflict`` instead of a
silent overwrite.
"""
import logging
from datetime import datetime
from typing import Any, Optional, Sequence
from uuid import uuid4

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from collegepath.errors import ConcurrentEditConflict
from collegepath.infra.db.models.essay import Essay, EssayVersion

logger = logging.getLogger(__name__)


class EssayVersionRepository:
    """Repository for EssayVersion rows. Ownership is checked by the caller."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_version(
        self,
        essay_id: str,
        version: int,
        content: str,
        word_count: int,
        ai_feedback: Optional[dict[str, Any]] = None,
    ) -> EssayVersion:
        """
        Append a version row.

        The essay's ``current_version`` and ``updated_at`` move to the new
        row in the same transaction.

        Raises:
            ConcurrentEditConflict: If this version number is already taken
        """
        now = datetime.utcnow()
        row = EssayVersion(
            id=str(uuid4()),
            essay_id=essay_id,
            version=version,
            content=content,
            word_count=word_count,
            ai_feedback=ai_feedback,
            created_at=now,
        )
        self.session.add(row)
        try:
            await self.session.flush()
            essay = await self.session.get(Essay, essay_id)
            if essay is not None:
                essay.current_version = version
                essay.updated_at = now
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            logger.warning(f"Version collision on essay {essay_id}: version {version} already exists")
            raise ConcurrentEditConflict(essay_id, version)
        await self.session.refresh(row)
        return row

    async def list_versions(self, essay_id: str) -> Sequence[EssayVersion]:
        """All versions of an essay, highest version first."""
        stmt = (
            select(EssayVersion)
            .where(EssayVersion.essay_id == essay_id)
            .order_by(EssayVersion.version.desc())
        )
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def latest(self, essay_id: str) -> Optional[EssayVersion]:
        """The version with the highest number, or None if the ledger is empty."""
        stmt = (
            select(EssayVersion)
            .where(EssayVersion.essay_id == essay_id)
            .order_by(EssayVersion.version.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def max_version(self, essay_id: str) -> int:
        """Highest version number, 0 when there are none."""
        stmt = select(func.max(EssayVersion.version)).where(EssayVersion.essay_id == essay_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() or 0

    async def exists(self, essay_id: str, version: int) -> bool:
        stmt = select(EssayVersion.id).where(
            EssayVersion.essay_id == essay_id,
            EssayVersion.version == version,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def count(self, essay_id: str) -> int:
        stmt = select(func.count()).select_from(EssayVersion).where(EssayVersion.essay_id == essay_id)
        result = await self.session.execute(stmt)
        return result.scalar_one()
