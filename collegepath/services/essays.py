"""
Essay aggregate.

Owns essay metadata, pairs every new essay with its version 1, resolves the
latest text for the editor and sequences new versions. Every operation is
scoped to the owning user; a foreign essay is indistinguishable from a
missing one.

Versioning is append-only: metadata updates never touch content, and each
save appends a new EssayVersion.
"""
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from collegepath.errors import DataIntegrityViolation, NotFoundOrUnauthorized, ValidationError
from collegepath.feedback.generator import FeedbackGenerator
from collegepath.feedback.models import Feedback
from collegepath.infra.db.models.essay import Essay, EssayVersion
from collegepath.infra.db.repositories.essay import EssayRepository
from collegepath.infra.db.repositories.essay_version import EssayVersionRepository
from collegepath.utils.text import count_words

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("title", "prompt", "current_version")


@dataclass
class EssayWithContent:
    """An essay joined with its latest version, as the editor loads it."""
    essay: Essay
    latest: EssayVersion


class EssayService:
    """Essay operations for one authenticated user."""

    def __init__(self, session: AsyncSession, owner_id: str):
        self.owner_id = owner_id
        self.essays = EssayRepository(session, user_id=owner_id)
        self.versions = EssayVersionRepository(session)

    async def create(self, title: str, prompt: Optional[str] = None) -> Essay:
        """Create an essay together with its empty version 1."""
        if not title or not title.strip():
            raise ValidationError("Title is required", field="title")
        essay = await self.essays.create_with_initial_version(
            title=title.strip(),
            prompt=prompt or None,
        )
        logger.info(f"Created essay {essay.id} for user {self.owner_id}")
        return essay

    async def get(self, essay_id: str) -> Essay:
        essay = await self.essays.get_by_id(essay_id)
        if essay is None:
            raise NotFoundOrUnauthorized("Essay")
        return essay

    async def list(self) -> Sequence[Essay]:
        return await self.essays.list_recent()

    async def get_for_editing(self, essay_id: str) -> EssayWithContent:
        """
        Load an essay with the text of its highest-numbered version.

        The latest version is found by max version number, not by the
        ``current_version`` pointer, so a drifted pointer still shows the
        newest text.
        """
        essay = await self.get(essay_id)
        latest = await self._latest(essay.id)
        return EssayWithContent(essay=essay, latest=latest)

    async def update(self, essay_id: str, fields: Mapping[str, Any]) -> Essay:
        """Update title, prompt and/or the current-version pointer."""
        essay = await self.get(essay_id)

        changes = {key: value for key, value in fields.items() if key in UPDATABLE_FIELDS}
        if "title" in changes:
            title = changes["title"]
            if not title or not str(title).strip():
                raise ValidationError("Title cannot be empty", field="title")
            changes["title"] = str(title).strip()
        if "current_version" in changes:
            target = changes["current_version"]
            if target is None or not await self.versions.exists(essay.id, target):
                raise ValidationError(
                    f"currentVersion {target} does not reference an existing version",
                    field="currentVersion",
                )

        updated = await self.essays.update(essay.id, **changes)
        if updated is None:
            raise NotFoundOrUnauthorized("Essay")
        return updated

    async def delete(self, essay_id: str) -> None:
        """Delete an essay and all of its versions."""
        deleted = await self.essays.delete_with_versions(essay_id)
        if not deleted:
            raise NotFoundOrUnauthorized("Essay")
        logger.info(f"Deleted essay {essay_id} for user {self.owner_id}")

    async def list_versions(self, essay_id: str) -> Sequence[EssayVersion]:
        essay = await self.get(essay_id)
        return await self.versions.list_versions(essay.id)

    async def save_version(
        self,
        essay_id: str,
        content: str,
        version: Optional[int] = None,
        ai_feedback: Optional[Feedback] = None,
    ) -> EssayVersion:
        """
        Append a new version and move the essay's pointer to it.

        When ``version`` is omitted the next number is computed as the current
        maximum plus one. That read is not atomic with the insert; a concurrent
        save that claims the same number surfaces as ConcurrentEditConflict.
        """
        essay = await self.get(essay_id)
        if version is None:
            version = await self.versions.max_version(essay.id) + 1
        elif version < 1:
            raise ValidationError("version must be >= 1", field="version")

        content = content or ""
        row = await self.versions.create_version(
            essay_id=essay.id,
            version=version,
            content=content,
            word_count=count_words(content),
            ai_feedback=ai_feedback.to_dict() if ai_feedback else None,
        )
        logger.info(f"Saved version {version} of essay {essay.id} ({row.word_count} words)")
        return row

    async def request_feedback(
        self,
        essay_id: str,
        content: Optional[str],
        generator: FeedbackGenerator,
    ) -> Feedback:
        """
        Generate AI feedback for ``content`` in the context of the essay's prompt.

        Empty content is rejected before any lookup or model call. The result
        is returned, not stored; attach it via ``save_version``.
        """
        if not isinstance(content, str) or not content.strip():
            raise ValidationError("Essay content is required", field="content")
        essay = await self.get(essay_id)
        return await generator.generate(content, essay.prompt or None)

    async def _latest(self, essay_id: str) -> EssayVersion:
        latest = await self.versions.latest(essay_id)
        if latest is None:
            logger.error(f"Data integrity violation: essay {essay_id} has no versions")
            raise DataIntegrityViolation(f"Essay {essay_id} has no versions")
        return latest
