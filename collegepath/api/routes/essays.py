"""
Essays API Routes.

Essay CRUD, the append-only version ledger, and on-demand AI feedback.
All endpoints are scoped to the authenticated student.
"""
import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from collegepath.auth.middleware import get_current_user
from collegepath.feedback.generator import FeedbackGenerator, get_feedback_generator
from collegepath.feedback.models import parse_feedback
from collegepath.infra.db.models.user import User
from collegepath.infra.db.session import get_db
from collegepath.services.essays import EssayService, EssayWithContent
from ..schemas.essays import (
    EssayCreate,
    EssayDetail,
    EssayOut,
    EssayUpdate,
    FeedbackOut,
    FeedbackRequest,
    VersionCreate,
    VersionOut,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/essays", tags=["essays"])


# ============================================================================
# Helper Functions
# ============================================================================

def _service(user: User, db: AsyncSession) -> EssayService:
    return EssayService(db, owner_id=user.id)


def _to_detail(loaded: EssayWithContent) -> EssayDetail:
    """Combine essay metadata with its latest version's text."""
    base = EssayOut.model_validate(loaded.essay).model_dump()
    return EssayDetail(
        **base,
        content=loaded.latest.content or "",
        word_count=loaded.latest.word_count or 0,
    )


# ============================================================================
# Endpoints
# ============================================================================

@router.post("", response_model=EssayOut, status_code=status.HTTP_201_CREATED)
async def create_essay(
    data: EssayCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> EssayOut:
    """Create an essay together with its empty version 1."""
    essay = await _service(user, db).create(data.title, data.prompt)
    return EssayOut.model_validate(essay)


@router.get("", response_model=list[EssayOut])
async def list_essays(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> list[EssayOut]:
    """List the caller's essays, most recently updated first."""
    essays = await _service(user, db).list()
    return [EssayOut.model_validate(e) for e in essays]


@router.get("/{essay_id}", response_model=EssayDetail)
async def get_essay(
    essay_id: str,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> EssayDetail:
    """Load an essay with the content of its latest version."""
    loaded = await _service(user, db).get_for_editing(essay_id)
    return _to_detail(loaded)


@router.patch("/{essay_id}", response_model=EssayOut)
async def update_essay(
    essay_id: str,
    data: EssayUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> EssayOut:
    """Update title, prompt and/or currentVersion. Content is never changed here."""
    fields = data.model_dump(exclude_unset=True)
    essay = await _service(user, db).update(essay_id, fields)
    return EssayOut.model_validate(essay)


@router.delete("/{essay_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_essay(
    essay_id: str,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> Response:
    await _service(user, db).delete(essay_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{essay_id}/versions", response_model=list[VersionOut])
async def list_versions(
    essay_id: str,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> list[VersionOut]:
    """Version history, newest first."""
    versions = await _service(user, db).list_versions(essay_id)
    return [VersionOut.model_validate(v) for v in versions]


@router.post("/{essay_id}/versions", response_model=VersionOut, status_code=status.HTTP_201_CREATED)
async def save_version(
    essay_id: str,
    data: VersionCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> VersionOut:
    """
    Append a version and move currentVersion to it.

    Returns 409 if the version number is already taken.
    """
    feedback = parse_feedback(data.ai_feedback) if data.ai_feedback is not None else None
    row = await _service(user, db).save_version(
        essay_id,
        content=data.content,
        version=data.version,
        ai_feedback=feedback,
    )
    return VersionOut.model_validate(row)


@router.post("/{essay_id}/feedback", response_model=FeedbackOut)
async def request_feedback(
    essay_id: str,
    data: FeedbackRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    generator: FeedbackGenerator = Depends(get_feedback_generator),
) -> FeedbackOut:
    """
    Critique the given content in the context of the essay's prompt.

    The feedback is returned, not stored; attach it when saving a version.
    """
    feedback = await _service(user, db).request_feedback(essay_id, data.content, generator)
    return FeedbackOut.model_validate(feedback)
