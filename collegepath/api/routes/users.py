"""
User profile API Routes.
"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from collegepath.auth.middleware import get_current_user
from collegepath.catalog import Catalog, get_catalog
from collegepath.infra.db.models.user import User
from collegepath.infra.db.session import get_db
from collegepath.services.profile import ProfileService
from ..schemas.users import AcademicScoresUpdate, IntendedMajorUpdate, UserOut

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserOut)
async def get_me(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    catalog: Catalog = Depends(get_catalog),
) -> UserOut:
    profile = await ProfileService(db, catalog).get_profile(user)
    return UserOut.model_validate(profile)


@router.patch("/me/intended-major", response_model=UserOut)
async def update_intended_major(
    data: IntendedMajorUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    catalog: Catalog = Depends(get_catalog),
) -> UserOut:
    updated = await ProfileService(db, catalog).set_intended_major(user, data.intended_major)
    return UserOut.model_validate(updated)


@router.patch("/me/academic-scores", response_model=UserOut)
async def update_academic_scores(
    data: AcademicScoresUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    catalog: Catalog = Depends(get_catalog),
) -> UserOut:
    scores = data.model_dump(by_alias=True, exclude_none=True)
    updated = await ProfileService(db, catalog).set_academic_scores(user, scores)
    return UserOut.model_validate(updated)
