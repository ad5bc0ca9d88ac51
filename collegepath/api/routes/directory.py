"""
Directory API Routes.

Universities and scholarships are shared reference data; listing is public.
Matching uses the caller's intended major.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from collegepath.auth.middleware import get_current_user
from collegepath.errors import ValidationError
from collegepath.infra.db.models.user import User
from collegepath.infra.db.repositories.directory import ScholarshipRepository, UniversityRepository
from collegepath.infra.db.session import get_db
from collegepath.services.directory import (
    AID_FILTERS,
    filter_scholarships,
    filter_universities,
    is_recommended,
)
from ..schemas.directory import ScholarshipOut, UniversityMatch, UniversityOut

logger = logging.getLogger(__name__)
router = APIRouter(tags=["directory"])


@router.get("/universities", response_model=list[UniversityOut])
async def list_universities(db: AsyncSession = Depends(get_db)) -> list[UniversityOut]:
    universities = await UniversityRepository(db).list_all()
    return [UniversityOut.model_validate(u) for u in universities]


@router.get("/universities/matches", response_model=list[UniversityMatch])
async def match_universities(
    search: Optional[str] = Query(None),
    type: Optional[str] = Query(None),
    aid: str = Query("all"),
    recommended_only: bool = Query(False, alias="recommendedOnly"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> list[UniversityMatch]:
    """Filter universities; those offering the caller's intended major come first."""
    if aid not in AID_FILTERS:
        raise ValidationError(f"aid must be one of {', '.join(AID_FILTERS)}", field="aid")
    universities = await UniversityRepository(db).list_all()
    matches = filter_universities(
        universities,
        search=search,
        type=type,
        aid=aid,
        intended_major=user.intended_major,
        recommended_only=recommended_only,
    )
    return [
        UniversityMatch(
            **UniversityOut.model_validate(u).model_dump(),
            recommended=is_recommended(u, user.intended_major),
        )
        for u in matches
    ]


@router.get("/scholarships", response_model=list[ScholarshipOut])
async def list_scholarships(db: AsyncSession = Depends(get_db)) -> list[ScholarshipOut]:
    scholarships = await ScholarshipRepository(db).list_all()
    return [ScholarshipOut.model_validate(s) for s in scholarships]


@router.get("/scholarships/search", response_model=list[ScholarshipOut])
async def search_scholarships(
    search: Optional[str] = Query(None),
    need_based: Optional[bool] = Query(None, alias="needBased"),
    merit_based: Optional[bool] = Query(None, alias="meritBased"),
    field_of_study: Optional[str] = Query(None, alias="fieldOfStudy"),
    host_country: Optional[str] = Query(None, alias="hostCountry"),
    db: AsyncSession = Depends(get_db),
) -> list[ScholarshipOut]:
    scholarships = await ScholarshipRepository(db).list_all()
    results = filter_scholarships(
        scholarships,
        search=search,
        need_based=need_based,
        merit_based=merit_based,
        field_of_study=field_of_study,
        host_country=host_country,
    )
    return [ScholarshipOut.model_validate(s) for s in results]
