"""
Roadmap API Routes.

Per-phase checklist progress for the authenticated student, plus the
static phase templates.
"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from collegepath.auth.middleware import get_current_user
from collegepath.catalog import Catalog, get_catalog
from collegepath.infra.db.models.user import User
from collegepath.infra.db.session import get_db
from collegepath.services.roadmap import RoadmapService
from ..schemas.roadmap import (
    PhaseSummaryOut,
    PhaseTemplateOut,
    RoadmapProgressOut,
    RoadmapSummaryOut,
    RoadmapUpsert,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/roadmap", tags=["roadmap"])


@router.get("", response_model=list[RoadmapProgressOut])
async def list_progress(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    catalog: Catalog = Depends(get_catalog),
) -> list[RoadmapProgressOut]:
    rows = await RoadmapService(db, user.id, catalog).list()
    return [RoadmapProgressOut.model_validate(r) for r in rows]


@router.post("", response_model=RoadmapProgressOut)
async def upsert_progress(
    data: RoadmapUpsert,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    catalog: Catalog = Depends(get_catalog),
) -> RoadmapProgressOut:
    """Replace a phase's checklist. ``completed`` is recomputed from it."""
    row = await RoadmapService(db, user.id, catalog).upsert(
        data.phase,
        [entry.model_dump() for entry in data.checklist],
        data.notes,
    )
    return RoadmapProgressOut.model_validate(row)


@router.get("/phases", response_model=list[PhaseTemplateOut])
async def list_phases(catalog: Catalog = Depends(get_catalog)) -> list[PhaseTemplateOut]:
    return [
        PhaseTemplateOut(
            id=p.id,
            title=p.title,
            description=p.description,
            checklist=list(p.checklist),
        )
        for p in catalog.phases
    ]


@router.get("/summary", response_model=RoadmapSummaryOut)
async def get_summary(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    catalog: Catalog = Depends(get_catalog),
) -> RoadmapSummaryOut:
    summary = await RoadmapService(db, user.id, catalog).summary()
    return RoadmapSummaryOut(
        completed_phases=summary.completed_phases,
        total_phases=summary.total_phases,
        phases=[PhaseSummaryOut.model_validate(p) for p in summary.phases],
    )


@router.post("/{phase}/items/{index}/toggle", response_model=RoadmapProgressOut)
async def toggle_item(
    phase: str,
    index: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    catalog: Catalog = Depends(get_catalog),
) -> RoadmapProgressOut:
    """Flip one checklist item, seeding the phase from its template if needed."""
    row = await RoadmapService(db, user.id, catalog).toggle_item(phase, index)
    return RoadmapProgressOut.model_validate(row)
