"""
Roadmap progress tracker.

Per (user, phase) state machine:
    NotStarted (no row) -> InProgress (row, completed=False) -> Complete (completed=True)

``completed`` is derived on every checklist write as ``all(item.completed)``
and is never taken from the caller.
"""
import logging
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from collegepath.catalog import Catalog, PhaseTemplate
from collegepath.errors import ValidationError
from collegepath.infra.db.models.roadmap import RoadmapProgress
from collegepath.infra.db.repositories.roadmap import RoadmapRepository

logger = logging.getLogger(__name__)


def is_complete(checklist: Sequence[Mapping]) -> bool:
    """A phase is complete when it has items and every one is checked."""
    return bool(checklist) and all(bool(entry.get("completed")) for entry in checklist)


def seed_checklist(template: PhaseTemplate) -> list[dict]:
    """Fresh, all-unchecked checklist for a phase."""
    return [{"item": item, "completed": False} for item in template.checklist]


def normalize_checklist(entries: Iterable[Mapping]) -> list[dict]:
    checklist = []
    for index, entry in enumerate(entries):
        item = entry.get("item")
        if not isinstance(item, str) or not item.strip():
            raise ValidationError(f"Checklist entry {index} needs a non-empty 'item'", field="checklist")
        completed = entry.get("completed", False)
        if not isinstance(completed, bool):
            raise ValidationError(f"Checklist entry {index} 'completed' must be a boolean", field="checklist")
        checklist.append({"item": item, "completed": completed})
    return checklist


@dataclass
class PhaseSummary:
    phase: str
    title: str
    completed: bool
    completed_items: int
    total_items: int


@dataclass
class RoadmapSummary:
    completed_phases: int
    total_phases: int
    phases: list[PhaseSummary]


class RoadmapService:
    """Roadmap operations for one authenticated user."""

    def __init__(self, session: AsyncSession, user_id: str, catalog: Catalog):
        self.user_id = user_id
        self.catalog = catalog
        self.repo = RoadmapRepository(session, user_id=user_id)

    def _template(self, phase: str) -> PhaseTemplate:
        template = self.catalog.get_phase(phase)
        if template is None:
            raise ValidationError(
                f"Unknown phase '{phase}'. Expected one of: {', '.join(self.catalog.phase_ids)}",
                field="phase",
            )
        return template

    async def list(self) -> Sequence[RoadmapProgress]:
        return await self.repo.list_for_user()

    async def upsert(
        self,
        phase: str,
        checklist: Iterable[Mapping],
        notes: Optional[str] = None,
    ) -> RoadmapProgress:
        """Replace the checklist for a phase; ``completed`` is recomputed."""
        self._template(phase)
        items = normalize_checklist(checklist)
        row = await self.repo.upsert(phase, items, completed=is_complete(items), notes=notes)
        logger.info(f"Roadmap {phase} for user {self.user_id}: completed={row.completed}")
        return row

    async def toggle_item(self, phase: str, index: int) -> RoadmapProgress:
        """
        Flip one checklist item.

        With no row yet, the checklist is seeded from the phase template
        before the toggle is applied.
        """
        template = self._template(phase)
        existing = await self.repo.get_by_phase(phase)
        checklist = (
            [dict(entry) for entry in existing.checklist]
            if existing is not None and existing.checklist
            else seed_checklist(template)
        )
        if not 0 <= index < len(checklist):
            raise ValidationError(
                f"Checklist index {index} out of range for phase '{phase}'", field="index"
            )
        checklist[index]["completed"] = not checklist[index]["completed"]
        row = await self.repo.upsert(phase, checklist, completed=is_complete(checklist))
        logger.info(f"Roadmap {phase} item {index} toggled for user {self.user_id}: completed={row.completed}")
        return row

    async def summary(self) -> RoadmapSummary:
        rows = {row.phase: row for row in await self.repo.list_for_user()}
        phases = []
        for template in self.catalog.phases:
            row = rows.get(template.id)
            checklist = row.checklist if row is not None else seed_checklist(template)
            phases.append(PhaseSummary(
                phase=template.id,
                title=template.title,
                completed=row.completed if row is not None else False,
                completed_items=sum(1 for entry in checklist if entry.get("completed")),
                total_items=len(checklist),
            ))
        return RoadmapSummary(
            completed_phases=sum(1 for p in phases if p.completed),
            total_phases=len(phases),
            phases=phases,
        )
