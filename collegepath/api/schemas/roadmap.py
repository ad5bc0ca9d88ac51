"""
API Schemas for roadmap progress.
"""
from datetime import datetime
from typing import Optional

from pydantic import Field

from .base import CamelModel


class ChecklistItem(CamelModel):
    item: str
    completed: bool = False


# ============================================================================
# Request Models
# ============================================================================

class RoadmapUpsert(CamelModel):
    """
    Replace a phase's checklist.

    ``completed`` is ignored; it is derived from the checklist.
    """
    phase: str
    checklist: list[ChecklistItem] = Field(default_factory=list)
    completed: Optional[bool] = None
    notes: Optional[str] = None


# ============================================================================
# Response Models
# ============================================================================

class RoadmapProgressOut(CamelModel):
    id: str
    user_id: str
    phase: str
    completed: bool
    checklist: list[ChecklistItem] = Field(default_factory=list)
    notes: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class PhaseTemplateOut(CamelModel):
    id: str
    title: str
    description: str
    checklist: list[str]


class PhaseSummaryOut(CamelModel):
    phase: str
    title: str
    completed: bool
    completed_items: int
    total_items: int


class RoadmapSummaryOut(CamelModel):
    completed_phases: int
    total_phases: int
    phases: list[PhaseSummaryOut]
