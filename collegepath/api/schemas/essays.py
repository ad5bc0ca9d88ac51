"""
API Schemas for Essays, versions and feedback.
"""
from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from .base import CamelModel


# ============================================================================
# Request Models
# ============================================================================

class EssayCreate(CamelModel):
    """Request to create an essay. Version 1 is created with it."""
    title: str = Field("", max_length=255)
    prompt: Optional[str] = None


class EssayUpdate(CamelModel):
    """Metadata update. Only the fields sent are applied."""
    title: Optional[str] = Field(None, max_length=255)
    prompt: Optional[str] = None
    current_version: Optional[int] = None


class VersionCreate(CamelModel):
    """
    Request to append a version.

    ``version`` defaults to the next number. ``wordCount`` is accepted for
    client compatibility but always recomputed from ``content``.
    """
    version: Optional[int] = None
    content: str = ""
    word_count: Optional[int] = None
    ai_feedback: Optional[dict[str, Any]] = None


class FeedbackRequest(CamelModel):
    """Text to critique; usually the editor's unsaved buffer."""
    content: Optional[str] = None


# ============================================================================
# Response Models
# ============================================================================

class EssayOut(CamelModel):
    id: str
    user_id: str
    title: str
    prompt: Optional[str] = None
    current_version: int
    created_at: datetime
    updated_at: Optional[datetime] = None


class EssayDetail(EssayOut):
    """Essay with the text of its latest version, as the editor loads it."""
    content: str = ""
    word_count: int = 0


class FeedbackOut(CamelModel):
    tone: str
    clarity: str
    storytelling: str
    suggestions: list[str] = Field(default_factory=list)
    overall_score: int


class VersionOut(CamelModel):
    id: str
    essay_id: str
    version: int
    content: str
    word_count: int
    ai_feedback: Optional[FeedbackOut] = None
    created_at: datetime
