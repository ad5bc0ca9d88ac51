"""
API Schemas for the student profile.
"""
from datetime import datetime
from typing import Any, Optional

from .base import CamelModel


class SubjectGrade(CamelModel):
    subject: str
    grade: str


# ============================================================================
# Request Models
# ============================================================================

class IntendedMajorUpdate(CamelModel):
    intended_major: Optional[Any] = None


class AcademicScoresUpdate(CamelModel):
    """KCSE and/or A-level results. Fields of an unselected exam are dropped."""
    exam_type: Optional[str] = None
    kcse_grade: Optional[str] = None
    kcse_points: Optional[int] = None
    kcse_subjects: Optional[list[SubjectGrade]] = None
    a_level_grades: Optional[list[SubjectGrade]] = None
    a_level_points: Optional[int] = None


# ============================================================================
# Response Models
# ============================================================================

class UserOut(CamelModel):
    id: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    intended_major: Optional[str] = None
    academic_scores: Optional[dict[str, Any]] = None
    api_key_prefix: Optional[str] = None
    created_at: datetime
