"""
Student academic profile: intended major and exam results.
"""
import logging
from typing import Any, Mapping

from sqlalchemy.ext.asyncio import AsyncSession

from collegepath.catalog import Catalog
from collegepath.errors import ValidationError
from collegepath.infra.db.models.user import User
from collegepath.infra.db.repositories.user import UserRepository

logger = logging.getLogger(__name__)

EXAM_TYPES = ("kcse", "alevel", "both")
KCSE_MAX_POINTS = 84


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class ProfileService:
    """Profile updates for one user, validated against the catalog."""

    def __init__(self, session: AsyncSession, catalog: Catalog):
        self.users = UserRepository(session)
        self.catalog = catalog

    async def get_profile(self, user: User) -> User:
        """Reload the user so the profile reflects the latest writes."""
        return await self.users.get_by_id(user.id) or user

    async def set_intended_major(self, user: User, major: Any) -> User:
        if not isinstance(major, str) or not major.strip():
            raise ValidationError("Intended major must be a non-empty string", field="intendedMajor")
        major = major.strip()
        if major not in self.catalog.majors:
            raise ValidationError(f"Unknown major '{major}'", field="intendedMajor")
        updated = await self.users.update(user.id, intended_major=major)
        logger.info(f"User {user.id} set intended major to {major}")
        return updated

    async def set_academic_scores(self, user: User, scores: Mapping[str, Any]) -> User:
        cleaned = self.validate_academic_scores(scores)
        updated = await self.users.update(user.id, academic_scores=cleaned)
        logger.info(f"User {user.id} updated academic scores ({cleaned['examType']})")
        return updated

    def validate_academic_scores(self, scores: Mapping[str, Any]) -> dict:
        """
        Check grades against the catalog and drop fields of unselected exams.

        Returns the cleaned camelCase mapping that gets stored.
        """
        exam_type = scores.get("examType") or "kcse"
        if exam_type not in EXAM_TYPES:
            raise ValidationError(f"examType must be one of {EXAM_TYPES}", field="examType")

        cleaned: dict[str, Any] = {"examType": exam_type}

        if exam_type in ("kcse", "both"):
            grade = scores.get("kcseGrade")
            if grade:
                if grade not in self.catalog.kcse_grades:
                    raise ValidationError(f"Invalid KCSE grade '{grade}'", field="kcseGrade")
                cleaned["kcseGrade"] = grade
            points = scores.get("kcsePoints")
            if points is not None:
                if not _is_number(points) or not 0 <= points <= KCSE_MAX_POINTS:
                    raise ValidationError(f"kcsePoints must be 0-{KCSE_MAX_POINTS}", field="kcsePoints")
                cleaned["kcsePoints"] = points
            subjects = scores.get("kcseSubjects")
            if subjects:
                cleaned["kcseSubjects"] = self._subject_grades(
                    subjects, self.catalog.kcse_grades, "kcseSubjects"
                )

        if exam_type in ("alevel", "both"):
            grades = scores.get("aLevelGrades")
            if grades:
                cleaned["aLevelGrades"] = self._subject_grades(
                    grades, self.catalog.alevel_grades, "aLevelGrades"
                )
            points = scores.get("aLevelPoints")
            if points is not None:
                if not _is_number(points) or points < 0:
                    raise ValidationError("aLevelPoints must be >= 0", field="aLevelPoints")
                cleaned["aLevelPoints"] = points

        return cleaned

    @staticmethod
    def _subject_grades(entries, allowed: tuple[str, ...], field: str) -> list[dict]:
        result = []
        for entry in entries:
            subject = (entry.get("subject") or "").strip()
            grade = entry.get("grade")
            if not subject:
                raise ValidationError("Each subject needs a name", field=field)
            if grade not in allowed:
                raise ValidationError(f"Invalid grade '{grade}' for {subject}", field=field)
            result.append({"subject": subject, "grade": grade})
        return result
