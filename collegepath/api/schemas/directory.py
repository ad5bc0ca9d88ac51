"""
API Schemas for the university and scholarship directory.
"""
from typing import Optional

from pydantic import Field

from .base import CamelModel


class UniversityOut(CamelModel):
    id: str
    scorecard_id: Optional[int] = None
    name: str
    city: Optional[str] = None
    state: Optional[str] = None
    location: Optional[str] = None
    type: Optional[str] = None
    acceptance_rate: Optional[int] = None
    average_kcse_score: Optional[int] = None
    tuition_in_state: Optional[int] = None
    tuition_out_of_state: Optional[int] = None
    tuition_usd: Optional[int] = None
    financial_aid_available: bool = False
    meet_full_need: bool = False
    application_deadline: Optional[str] = None
    majors_offered: list[str] = Field(default_factory=list)
    website_url: Optional[str] = None
    image_url: Optional[str] = None
    description: Optional[str] = None
    completion_rate: Optional[int] = None
    student_size: Optional[int] = None
    average_cost_of_attendance: Optional[int] = None
    median_earnings: Optional[int] = None
    sat_score_average: Optional[int] = None
    act_score_average: Optional[int] = None


class UniversityMatch(UniversityOut):
    """University annotated for the current student."""
    recommended: bool = False


class ScholarshipOut(CamelModel):
    id: str
    iefa_id: Optional[str] = None
    name: str
    organization: Optional[str] = None
    amount_usd: Optional[int] = None
    amount_range: Optional[str] = None
    eligibility: Optional[str] = None
    deadline: Optional[str] = None
    application_url: Optional[str] = None
    for_kenyan_students: bool = True
    need_based: bool = False
    merit_based: bool = False
    field_of_study: Optional[str] = None
    host_countries: list[str] = Field(default_factory=list)
    nationality: Optional[str] = None
    description: Optional[str] = None
