"""
University and scholarship matching.

Pure filters over directory records. Recommendation is a case-insensitive
substring match, in either direction, between the student's intended major
and the majors a university offers.
"""
from typing import Iterable, List, Optional

from collegepath.infra.db.models.scholarship import Scholarship
from collegepath.infra.db.models.university import University

AID_FILTERS = ("all", "full-need", "aid-available")


def is_recommended(university: University, intended_major: Optional[str]) -> bool:
    if not intended_major:
        return False
    major = intended_major.lower()
    for offered in university.majors_offered or []:
        offered = (offered or "").strip().lower()
        if not offered:
            continue
        if major in offered or offered in major:
            return True
    return False


def _matches_search(university: University, search: str) -> bool:
    query = search.lower()
    return query in university.name.lower() or query in (university.location or "").lower()


def _matches_aid(university: University, aid: str) -> bool:
    if aid == "full-need":
        return bool(university.meet_full_need)
    if aid == "aid-available":
        return bool(university.financial_aid_available)
    return True


def filter_universities(
    universities: Iterable[University],
    search: Optional[str] = None,
    type: Optional[str] = None,
    aid: str = "all",
    intended_major: Optional[str] = None,
    recommended_only: bool = False,
) -> List[University]:
    """
    Filter universities and put recommended ones first.

    The sort is stable, so the incoming order is kept within each group.
    """
    if aid not in AID_FILTERS:
        raise ValueError(f"aid must be one of {AID_FILTERS}, got {aid!r}")

    matches = [
        uni for uni in universities
        if (not search or _matches_search(uni, search))
        and (not type or type == "all" or uni.type == type)
        and _matches_aid(uni, aid)
        and (not recommended_only or is_recommended(uni, intended_major))
    ]
    if intended_major:
        matches.sort(key=lambda uni: not is_recommended(uni, intended_major))
    return matches


def filter_scholarships(
    scholarships: Iterable[Scholarship],
    search: Optional[str] = None,
    need_based: Optional[bool] = None,
    merit_based: Optional[bool] = None,
    field_of_study: Optional[str] = None,
    host_country: Optional[str] = None,
) -> List[Scholarship]:
    """Filter scholarships on free text, aid basis, field and host country."""
    results = []
    for s in scholarships:
        if search:
            query = search.lower()
            haystack = " ".join(filter(None, [s.name, s.organization, s.description])).lower()
            if query not in haystack:
                continue
        if need_based is not None and bool(s.need_based) != need_based:
            continue
        if merit_based is not None and bool(s.merit_based) != merit_based:
            continue
        if field_of_study:
            field = (s.field_of_study or "").lower()
            # "Unrestricted" listings accept every field
            if field != "unrestricted" and field_of_study.lower() not in field:
                continue
        if host_country:
            countries = [c.lower() for c in (s.host_countries or [])]
            if host_country.lower() not in countries:
                continue
        results.append(s)
    return results
