"""
College Scorecard importer.

API documentation: https://collegescorecard.ed.gov/data/api-documentation/
"""
import logging
from typing import Any, Dict, Iterable, List, Optional

import httpx
from sqlalchemy.ext.asyncio import AsyncSession

from collegepath.config import Settings
from collegepath.errors import ConfigurationError
from collegepath.infra.db.repositories.directory import UniversityRepository

logger = logging.getLogger(__name__)

FIELDS = [
    "id",
    "school.name",
    "school.city",
    "school.state",
    "school.school_url",
    "latest.admissions.admission_rate.overall",
    "latest.cost.tuition.in_state",
    "latest.cost.tuition.out_of_state",
    "latest.cost.avg_net_price.overall",
    "latest.completion.completion_rate_4yr_100nt",
    "latest.student.size",
    "latest.earnings.10_yrs_after_entry.median",
    "latest.admissions.sat_scores.average.overall",
    "latest.admissions.act_scores.midpoint.cumulative",
]

# Institutions searched by the default seed job
DEFAULT_SEARCH_TERMS = [
    "Harvard", "Stanford", "MIT", "Yale", "Princeton",
    "Columbia", "University of Pennsylvania", "Duke", "Cornell",
    "Northwestern", "University of California", "University of Michigan",
]


class ScorecardClient:
    """Thin async client for the College Scorecard schools endpoint."""

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not api_key:
            raise ConfigurationError("COLLEGE_SCORECARD_API_KEY is not configured")
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings) -> "ScorecardClient":
        return cls(
            api_key=settings.college_scorecard_api_key,
            base_url=settings.college_scorecard_base_url,
            timeout=settings.importer_timeout_seconds,
        )

    async def _get(self, params: Dict[str, Any]) -> Dict[str, Any]:
        params = {"api_key": self.api_key, "fields": ",".join(FIELDS), **params}
        masked = {k: ("***" if k == "api_key" else v) for k, v in params.items() if k != "fields"}
        logger.info(f"[SCORECARD] Fetching {self.base_url} params={masked}")
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.get(self.base_url, params=params)
            response.raise_for_status()
            return response.json()

    async def search(
        self,
        name: Optional[str] = None,
        state: Optional[str] = None,
        page: int = 0,
        per_page: int = 20,
    ) -> List[Dict[str, Any]]:
        """Search schools by name and/or state; returns the raw result rows."""
        params: Dict[str, Any] = {"page": page, "per_page": per_page}
        if name:
            params["school.name"] = name
        if state:
            params["school.state"] = state
        data = await self._get(params)
        return data.get("results", [])

    async def get_by_id(self, scorecard_id: int) -> Optional[Dict[str, Any]]:
        data = await self._get({"id": scorecard_id})
        results = data.get("results", [])
        return results[0] if results else None


def _percent(value: Optional[float]) -> Optional[int]:
    return round(value * 100) if value is not None else None


def transform_school(school: Dict[str, Any]) -> Dict[str, Any]:
    """Map a Scorecard result row onto University column values."""
    city = school.get("school.city")
    state = school.get("school.state")
    in_state = school.get("latest.cost.tuition.in_state") or None
    out_of_state = school.get("latest.cost.tuition.out_of_state") or None
    sat = school.get("latest.admissions.sat_scores.average.overall")
    act = school.get("latest.admissions.act_scores.midpoint.cumulative")
    return {
        "scorecard_id": school["id"],
        "name": school["school.name"],
        "city": city,
        "state": state,
        "location": f"{city}, {state}" if city and state else (city or state),
        "website_url": school.get("school.school_url"),
        "acceptance_rate": _percent(school.get("latest.admissions.admission_rate.overall")),
        "tuition_in_state": in_state,
        "tuition_out_of_state": out_of_state,
        "tuition_usd": out_of_state or in_state,
        "average_cost_of_attendance": school.get("latest.cost.avg_net_price.overall") or None,
        "completion_rate": _percent(school.get("latest.completion.completion_rate_4yr_100nt")),
        "student_size": school.get("latest.student.size") or None,
        "median_earnings": school.get("latest.earnings.10_yrs_after_entry.median") or None,
        "sat_score_average": round(sat) if sat is not None else None,
        "act_score_average": round(act) if act is not None else None,
    }


async def import_schools(session: AsyncSession, schools: Iterable[Dict[str, Any]]) -> int:
    """Upsert Scorecard rows by ``scorecard_id``. Returns the number processed."""
    repo = UniversityRepository(session)
    count = 0
    for school in schools:
        data = transform_school(school)
        await repo.upsert(data)
        count += 1
    return count


async def import_by_search_terms(
    session: AsyncSession,
    client: ScorecardClient,
    terms: Iterable[str] = DEFAULT_SEARCH_TERMS,
    per_page: int = 5,
) -> int:
    """Search each term and upsert the hits. A failing term is logged and skipped."""
    total = 0
    for term in terms:
        try:
            schools = await client.search(name=term, per_page=per_page)
        except (httpx.HTTPError, ValueError) as e:
            # ValueError covers a non-JSON body
            logger.error(f"[SCORECARD] Search for {term!r} failed: {type(e).__name__}")
            continue
        total += await import_schools(session, schools)
    logger.info(f"[SCORECARD] Imported {total} universities")
    return total
