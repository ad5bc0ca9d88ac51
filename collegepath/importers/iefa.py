"""
Scholarship listings from IEFA plus curated Kenya-focused programs.

IEFA has no public API, so listings are maintained here and upserted by
``iefa_id``.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from collegepath.infra.db.repositories.directory import ScholarshipRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScholarshipListing:
    iefa_id: str
    name: str
    field_of_study: str
    description: str
    application_url: str
    nationality: Optional[str] = None
    host_countries: List[str] = field(default_factory=list)


IEFA_LISTINGS = [
    ScholarshipListing(
        iefa_id="3596",
        name="MPOWER Monthly Scholarship",
        field_of_study="Unrestricted",
        description=(
            "MPOWER will be awarding $8,000 USD this summer to support international "
            "students pursuing their education in North America."
        ),
        nationality="Unrestricted",
        host_countries=["Canada", "United States"],
        application_url="https://www.iefa.org/scholarships/3596/MPOWER_Monthly_Scholarship",
    ),
    ScholarshipListing(
        iefa_id="3589",
        name="MPOWER Women in STEM Scholarship",
        field_of_study="Biology/Life Sciences, Computer & Information Systems, Engineering",
        description=(
            "Scholarships awarded annually to female international/DACA students who are "
            "currently enrolled or accepted to study full-time in a STEM degree program at "
            "a participating school in the U.S. or Canada."
        ),
        nationality="Unrestricted",
        host_countries=["Canada", "United States"],
        application_url="https://www.iefa.org/scholarships/3589/MPOWER_Women_in_STEM_Scholarship",
    ),
]

KENYA_FOCUSED_LISTINGS = [
    ScholarshipListing(
        iefa_id="kenyan-mastercard-foundation",
        name="MasterCard Foundation Scholars Program",
        field_of_study="Unrestricted",
        description=(
            "Comprehensive scholarship for academically talented yet economically "
            "disadvantaged young people from Africa, providing financial support, academic "
            "support, and leadership development."
        ),
        nationality="African countries including Kenya",
        host_countries=["United States", "Canada", "United Kingdom"],
        application_url="https://mastercardfdn.org/all/scholars/",
    ),
    ScholarshipListing(
        iefa_id="kenyan-usaid-scholarships",
        name="USAID Scholarships for Kenyan Students",
        field_of_study="Development Studies, Agriculture, Engineering, Health Sciences",
        description=(
            "USAID provides various scholarship opportunities for Kenyan students pursuing "
            "higher education in fields aligned with Kenya's development priorities."
        ),
        nationality="Kenya",
        host_countries=["United States", "Kenya"],
        application_url="https://www.usaid.gov/kenya",
    ),
    ScholarshipListing(
        iefa_id="kenyan-fulbright-program",
        name="Fulbright Foreign Student Program",
        field_of_study="Unrestricted",
        description=(
            "The Fulbright Program provides grants for international graduate students to "
            "study and conduct research in the United States."
        ),
        nationality="Kenya (among other countries)",
        host_countries=["United States"],
        application_url="https://foreign.fulbrightonline.org/",
    ),
]


def transform_listing(listing: ScholarshipListing) -> Dict[str, Any]:
    """Map a listing onto Scholarship column values."""
    return {
        "iefa_id": listing.iefa_id,
        "name": listing.name,
        "organization": "IEFA",
        "field_of_study": listing.field_of_study,
        "description": listing.description,
        "nationality": listing.nationality or "Unrestricted",
        "host_countries": list(listing.host_countries),
        "application_url": listing.application_url,
        "for_kenyan_students": True,
    }


async def seed_scholarships(
    session: AsyncSession,
    listings: Optional[Iterable[ScholarshipListing]] = None,
) -> int:
    """Upsert listings by ``iefa_id``. Returns the number processed."""
    if listings is None:
        listings = [*IEFA_LISTINGS, *KENYA_FOCUSED_LISTINGS]
    repo = ScholarshipRepository(session)
    count = 0
    for listing in listings:
        await repo.upsert(transform_listing(listing))
        count += 1
    logger.info(f"[IEFA] Seeded {count} scholarships")
    return count
