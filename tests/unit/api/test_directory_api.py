"""
HTTP tests for the directory and profile endpoints.
"""
import pytest
import pytest_asyncio

from collegepath.importers.iefa import seed_scholarships
from collegepath.infra.db.repositories.directory import UniversityRepository


@pytest_asyncio.fixture
async def universities(session):
    repo = UniversityRepository(session)
    await repo.upsert({"scorecard_id": 1, "name": "Amherst College", "location": "Amherst, MA",
                       "majors_offered": ["Economics"], "financial_aid_available": True,
                       "meet_full_need": True})
    await repo.upsert({"scorecard_id": 2, "name": "Georgia Tech", "location": "Atlanta, GA",
                       "majors_offered": ["Computer Science"]})


class TestDirectoryEndpoints:

    @pytest.mark.asyncio
    async def test_list_universities(self, client, universities):
        body = (await client.get("/api/universities")).json()
        assert [u["name"] for u in body] == ["Amherst College", "Georgia Tech"]
        assert body[0]["meetFullNeed"] is True

    @pytest.mark.asyncio
    async def test_matches_put_recommended_first(self, client, universities):
        response = await client.patch("/api/users/me/intended-major", json={"intendedMajor": "Computer Science"})
        assert response.status_code == 200

        matches = (await client.get("/api/universities/matches")).json()
        assert [(u["name"], u["recommended"]) for u in matches] == [
            ("Georgia Tech", True),
            ("Amherst College", False),
        ]

    @pytest.mark.asyncio
    async def test_matches_invalid_aid(self, client, universities):
        response = await client.get("/api/universities/matches", params={"aid": "lots"})
        assert response.status_code == 400
        assert response.json()["field"] == "aid"

    @pytest.mark.asyncio
    async def test_scholarship_search(self, client, session):
        await seed_scholarships(session)
        all_rows = (await client.get("/api/scholarships")).json()
        assert len(all_rows) == 5

        stem = (await client.get("/api/scholarships/search", params={"search": "STEM"})).json()
        assert [s["iefaId"] for s in stem] == ["3589"]


class TestProfileEndpoints:

    @pytest.mark.asyncio
    async def test_me(self, client, user):
        body = (await client.get("/api/users/me")).json()
        assert body["id"] == user.id
        assert body["email"] == "amina@example.com"

    @pytest.mark.asyncio
    async def test_invalid_major_is_400(self, client):
        response = await client.patch("/api/users/me/intended-major", json={"intendedMajor": 7})
        assert response.status_code == 400
        assert response.json()["field"] == "intendedMajor"

    @pytest.mark.asyncio
    async def test_academic_scores(self, client):
        response = await client.patch("/api/users/me/academic-scores", json={
            "examType": "kcse",
            "kcseGrade": "B+",
            "kcsePoints": 66,
        })
        assert response.status_code == 200
        assert response.json()["academicScores"] == {"examType": "kcse", "kcseGrade": "B+", "kcsePoints": 66}

    @pytest.mark.asyncio
    async def test_health(self, client):
        body = (await client.get("/api/health")).json()
        assert body["status"] == "healthy"
