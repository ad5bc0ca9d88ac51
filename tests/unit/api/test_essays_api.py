"""
HTTP tests for essays, versions and feedback.
"""
import pytest
from sqlalchemy import delete

from collegepath.infra.db.models.essay import EssayVersion
from collegepath.services.essays import EssayService


async def _create(client, title="My Statement", prompt=None):
    response = await client.post("/api/essays", json={"title": title, "prompt": prompt})
    assert response.status_code == 201
    return response.json()


class TestEssayEndpoints:

    @pytest.mark.asyncio
    async def test_create_then_get(self, client):
        essay = await _create(client)
        assert essay["currentVersion"] == 1

        response = await client.get(f"/api/essays/{essay['id']}")
        assert response.status_code == 200
        body = response.json()
        assert body["content"] == ""
        assert body["wordCount"] == 0
        assert body["title"] == "My Statement"

    @pytest.mark.asyncio
    async def test_empty_title_is_400_with_field(self, client):
        response = await client.post("/api/essays", json={"title": ""})
        assert response.status_code == 400
        assert response.json()["field"] == "title"

    @pytest.mark.asyncio
    async def test_save_and_load_round_trip(self, client):
        essay = await _create(client)
        response = await client.post(
            f"/api/essays/{essay['id']}/versions",
            json={"content": "Hello world", "wordCount": 99},
        )
        assert response.status_code == 201
        assert response.json()["version"] == 2
        assert response.json()["wordCount"] == 2

        body = (await client.get(f"/api/essays/{essay['id']}")).json()
        assert body["content"] == "Hello world"
        assert body["wordCount"] == 2
        assert body["currentVersion"] == 2

    @pytest.mark.asyncio
    async def test_duplicate_version_is_409(self, client):
        essay = await _create(client)
        url = f"/api/essays/{essay['id']}/versions"
        assert (await client.post(url, json={"version": 2, "content": "a"})).status_code == 201

        response = await client.post(url, json={"version": 2, "content": "b"})
        assert response.status_code == 409

        versions = (await client.get(url)).json()
        assert [v["version"] for v in versions] == [2, 1]
        assert versions[0]["content"] == "a"

    @pytest.mark.asyncio
    async def test_attached_feedback_is_normalized(self, client):
        essay = await _create(client)
        response = await client.post(
            f"/api/essays/{essay['id']}/versions",
            json={"content": "text", "aiFeedback": {"tone": "warm", "overallScore": 12}},
        )
        feedback = response.json()["aiFeedback"]
        assert feedback["tone"] == "warm"
        assert feedback["clarity"] == "Unable to analyze clarity"
        assert feedback["overallScore"] == 10

    @pytest.mark.asyncio
    async def test_patch_metadata_only(self, client):
        essay = await _create(client)
        response = await client.patch(f"/api/essays/{essay['id']}", json={"title": "Renamed"})
        assert response.status_code == 200
        assert response.json()["title"] == "Renamed"
        assert response.json()["currentVersion"] == 1

    @pytest.mark.asyncio
    async def test_patch_bad_current_version(self, client):
        essay = await _create(client)
        response = await client.patch(f"/api/essays/{essay['id']}", json={"currentVersion": 4})
        assert response.status_code == 400
        assert response.json()["field"] == "currentVersion"

    @pytest.mark.asyncio
    async def test_delete(self, client):
        essay = await _create(client)
        assert (await client.delete(f"/api/essays/{essay['id']}")).status_code == 204
        assert (await client.get(f"/api/essays/{essay['id']}")).status_code == 404

    @pytest.mark.asyncio
    async def test_list(self, client):
        await _create(client, "One")
        await _create(client, "Two")
        titles = {e["title"] for e in (await client.get("/api/essays")).json()}
        assert titles == {"One", "Two"}


class TestOwnership:

    @pytest.mark.asyncio
    async def test_foreign_and_missing_are_identical(self, client, session, other_user):
        foreign = await EssayService(session, owner_id=other_user.id).create("Not yours")

        foreign_response = await client.get(f"/api/essays/{foreign.id}")
        missing_response = await client.get("/api/essays/no-such-essay")

        assert foreign_response.status_code == 404
        assert missing_response.status_code == 404
        assert foreign_response.json() == missing_response.json()


class TestFeedbackEndpoint:

    @pytest.mark.asyncio
    async def test_feedback(self, client, model_stub):
        essay = await _create(client)
        response = await client.post(f"/api/essays/{essay['id']}/feedback", json={"content": "My essay text"})
        assert response.status_code == 200
        body = response.json()
        assert body["tone"] == "warm"
        assert body["overallScore"] == 8
        assert body["suggestions"] == ["Add a concrete example"]
        assert model_stub.calls == 1

    @pytest.mark.asyncio
    async def test_empty_content_is_400_without_model_call(self, client, model_stub):
        essay = await _create(client)
        response = await client.post(f"/api/essays/{essay['id']}/feedback", json={"content": ""})
        assert response.status_code == 400
        assert response.json()["field"] == "content"
        assert model_stub.calls == 0

    @pytest.mark.asyncio
    async def test_partial_model_output(self, client, model_stub):
        model_stub.content = '{"tone": "warm"}'
        essay = await _create(client)
        body = (await client.post(f"/api/essays/{essay['id']}/feedback", json={"content": "text"})).json()
        assert body["clarity"] == "Unable to analyze clarity"
        assert body["suggestions"] == []
        assert body["overallScore"] == 5

    @pytest.mark.asyncio
    async def test_upstream_failure_is_500(self, client, model_stub):
        model_stub.status_code = 503
        essay = await _create(client)
        response = await client.post(f"/api/essays/{essay['id']}/feedback", json={"content": "text"})
        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to generate AI feedback"

    @pytest.mark.asyncio
    async def test_foreign_essay_is_404(self, client, session, other_user, model_stub):
        foreign = await EssayService(session, owner_id=other_user.id).create("Not yours")
        response = await client.post(f"/api/essays/{foreign.id}/feedback", json={"content": "text"})
        assert response.status_code == 404
        assert model_stub.calls == 0


class TestIntegrity:

    @pytest.mark.asyncio
    async def test_essay_without_versions_is_500(self, client, session):
        essay = await _create(client)
        await session.execute(delete(EssayVersion).where(EssayVersion.essay_id == essay["id"]))
        await session.commit()

        response = await client.get(f"/api/essays/{essay['id']}")
        assert response.status_code == 500
