"""
Tests for roadmap progress: completion is always derived from the checklist.
"""
import pytest

from collegepath.errors import ValidationError
from collegepath.services.roadmap import (
    RoadmapService,
    is_complete,
    normalize_checklist,
    seed_checklist,
)


class TestHelpers:

    def test_is_complete(self):
        assert is_complete([{"item": "a", "completed": True}, {"item": "b", "completed": True}])
        assert not is_complete([{"item": "a", "completed": True}, {"item": "b", "completed": False}])
        assert not is_complete([])

    def test_seed_checklist_all_unchecked(self, catalog):
        template = catalog.get_phase("research")
        checklist = seed_checklist(template)
        assert len(checklist) == len(template.checklist)
        assert all(entry["completed"] is False for entry in checklist)

    def test_normalize_requires_item_text(self):
        with pytest.raises(ValidationError):
            normalize_checklist([{"item": "", "completed": True}])

    def test_normalize_defaults_completed(self):
        assert normalize_checklist([{"item": "x"}]) == [{"item": "x", "completed": False}]

    @pytest.mark.parametrize("value", ["false", "true", 1, None])
    def test_normalize_requires_real_bools(self, value):
        with pytest.raises(ValidationError) as exc:
            normalize_checklist([{"item": "x", "completed": value}])
        assert exc.value.field == "checklist"


class TestRoadmapService:

    @pytest.mark.asyncio
    async def test_toggle_last_item_completes_phase(self, session, user, catalog):
        service = RoadmapService(session, user.id, catalog)
        template = catalog.get_phase("research")

        for index in range(len(template.checklist) - 1):
            row = await service.toggle_item("research", index)
            assert row.completed is False

        row = await service.toggle_item("research", len(template.checklist) - 1)
        assert row.completed is True
        assert all(entry["completed"] for entry in row.checklist)

    @pytest.mark.asyncio
    async def test_toggle_seeds_from_template(self, session, user, catalog):
        service = RoadmapService(session, user.id, catalog)
        row = await service.toggle_item("essay_writing", 0)
        template = catalog.get_phase("essay_writing")

        assert [entry["item"] for entry in row.checklist] == list(template.checklist)
        assert row.checklist[0]["completed"] is True
        assert row.completed is False

    @pytest.mark.asyncio
    async def test_toggle_twice_unchecks(self, session, user, catalog):
        service = RoadmapService(session, user.id, catalog)
        await service.toggle_item("research", 2)
        row = await service.toggle_item("research", 2)
        assert row.checklist[2]["completed"] is False

    @pytest.mark.asyncio
    async def test_unchecking_reopens_completed_phase(self, session, user, catalog):
        service = RoadmapService(session, user.id, catalog)
        checklist = [{"item": "Only step", "completed": True}]
        row = await service.upsert("interviews", checklist)
        assert row.completed is True

        row = await service.toggle_item("interviews", 0)
        assert row.completed is False

    @pytest.mark.asyncio
    async def test_toggle_out_of_range(self, session, user, catalog):
        service = RoadmapService(session, user.id, catalog)
        with pytest.raises(ValidationError) as exc:
            await service.toggle_item("research", 99)
        assert exc.value.field == "index"

    @pytest.mark.asyncio
    async def test_unknown_phase(self, session, user, catalog):
        service = RoadmapService(session, user.id, catalog)
        with pytest.raises(ValidationError) as exc:
            await service.upsert("graduation", [])
        assert exc.value.field == "phase"

    @pytest.mark.asyncio
    async def test_upsert_recomputes_completed(self, session, user, catalog):
        service = RoadmapService(session, user.id, catalog)
        row = await service.upsert(
            "financial_aid",
            [{"item": "CSS Profile", "completed": True}, {"item": "FAFSA", "completed": False}],
            notes="Ask counselor",
        )
        assert row.completed is False
        assert row.notes == "Ask counselor"

        row = await service.upsert(
            "financial_aid",
            [{"item": "CSS Profile", "completed": True}, {"item": "FAFSA", "completed": True}],
        )
        assert row.completed is True
        assert row.notes == "Ask counselor"
        assert len(await service.list()) == 1

    @pytest.mark.asyncio
    async def test_empty_checklist_is_not_complete(self, session, user, catalog):
        row = await RoadmapService(session, user.id, catalog).upsert("visa_prep", [])
        assert row.completed is False

    @pytest.mark.asyncio
    async def test_progress_is_per_user(self, session, user, other_user, catalog):
        await RoadmapService(session, user.id, catalog).toggle_item("research", 0)
        assert await RoadmapService(session, other_user.id, catalog).list() == []

    @pytest.mark.asyncio
    async def test_summary(self, session, user, catalog):
        service = RoadmapService(session, user.id, catalog)
        await service.upsert("research", [{"item": "Done", "completed": True}])
        await service.toggle_item("applications", 0)

        summary = await service.summary()
        assert summary.total_phases == len(catalog.phases)
        assert summary.completed_phases == 1

        by_phase = {p.phase: p for p in summary.phases}
        assert by_phase["research"].completed_items == 1
        assert by_phase["research"].total_items == 1
        assert by_phase["applications"].completed_items == 1
        assert by_phase["visa_prep"].completed_items == 0
        assert by_phase["visa_prep"].total_items == len(catalog.get_phase("visa_prep").checklist)
