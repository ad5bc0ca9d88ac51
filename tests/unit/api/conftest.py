"""
HTTP test client wired to the in-memory database.
"""
import httpx
import pytest
import pytest_asyncio
from fastapi import Depends

from collegepath.auth.middleware import get_current_user
from collegepath.feedback.generator import FeedbackGenerator, GeneratorConfig, get_feedback_generator
from collegepath.infra.db.repositories.user import UserRepository
from collegepath.infra.db.session import get_db
from collegepath.main import create_app


class ModelStub:
    """Programmable chat-completions endpoint for httpx.MockTransport."""

    def __init__(self):
        self.calls = 0
        self.status_code = 200
        self.content = '{"tone": "warm", "clarity": "clear", "storytelling": "vivid", ' \
                       '"suggestions": ["Add a concrete example"], "overallScore": 8}'

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls += 1
        if self.status_code != 200:
            return httpx.Response(self.status_code, json={"error": "upstream"})
        return httpx.Response(200, json={"choices": [{"message": {"content": self.content}}]})


@pytest.fixture
def model_stub():
    return ModelStub()


@pytest.fixture
def app(session_factory, user, model_stub):
    app = create_app()

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def override_current_user(db=Depends(get_db)):
        return await UserRepository(db).get_by_id(app.state.current_user_id)

    app.state.current_user_id = user.id
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_user] = override_current_user
    app.dependency_overrides[get_feedback_generator] = lambda: FeedbackGenerator(
        GeneratorConfig(api_key="sk-test"),
        transport=httpx.MockTransport(model_stub),
    )
    return app


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
