from __future__ import annotations

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport

from agents_api.app.main import create_app
from agents_api.config import Settings
from tests.fixtures.statement_recorder import StatementRecorder


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'agents.db'}",
        pool_size=2,
        pool_timeout=5.0,
        create_schema=True,
    )


@pytest_asyncio.fixture
async def app(settings):
    app = create_app(settings)
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def recorder(app):
    recorder = StatementRecorder(app.state.provisioner.engine.sync_engine).start()
    yield recorder
    recorder.stop()


@pytest.fixture
def checked_out(app):
    """Number of connections currently borrowed from the pool."""
    pool = app.state.provisioner.engine.sync_engine.pool
    return pool.checkedout
