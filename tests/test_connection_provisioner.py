from __future__ import annotations

import asyncio

import pytest

from agents_api.core.errors import ConnectionProvisioningError
from agents_api.db.connection import ConnectionProvisioner


@pytest.mark.asyncio
async def test_concurrent_requests_beyond_pool_capacity_all_complete(client, checked_out) -> None:
    # Arrange: pool_size is 2, fire far more requests than that
    requests = [client.get("/api/v1/agents") for _ in range(12)]

    # Act
    responses = await asyncio.gather(*requests)

    # Assert
    assert [r.status_code for r in responses] == [200] * 12
    assert checked_out() == 0


@pytest.mark.asyncio
async def test_request_waits_for_a_free_connection(app, client) -> None:
    provisioner: ConnectionProvisioner = app.state.provisioner
    held = [await provisioner.acquire() for _ in range(2)]

    pending = asyncio.create_task(client.get("/api/v1/agents"))
    await asyncio.sleep(0.2)
    assert not pending.done()

    await provisioner.release(held.pop())
    response = await asyncio.wait_for(pending, timeout=5)

    assert response.status_code == 200
    await provisioner.release(held.pop())


@pytest.mark.asyncio
async def test_failed_statement_still_releases_connection(checked_out, client) -> None:
    await client.post("/api/v1/createAgent", json={"AGENT_CODE": "A1"})

    responses = [await client.post("/api/v1/createAgent", json={"AGENT_CODE": "A1"}) for _ in range(3)]

    # more failures than pool slots; a leak would exhaust the pool
    assert [r.status_code for r in responses] == [500] * 3
    assert checked_out() == 0
    assert (await client.get("/api/v1/agents")).status_code == 200


class TestUnreachableDatabase:
    @pytest.fixture
    def settings(self, tmp_path, settings):
        return settings.model_copy(
            update={
                "database_url": f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'agents.db'}",
                "create_schema": False,
            }
        )

    @pytest.mark.asyncio
    async def test_acquire_raises_provisioning_error(self, app) -> None:
        with pytest.raises(ConnectionProvisioningError):
            await app.state.provisioner.acquire()

    @pytest.mark.asyncio
    async def test_handlers_answer_500_without_running(self, client) -> None:
        responses = [
            await client.get("/api/v1/agents"),
            await client.post("/api/v1/createAgent", json={"AGENT_CODE": "A1"}),
            await client.put("/api/v1/updateAgent/A1", json={"AGENT_NAME": "x"}),
            await client.patch("/api/v1/patchAgent/A1", json={"AGENT_NAME": "x"}),
            await client.delete("/api/v1/deleteAgent", params={"id": "A1"}),
        ]

        for response in responses:
            assert response.status_code == 500
            assert response.json() == {"detail": "Error connecting to database"}


class TestMissingTable:
    @pytest.fixture
    def settings(self, settings):
        return settings.model_copy(update={"create_schema": False})

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method, url, body",
        [
            ("GET", "/api/v1/agents", None),
            ("PUT", "/api/v1/updateAgent/A201", {"AGENT_NAME": "Sam"}),
            ("PATCH", "/api/v1/patchAgent/A201", {"COUNTRY": "Australia"}),
            ("DELETE", "/api/v1/deleteAgent?id=A201", None),
        ],
    )
    async def test_failed_statement_is_a_generic_error(self, client, checked_out, method, url, body) -> None:
        # Act
        response = await client.request(method, url, json=body)

        # Assert
        assert response.status_code == 500
        assert response.json() == {"detail": "Error executing query"}
        assert "agents" not in response.text
        assert checked_out() == 0
