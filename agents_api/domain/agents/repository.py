# ============================================================
# DB access layer
# ============================================================
from typing import Any, Protocol

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncConnection

from .entities import AGENT_FIELDS, UPDATABLE_FIELDS, AgentChanges


class AgentRepositoryProtocol(Protocol):
    async def list_all(self) -> list[dict[str, Any]]:
        """Get all agents"""
        ...

    async def create(self, agent: dict[str, Any]) -> None:
        """Insert a new agent"""
        ...

    async def replace(self, agent_code: str, agent: dict[str, Any]) -> int:
        """Overwrite every non-key column of an agent"""
        ...

    async def patch(self, agent_code: str, changes: AgentChanges) -> int:
        """Overwrite some non-key columns of an agent"""
        ...

    async def delete(self, agent_code: str) -> int:
        """Delete an agent"""
        ...


class AgentRepository(AgentRepositoryProtocol):
    """One statement per call, executed on a borrowed connection.

    The repository never closes the connection; whoever acquired it
    releases it.
    """

    def __init__(self, conn: AsyncConnection):
        self.conn = conn

    async def list_all(self) -> list[dict[str, Any]]:
        query = text("SELECT * FROM agents")
        result = await self.conn.execute(query)
        return [dict(row) for row in result.mappings()]

    async def create(self, agent: dict[str, Any]) -> None:
        query = text("""
                INSERT INTO agents (
                    AGENT_CODE,
                    AGENT_NAME,
                    WORKING_AREA,
                    COMMISSION,
                    PHONE_NO,
                    COUNTRY
                ) VALUES (
                    :AGENT_CODE,
                    :AGENT_NAME,
                    :WORKING_AREA,
                    :COMMISSION,
                    :PHONE_NO,
                    :COUNTRY
                )
                """)
        params = {name: agent.get(name) for name in AGENT_FIELDS}

        await self.conn.execute(query, params)
        await self.conn.commit()

    async def replace(self, agent_code: str, agent: dict[str, Any]) -> int:
        """
        Update all five non-key columns.

        Returns the number of matched rows; an unknown code is not an error.
        """
        query = text("""
                UPDATE agents
                SET
                    AGENT_NAME = :AGENT_NAME,
                    WORKING_AREA = :WORKING_AREA,
                    COMMISSION = :COMMISSION,
                    PHONE_NO = :PHONE_NO,
                    COUNTRY = :COUNTRY
                WHERE AGENT_CODE = :agent_code
                """)
        params = {name: agent.get(name) for name in UPDATABLE_FIELDS}
        params["agent_code"] = agent_code

        result = await self.conn.execute(query, params)
        await self.conn.commit()
        return result.rowcount

    async def patch(self, agent_code: str, changes: AgentChanges) -> int:
        if not changes:
            raise ValueError("No fields to update")

        # Column names come from the fixed allow-list, never from the caller.
        assignments = [
            f"{name} = :{name}"
            for name in changes.values
            if name in UPDATABLE_FIELDS
        ]
        query = text(
            "UPDATE agents SET "
            + ", ".join(assignments)
            + " WHERE AGENT_CODE = :agent_code"
        )
        params = dict(changes.values)
        params["agent_code"] = agent_code

        result = await self.conn.execute(query, params)
        await self.conn.commit()
        return result.rowcount

    async def delete(self, agent_code: str) -> int:
        query = text("DELETE FROM agents WHERE AGENT_CODE = :agent_code")

        result = await self.conn.execute(query, {"agent_code": agent_code})
        await self.conn.commit()
        return result.rowcount
