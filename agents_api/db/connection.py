# ============================================================
# Core DB connection
# ============================================================
import logging
from typing import AsyncIterator

from fastapi import HTTPException, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine
from sqlalchemy.pool import AsyncAdaptedQueuePool

from agents_api.config import Settings
from agents_api.core.errors import ConnectionProvisioningError
from agents_api.observability.tracing import get_trace_id, log_event

logger = logging.getLogger("agents_api.db")


class ConnectionProvisioner:
    """Hands out one pooled connection per request.

    The pool has a fixed capacity with no overflow, so callers beyond
    ``pool_size`` wait (up to ``pool_timeout``) until a connection is
    returned.
    """

    def __init__(self, engine: AsyncEngine):
        self._engine = engine

    @classmethod
    def from_settings(cls, settings: Settings) -> "ConnectionProvisioner":
        engine = create_async_engine(
            settings.database_url,
            echo=settings.db_echo,
            poolclass=AsyncAdaptedQueuePool,
            pool_size=settings.pool_size,
            max_overflow=0,
            pool_timeout=settings.pool_timeout,
            pool_pre_ping=settings.pool_pre_ping,
        )
        return cls(engine)

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    async def acquire(self) -> AsyncConnection:
        try:
            return await self._engine.connect()
        except SQLAlchemyError as exc:
            raise ConnectionProvisioningError("Could not acquire a database connection") from exc

    async def release(self, conn: AsyncConnection) -> None:
        await conn.close()

    async def dispose(self) -> None:
        """Close every pooled connection. Called once at shutdown."""
        await self._engine.dispose()


def get_provisioner(request: Request) -> ConnectionProvisioner:
    return request.app.state.provisioner


async def get_connection(request: Request) -> AsyncIterator[AsyncConnection]:
    """Dependency to provide a pooled connection for the lifetime of one request."""
    provisioner = get_provisioner(request)
    try:
        conn = await provisioner.acquire()
    except ConnectionProvisioningError:
        logger.exception("Error connecting to database")
        log_event(
            "db.acquire_failed",
            trace_id=get_trace_id(request),
            level=logging.ERROR,
        )
        raise HTTPException(status_code=500, detail="Error connecting to database")

    try:
        yield conn
    finally:
        await provisioner.release(conn)
