import logging

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection

from agents_api.api.schemas import (
    AGENT_CREATE_EXAMPLE,
    AGENT_PATCH_EXAMPLE,
    AGENT_UPDATE_EXAMPLE,
    AgentCreate,
    AgentOut,
    AgentPatch,
    AgentUpdate,
    ErrorOut,
)
from agents_api.db.connection import get_connection
from agents_api.domain.agents import AgentChanges, AgentRepository, collect_changes
from agents_api.observability.tracing import get_trace_id, log_event

logger = logging.getLogger("agents_api.routes")

router = APIRouter(tags=["Agents"])

QUERY_ERROR = "Error executing query"
NO_FIELDS_ERROR = "No valid fields to update."

SERVER_ERROR_RESPONSES = {
    500: {"model": ErrorOut, "description": "Database unavailable or statement failed"},
}


def get_agent_repo(
    conn: AsyncConnection = Depends(get_connection),
) -> AgentRepository:
    return AgentRepository(conn)


def get_patch_changes(
    request: Request,
    payload: AgentPatch | None = Body(
        default=None,
        openapi_examples={"move": {"summary": "Relocate an agent", "value": AGENT_PATCH_EXAMPLE}},
    ),
) -> AgentChanges:
    """Resolve the fields to patch before a connection is borrowed."""
    supplied = {}
    if payload is not None:
        supplied = payload.model_dump(include=payload.model_fields_set)

    changes = collect_changes(supplied, request.app.state.settings.patch_policy)
    if not changes:
        raise HTTPException(status_code=400, detail=NO_FIELDS_ERROR)
    return changes


def _query_failed(request: Request, operation: str, exc: Exception) -> HTTPException:
    logger.exception("Error executing query")
    log_event(
        "db.query_failed",
        trace_id=get_trace_id(request),
        level=logging.ERROR,
        operation=operation,
        error=type(exc).__name__,
    )
    return HTTPException(status_code=500, detail=QUERY_ERROR)


@router.get(
    "/agents",
    summary="Get all agents",
    description="Returns every row of the agents table, in the order the database yields them.",
    response_model=list[AgentOut],
    responses=SERVER_ERROR_RESPONSES,
)
async def list_agents(
    request: Request,
    agent_repository: AgentRepository = Depends(get_agent_repo),
):
    try:
        return await agent_repository.list_all()
    except SQLAlchemyError as exc:
        raise _query_failed(request, "list", exc)


@router.post(
    "/createAgent",
    summary="Create a new agent",
    status_code=201,
    response_class=Response,
    responses={201: {"description": "Agent created successfully"}, **SERVER_ERROR_RESPONSES},
)
async def create_agent(
    request: Request,
    payload: AgentCreate = Body(
        openapi_examples={"gabriel": {"summary": "A new agent", "value": AGENT_CREATE_EXAMPLE}},
    ),
    agent_repository: AgentRepository = Depends(get_agent_repo),
):
    """
    Insert one agent. All six fields are expected; a missing field is sent
    to the database as NULL and rejected there if the column forbids it.
    Duplicate codes fail like any other insert error.
    """
    try:
        await agent_repository.create(payload.model_dump())
    except SQLAlchemyError as exc:
        raise _query_failed(request, "create", exc)
    return Response(status_code=201)


@router.put(
    "/updateAgent/{id}",
    summary="Update a specific agent",
    status_code=204,
    response_class=Response,
    responses={204: {"description": "Agent updated successfully"}, **SERVER_ERROR_RESPONSES},
)
async def update_agent(
    request: Request,
    id: str,
    payload: AgentUpdate = Body(
        openapi_examples={"john": {"summary": "Replace all fields", "value": AGENT_UPDATE_EXAMPLE}},
    ),
    agent_repository: AgentRepository = Depends(get_agent_repo),
):
    """Overwrite the five non-key fields. An unknown code still answers 204."""
    try:
        await agent_repository.replace(id, payload.model_dump())
    except SQLAlchemyError as exc:
        raise _query_failed(request, "update", exc)
    return Response(status_code=204)


@router.patch(
    "/patchAgent/{id}",
    summary="Partially update a specific agent",
    status_code=204,
    response_class=Response,
    responses={
        204: {"description": "Agent updated successfully"},
        400: {"model": ErrorOut, "description": "No valid fields to update"},
        **SERVER_ERROR_RESPONSES,
    },
)
async def patch_agent(
    request: Request,
    id: str,
    changes: AgentChanges = Depends(get_patch_changes),
    agent_repository: AgentRepository = Depends(get_agent_repo),
):
    """
    Update only the supplied fields, checked in the order name, area,
    commission, phone, country.
    """
    try:
        await agent_repository.patch(id, changes)
    except SQLAlchemyError as exc:
        raise _query_failed(request, "patch", exc)
    return Response(status_code=204)


@router.delete(
    "/deleteAgent",
    summary="Delete a specific agent by ID",
    status_code=204,
    response_class=Response,
    responses={204: {"description": "Agent deleted successfully"}, **SERVER_ERROR_RESPONSES},
)
async def delete_agent(
    request: Request,
    id: str | None = Query(default=None, description="Agent ID to delete", examples=["A007"]),
    agent_repository: AgentRepository = Depends(get_agent_repo),
):
    try:
        await agent_repository.delete(id)
    except SQLAlchemyError as exc:
        raise _query_failed(request, "delete", exc)
    return Response(status_code=204)
