from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


def _column(kind: str) -> Any:
    # Values are passed to the database untouched; the type only documents the column.
    return Field(default=None, json_schema_extra={"type": kind})


class AgentFields(BaseModel):
    """The five non-key columns. Nothing is required; missing values go to the database as NULL."""

    model_config = ConfigDict(extra="ignore")

    AGENT_NAME: Any = _column("string")
    WORKING_AREA: Any = _column("string")
    COMMISSION: Any = _column("number")
    PHONE_NO: Any = _column("string")
    COUNTRY: Any = _column("string")


class AgentCreate(AgentFields):
    AGENT_CODE: Any = _column("string")


class AgentUpdate(AgentFields):
    """Full replacement of the non-key columns. AGENT_CODE in the body is ignored."""


class AgentPatch(AgentFields):
    """Any subset of the non-key columns. Only fields present in the body are considered."""


class AgentOut(BaseModel):
    AGENT_CODE: str
    AGENT_NAME: Optional[str] = None
    WORKING_AREA: Optional[str] = None
    COMMISSION: Optional[float] = None
    PHONE_NO: Optional[str] = None
    COUNTRY: Optional[str] = None


class ErrorOut(BaseModel):
    detail: str


AGENT_CREATE_EXAMPLE = {
    "AGENT_CODE": "A201",
    "AGENT_NAME": "Gabriel",
    "WORKING_AREA": "Costa Rica",
    "COMMISSION": 0.11,
    "PHONE_NO": "+1-336-454-7880",
    "COUNTRY": "Brazil",
}

AGENT_UPDATE_EXAMPLE = {
    "AGENT_NAME": "John Doe",
    "WORKING_AREA": "New York",
    "COMMISSION": 0.15,
    "PHONE_NO": "+1-123-456-7890",
    "COUNTRY": "USA",
}

AGENT_PATCH_EXAMPLE = {
    "AGENT_NAME": "Sam",
    "WORKING_AREA": "Melbourne",
    "COUNTRY": "Australia",
}
