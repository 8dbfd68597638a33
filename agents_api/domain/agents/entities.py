# ============================================================
# Business/domain entities
# ============================================================
from dataclasses import dataclass, field
from typing import Any

from agents_api.config import PatchPolicy

# Non-key columns, in the order a partial update checks them.
UPDATABLE_FIELDS = (
    "AGENT_NAME",
    "WORKING_AREA",
    "COMMISSION",
    "PHONE_NO",
    "COUNTRY",
)

AGENT_FIELDS = ("AGENT_CODE", *UPDATABLE_FIELDS)


@dataclass(frozen=True)
class AgentChanges:
    """Ordered column -> value pairs to apply to one agent."""

    values: dict[str, Any] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return bool(self.values)


def collect_changes(supplied: dict[str, Any], policy: PatchPolicy) -> AgentChanges:
    """
    Pick the fields of a partial update that should be written.

    ``supplied`` only holds the fields the caller actually sent. Under the
    truthy policy falsy values (0, "", false) are dropped as well; under the
    presence policy only nulls are.
    """
    values: dict[str, Any] = {}
    for name in UPDATABLE_FIELDS:
        if name not in supplied:
            continue
        value = supplied[name]
        if policy is PatchPolicy.TRUTHY and not value:
            continue
        if value is None:
            continue
        values[name] = value
    return AgentChanges(values=values)
