from .entities import AGENT_FIELDS, UPDATABLE_FIELDS, AgentChanges, collect_changes
from .repository import AgentRepository

__all__ = ["AGENT_FIELDS", "UPDATABLE_FIELDS", "AgentChanges", "AgentRepository", "collect_changes"]
