"""Registry mapping executive roles to agent instances."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, Iterator, List, Optional

from .errors import ValidationError
from .models import Role, normalize_role

if TYPE_CHECKING:
    from boardroom.agents.base import Agent

logger = logging.getLogger(__name__)


class AgentRegistry:
    """Owns the role -> agent map for one orchestrator session.

    Registering a role twice replaces the earlier agent (last write wins); the
    role keeps the position of its first registration so fan-out order stays
    stable.
    """

    def __init__(self) -> None:
        self._agents: Dict[str, Agent] = {}

    def register(self, role: Role, agent: Agent) -> None:
        role = normalize_role(role)
        if agent.role != role:
            raise ValidationError(
                f"Cannot register {agent.role} executive under role '{role}'"
            )
        if role in self._agents:
            logger.info("Replacing executive registered for role %s", role)
        self._agents[role] = agent

    def get(self, role: Role) -> Optional[Agent]:
        try:
            return self._agents.get(normalize_role(role))
        except ValidationError:
            return None

    def active_agents(self) -> List[Agent]:
        return [agent for agent in self._agents.values() if agent.active]

    def agents(self) -> List[Agent]:
        return list(self._agents.values())

    def roles(self) -> List[str]:
        return list(self._agents)

    def __contains__(self, role: object) -> bool:
        return isinstance(role, str) and self.get(role) is not None

    def __iter__(self) -> Iterator[Agent]:
        return iter(list(self._agents.values()))

    def __len__(self) -> int:
        return len(self._agents)
