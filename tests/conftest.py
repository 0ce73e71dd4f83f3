"""Shared fixtures: scripted executives whose behavior is fixed up front."""
from __future__ import annotations

from typing import List, Optional, Type

import pytest

from boardroom.agents.base import Agent
from boardroom.core.errors import AgentFailure
from boardroom.core.models import (
    CompanyContext,
    Decision,
    DecisionType,
    ExecutiveMessage,
    ExecutiveProfile,
)
from boardroom.core.registry import AgentRegistry


class ScriptedExecutive(Agent):
    """Executive that fails a set number of times before answering."""

    def __init__(
        self,
        role: str,
        *,
        failures: int = 0,
        always_fail: bool = False,
        reply: Optional[bool] = None,
        report_error: Optional[Exception] = None,
        journal: Optional[List[ExecutiveMessage]] = None,
    ) -> None:
        super().__init__(ExecutiveProfile(role=role, name=f"Scripted {role}"))
        self.failures = failures
        self.always_fail = always_fail
        self.reply = reply
        self.report_error = report_error
        self.journal = journal if journal is not None else []
        self.calls: List[ExecutiveMessage] = []

    async def handle_incoming_message(
        self, message: ExecutiveMessage
    ) -> Optional[ExecutiveMessage]:
        self.calls.append(message)
        self.journal.append(message)
        self._history.append({"role": "user", "content": message.subject})
        if self.always_fail or self.failures > 0:
            if self.failures > 0:
                self.failures -= 1
            raise AgentFailure(f"{self.role} is unavailable")
        should_reply = message.requires_response if self.reply is None else self.reply
        if not should_reply:
            return None
        return self.reply_to(message, f"{self.role} answer")

    async def generate_report(self, context: CompanyContext) -> Decision:
        if self.report_error is not None:
            raise self.report_error
        return self.create_decision(
            DecisionType.RECOMMENDATION,
            f"{self.role} report",
            f"Report for {context.name}",
        )


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def scripted() -> Type[ScriptedExecutive]:
    return ScriptedExecutive


@pytest.fixture
def company() -> CompanyContext:
    return CompanyContext(name="Acme Inc.", industry="Retail", goals=("Grow revenue",))


@pytest.fixture
def build_registry():
    def _build(*agents: Agent) -> AgentRegistry:
        registry = AgentRegistry()
        for agent in agents:
            registry.register(agent.role, agent)
        return registry

    return _build
