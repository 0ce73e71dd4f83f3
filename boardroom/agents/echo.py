"""Deterministic executive that needs no language-model provider."""
from __future__ import annotations

from typing import Optional

from boardroom.agents.base import Agent
from boardroom.core.models import CompanyContext, Decision, DecisionType, ExecutiveMessage


class EchoExecutive(Agent):
    """Executive that acknowledges messages, used for demos and wiring checks."""

    async def handle_incoming_message(
        self, message: ExecutiveMessage
    ) -> Optional[ExecutiveMessage]:
        self._history.append({"role": "user", "content": f"{message.sender}: {message.subject}"})
        if not message.requires_response:
            return None
        body = f"{self.name} acknowledges '{message.subject}' from {message.sender}"
        self._history.append({"role": "assistant", "content": body})
        return self.reply_to(message, body)

    async def generate_report(self, context: CompanyContext) -> Decision:
        goals = ", ".join(context.goals) or "no stated goals"
        return self.create_decision(
            DecisionType.RECOMMENDATION,
            f"{self.role} status report",
            f"{self.name} status for {context.name}",
            f"Tracking {goals}.",
            confidence=0.5,
        )
