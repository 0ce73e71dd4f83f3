"""Base agent definition used by the orchestrator."""
from __future__ import annotations

import abc
from datetime import datetime
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Union

from boardroom.core.models import (
    CompanyContext,
    Decision,
    DecisionType,
    ExecutiveMessage,
    ExecutiveProfile,
    MessagePriority,
    Role,
    create_decision,
    create_message,
)


class Agent(abc.ABC):
    """Abstract executive encapsulating role-specific message and report handling.

    The orchestration core only talks to an agent through
    :meth:`handle_incoming_message`, :meth:`generate_report` and
    :meth:`clear_history`. Whatever conversational state a concrete agent keeps
    is private to it.
    """

    def __init__(self, profile: ExecutiveProfile) -> None:
        self.profile = profile
        self._history: List[Dict[str, str]] = []

    @property
    def role(self) -> str:
        return self.profile.role

    @property
    def name(self) -> str:
        return self.profile.name

    @property
    def capabilities(self) -> FrozenSet[str]:
        return self.profile.capabilities

    @property
    def active(self) -> bool:
        return self.profile.active

    def activate(self) -> None:
        self.profile.active = True

    def deactivate(self) -> None:
        """Stop receiving queued and broadcast messages. The agent stays registered."""
        self.profile.active = False

    @property
    def history(self) -> List[Dict[str, str]]:
        return [dict(entry) for entry in self._history]

    def clear_history(self) -> None:
        self._history = []

    @abc.abstractmethod
    async def handle_incoming_message(
        self, message: ExecutiveMessage
    ) -> Optional[ExecutiveMessage]:
        """Consume a message addressed to this executive and optionally reply.

        Raise :class:`~boardroom.core.errors.AgentFailure` (or any exception)
        to have the router retry the delivery.
        """

    @abc.abstractmethod
    async def generate_report(self, context: CompanyContext) -> Decision:
        """Produce a periodic recommendation for the company."""

    def create_message(
        self,
        recipient: Role,
        subject: str,
        body: str,
        *,
        priority: Union[MessagePriority, str] = MessagePriority.NORMAL,
        requires_response: bool = False,
        parent_message_id: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> ExecutiveMessage:
        return create_message(
            self.role,
            recipient,
            subject,
            body,
            priority=priority,
            requires_response=requires_response,
            parent_message_id=parent_message_id,
            metadata=metadata,
        )

    def create_decision(
        self,
        decision_type: Union[DecisionType, str],
        title: str,
        summary: str,
        details: str = "",
        *,
        confidence: float = 0.8,
        impacted_roles: Iterable[Role] = (),
        action_required: bool = False,
        deadline: Optional[datetime] = None,
        supporting_data: Optional[Dict[str, Any]] = None,
    ) -> Decision:
        return create_decision(
            self.role,
            decision_type,
            title,
            summary,
            details,
            confidence=confidence,
            impacted_roles=impacted_roles,
            action_required=action_required,
            deadline=deadline,
            supporting_data=supporting_data,
        )

    def reply_to(self, message: ExecutiveMessage, body: str) -> ExecutiveMessage:
        """Build a threaded ``RE:`` reply to ``message``."""
        return self.create_message(
            message.sender,
            f"RE: {message.subject}",
            body,
            priority=message.priority,
            parent_message_id=message.id,
        )
