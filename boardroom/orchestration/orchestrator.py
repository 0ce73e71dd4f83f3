"""Orchestrator coordinating message flow and decisions between executives."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, NamedTuple, Optional, Union

from boardroom.agents.base import Agent
from boardroom.agents.executives import builtin_roles, create_executives
from boardroom.core.ledger import DecisionLedger
from boardroom.core.models import (
    CompanyContext,
    Decision,
    ExecutiveMessage,
    MessagePriority,
    Role,
)
from boardroom.core.registry import AgentRegistry
from boardroom.core.router import DEFAULT_MAX_RETRIES, DeliveryFailure, MessageRouter
from boardroom.services.llm_pool import LLMPool

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ReportFailure:
    """An executive that failed to produce its report."""

    role: str
    error: BaseException


class ReportBatch(NamedTuple):
    decisions: List[Decision]
    errors: List[ReportFailure]


class ExecutiveOrchestrator:
    """Single entry point for sending messages, broadcasting and recording decisions.

    With ``auto_routing`` enabled every :meth:`send_message` delivers the queue
    head right away and :meth:`record_decision` drains the notifications it
    produced. Without it, callers drain explicitly with :meth:`process_next` or
    :meth:`process_all`.
    """

    def __init__(
        self,
        *,
        registry: AgentRegistry,
        company_context: CompanyContext,
        auto_routing: bool = True,
        notifications: bool = True,
        max_retries: int = DEFAULT_MAX_RETRIES,
        handler_timeout: Optional[float] = None,
    ) -> None:
        self._registry = registry
        self._context = company_context
        self.auto_routing = auto_routing
        self._router = MessageRouter(
            registry,
            max_retries=max_retries,
            handler_timeout=handler_timeout,
        )
        self._ledger = DecisionLedger(self._router, notifications=notifications)

    @property
    def registry(self) -> AgentRegistry:
        return self._registry

    @property
    def router(self) -> MessageRouter:
        return self._router

    def get_executive(self, role: Role) -> Optional[Agent]:
        return self._registry.get(role)

    def active_executives(self) -> List[Agent]:
        return self._registry.active_agents()

    async def send_message(self, message: ExecutiveMessage) -> Optional[ExecutiveMessage]:
        """Queue ``message`` and, when auto-routing, deliver the queue head.

        Raises :class:`~boardroom.core.errors.UnroutableMessageError` when
        auto-routing and the delivered message has no active recipient.
        """
        self._router.enqueue(message)
        if not self.auto_routing:
            return None
        return await self._router.process_next(strict=True)

    async def broadcast_message(
        self,
        sender: Role,
        subject: str,
        body: str,
        priority: Union[MessagePriority, str] = MessagePriority.NORMAL,
    ) -> List[ExecutiveMessage]:
        return await self._router.broadcast(sender, subject, body, priority)

    async def process_next(self) -> Optional[ExecutiveMessage]:
        return await self._router.process_next()

    async def process_all(self) -> int:
        return await self._router.process_all()

    async def record_decision(self, decision: Decision) -> List[ExecutiveMessage]:
        """Record ``decision`` and queue a notification for each impacted executive.

        Notifications to missing executives are dropped and logged by the
        router, they do not fail the call.
        """
        notifications = self._ledger.record(decision)
        if self.auto_routing and notifications:
            await self._router.process_all()
        return notifications

    async def generate_all_reports(
        self, context: Optional[CompanyContext] = None
    ) -> ReportBatch:
        """Ask every registered executive for a report.

        One executive failing does not stop the others; its error is returned
        in ``errors``. Each report is recorded as a decision.
        """
        context = context or self._context
        batch = ReportBatch(decisions=[], errors=[])
        for agent in self._registry.agents():
            try:
                report = await agent.generate_report(context)
                await self.record_decision(report)
            except Exception as exc:  # noqa: BLE001
                logger.exception("Error generating report for %s", agent.role)
                batch.errors.append(ReportFailure(role=agent.role, error=exc))
                continue
            batch.decisions.append(report)
        return batch

    def get_decisions(self) -> List[Decision]:
        return self._ledger.all()

    def get_decisions_by_executive(self, role: Role) -> List[Decision]:
        return self._ledger.by_role(role)

    def get_pending_decisions(self) -> List[Decision]:
        return self._ledger.pending()

    @property
    def processed_messages(self) -> Dict[str, ExecutiveMessage]:
        return self._router.processed_messages

    @property
    def failures(self) -> List[DeliveryFailure]:
        return self._router.failures

    @property
    def pending_count(self) -> int:
        return self._router.pending_count

    @property
    def company_context(self) -> CompanyContext:
        return self._context

    def update_context(self, **changes: Any) -> CompanyContext:
        """Merge ``changes`` into the company context and stamp ``updated_at``."""
        self._context = self._context.merged(**changes)
        return self._context

    def clear_all_history(self) -> None:
        """Reset executive histories, processed messages and the pending queue."""
        for agent in self._registry.agents():
            agent.clear_history()
        self._router.clear()


def create_orchestrator(
    company_context: CompanyContext,
    *,
    roles: Iterable[Role] = (),
    llm_pool: Optional[LLMPool] = None,
    model_name: Optional[str] = None,
    **options: Any,
) -> ExecutiveOrchestrator:
    """Build an orchestrator with the built-in executives registered."""
    registry = AgentRegistry()
    for agent in create_executives(roles or builtin_roles(), llm_pool, model_name=model_name):
        registry.register(agent.role, agent)
    logger.info("Initialized %d executive(s)", len(registry))
    return ExecutiveOrchestrator(registry=registry, company_context=company_context, **options)
