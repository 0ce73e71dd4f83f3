"""Append-only store of executive decisions."""
from __future__ import annotations

import logging
from typing import List

from .models import Decision, ExecutiveMessage, MessagePriority, Role, create_message, normalize_role
from .router import MessageRouter

logger = logging.getLogger(__name__)


class DecisionLedger:
    """Record decisions and notify the executives each one impacts."""

    def __init__(self, router: MessageRouter, *, notifications: bool = True) -> None:
        self._router = router
        self._notifications = notifications
        self._decisions: List[Decision] = []

    def record(self, decision: Decision) -> List[ExecutiveMessage]:
        """Store ``decision`` and enqueue one notification per impacted role.

        Notifications are built before anything is stored, so an invalid
        decision leaves both the ledger and the queue untouched.
        """
        notifications = []
        if self._notifications:
            for role in decision.impacted_roles:
                notifications.append(
                    create_message(
                        decision.owner,
                        normalize_role(role),
                        f"Decision: {decision.title}",
                        f"{decision.summary}\n\n{decision.details}",
                        priority=MessagePriority.HIGH if decision.action_required else MessagePriority.NORMAL,
                        requires_response=decision.action_required,
                        metadata={"decision_id": decision.id},
                    )
                )

        self._decisions.append(decision)
        logger.info(
            "Recorded %s decision %s from %s (%d impacted)",
            decision.type.value,
            decision.id,
            decision.owner,
            len(decision.impacted_roles),
        )
        for message in notifications:
            self._router.enqueue(message)
        return notifications

    def all(self) -> List[Decision]:
        return list(self._decisions)

    def by_role(self, role: Role) -> List[Decision]:
        role = normalize_role(role)
        return [decision for decision in self._decisions if decision.owner == role]

    def pending(self) -> List[Decision]:
        return [decision for decision in self._decisions if decision.action_required]

    def __len__(self) -> int:
        return len(self._decisions)
