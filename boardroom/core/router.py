"""Single-consumer message queue delivering messages between executives."""
from __future__ import annotations

import asyncio
import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable, Deque, Dict, List, Optional, Union

from .errors import UnroutableMessageError, ValidationError
from .models import (
    BROADCAST,
    ExecutiveMessage,
    MessagePriority,
    MessageStatus,
    Role,
    create_message,
    new_id,
)
from .registry import AgentRegistry

if TYPE_CHECKING:
    from boardroom.agents.base import Agent

logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 3


class FailureKind(Enum):
    UNROUTABLE = "unroutable"
    EXHAUSTED = "exhausted"
    BROADCAST = "broadcast"
    INVALID_REPLY = "invalid_reply"


@dataclass(slots=True)
class QueueItem:
    """A pending message plus its retry bookkeeping."""

    message: ExecutiveMessage
    retries: int = 0
    max_retries: int = DEFAULT_MAX_RETRIES
    item_id: str = field(default_factory=new_id)


@dataclass(slots=True)
class DeliveryFailure:
    """Surfaced record of a message that could not be delivered."""

    message: ExecutiveMessage
    kind: FailureKind
    attempts: int
    error: Optional[BaseException] = None

    @property
    def reason(self) -> str:
        if self.error is None:
            return self.kind.value
        return f"{self.kind.value}: {type(self.error).__name__}: {self.error}"


class MessageRouter:
    """Deliver queued messages one at a time, retrying failed deliveries.

    Failed deliveries go back to the tail of the queue so they never block the
    messages behind them. After ``max_retries`` requeues the message is marked
    blocked and dropped. Messages addressed to an unknown or inactive executive
    are dropped immediately. Broadcasts bypass the queue entirely.
    """

    def __init__(
        self,
        registry: AgentRegistry,
        *,
        max_retries: int = DEFAULT_MAX_RETRIES,
        handler_timeout: Optional[float] = None,
        on_failure: Optional[Callable[[DeliveryFailure], None]] = None,
    ) -> None:
        if max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        self._registry = registry
        self._max_retries = max_retries
        self._handler_timeout = handler_timeout
        self._on_failure = on_failure
        self._queue: Deque[QueueItem] = deque()
        self._processed: Dict[str, ExecutiveMessage] = {}
        self._failures: List[DeliveryFailure] = []
        self._lock = asyncio.Lock()

    @property
    def max_retries(self) -> int:
        return self._max_retries

    @property
    def pending_count(self) -> int:
        return len(self._queue)

    def pending(self) -> List[QueueItem]:
        return list(self._queue)

    @property
    def processed_messages(self) -> Dict[str, ExecutiveMessage]:
        """Resolved deliveries keyed by delivery id, in resolution order."""
        return dict(self._processed)

    @property
    def failures(self) -> List[DeliveryFailure]:
        return list(self._failures)

    def get_processed(self, message_id: str) -> Optional[ExecutiveMessage]:
        """Latest resolved delivery of ``message_id``, if any."""
        for message in reversed(self._processed.values()):
            if message.id == message_id:
                return message
        return None

    def enqueue(self, message: ExecutiveMessage) -> QueueItem:
        """Append a message to the tail of the queue.

        No deduplication is done: the same message enqueued twice is delivered
        twice.
        """
        if message.recipient == BROADCAST:
            raise ValidationError("Broadcast messages are delivered via broadcast(), not queued")
        item = QueueItem(message=message, max_retries=self._max_retries)
        self._queue.append(item)
        return item

    async def process_next(self, *, strict: bool = False) -> Optional[ExecutiveMessage]:
        """Deliver the message at the head of the queue.

        Returns the reply produced by the recipient, if any. With ``strict`` an
        unroutable message raises :class:`UnroutableMessageError` after it has
        been dropped.
        """
        async with self._lock:
            if not self._queue:
                return None
            item = self._queue.popleft()
            return await self._deliver(item, strict=strict)

    async def process_all(self) -> int:
        """Drain the queue, including replies produced along the way."""
        steps = 0
        while self._queue:
            await self.process_next()
            steps += 1
        return steps

    async def broadcast(
        self,
        sender: Role,
        subject: str,
        body: str,
        priority: Union[MessagePriority, str] = MessagePriority.NORMAL,
    ) -> List[ExecutiveMessage]:
        """Deliver one copy of an announcement to every other active executive.

        Delivery is immediate and fire-and-forget: nothing is queued, failures
        are not retried and replies are discarded.
        """
        announcement = create_message(sender, BROADCAST, subject, body, priority=priority)
        delivered: List[ExecutiveMessage] = []
        async with self._lock:
            for agent in self._registry.active_agents():
                if agent.role == announcement.sender:
                    continue
                targeted = announcement.addressed_to(agent.role)
                try:
                    await self._invoke(agent, targeted)
                except Exception as exc:  # noqa: BLE001
                    logger.warning(
                        "Broadcast %s to %s failed: %s", announcement.id, agent.role, exc
                    )
                    targeted.resolve(MessageStatus.BLOCKED)
                    self._record_failure(
                        DeliveryFailure(targeted, FailureKind.BROADCAST, attempts=1, error=exc)
                    )
                else:
                    targeted.resolve(MessageStatus.COMPLETED)
                self._processed[new_id()] = targeted
                delivered.append(targeted)
        logger.info(
            "Broadcast %s from %s delivered to %d executive(s)",
            announcement.id,
            announcement.sender,
            len(delivered),
        )
        return delivered

    def clear(self) -> None:
        """Drop pending messages, processed history and recorded failures."""
        self._queue.clear()
        self._processed.clear()
        self._failures.clear()

    async def _deliver(self, item: QueueItem, *, strict: bool) -> Optional[ExecutiveMessage]:
        message = item.message
        agent = self._registry.get(message.recipient)
        if agent is None or not agent.active:
            logger.warning(
                "Dropping message %s: executive %s not found or inactive",
                message.id,
                message.recipient,
            )
            self._record_failure(
                DeliveryFailure(message, FailureKind.UNROUTABLE, attempts=0)
            )
            if strict:
                raise UnroutableMessageError(message.id, message.recipient)
            return None

        try:
            reply = await self._invoke(agent, message)
        except Exception as exc:  # noqa: BLE001
            attempts = item.retries + 1
            if item.retries < item.max_retries:
                item.retries += 1
                logger.info(
                    "Delivery of %s to %s failed (attempt %d/%d), requeueing: %s",
                    message.id,
                    message.recipient,
                    attempts,
                    item.max_retries + 1,
                    exc,
                )
                self._queue.append(item)
                return None
            message.resolve(MessageStatus.BLOCKED)
            self._processed[item.item_id] = message
            logger.error(
                "Message %s to %s blocked after %d attempts: %s",
                message.id,
                message.recipient,
                attempts,
                exc,
            )
            self._record_failure(
                DeliveryFailure(message, FailureKind.EXHAUSTED, attempts=attempts, error=exc)
            )
            return None

        message.resolve(MessageStatus.COMPLETED)
        self._processed[item.item_id] = message
        if reply is None:
            return None
        if reply.recipient == BROADCAST:
            logger.warning(
                "Discarding reply %s from %s: replies cannot be broadcast",
                reply.id,
                reply.sender,
            )
            self._record_failure(DeliveryFailure(reply, FailureKind.INVALID_REPLY, attempts=0))
            return None
        self.enqueue(reply)
        return reply

    async def _invoke(self, agent: Agent, message: ExecutiveMessage) -> Optional[ExecutiveMessage]:
        call = agent.handle_incoming_message(message)
        if self._handler_timeout is None:
            return await call
        return await asyncio.wait_for(call, timeout=self._handler_timeout)

    def _record_failure(self, failure: DeliveryFailure) -> None:
        self._failures.append(failure)
        if self._on_failure is not None:
            self._on_failure(failure)
