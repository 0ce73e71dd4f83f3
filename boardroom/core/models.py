"""Core data models shared across orchestrator components."""
from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Tuple, Union

from .errors import ValidationError

BROADCAST = "ALL"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


class ExecutiveRole(str, Enum):
    """Built-in executive seats. Any other non-empty string is accepted as a role."""

    CFO = "CFO"
    CMO = "CMO"
    COO = "COO"
    CHRO = "CHRO"
    CTO = "CTO"
    CCO = "CCO"


class MessagePriority(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"


class MessageStatus(str, Enum):
    """Delivery status of a message. Only PENDING may transition."""

    PENDING = "pending"
    COMPLETED = "completed"
    BLOCKED = "blocked"


class DecisionType(str, Enum):
    APPROVAL = "approval"
    REJECTION = "rejection"
    RECOMMENDATION = "recommendation"
    ALERT = "alert"
    REQUEST = "request"


Role = Union[ExecutiveRole, str]


def normalize_role(role: Role, *, allow_broadcast: bool = False) -> str:
    """Return the plain string form of a role, rejecting empty values."""
    if isinstance(role, Enum):
        role = role.value
    if not isinstance(role, str) or not role.strip():
        raise ValidationError(f"Invalid executive role: {role!r}")
    role = role.strip()
    if role == BROADCAST and not allow_broadcast:
        raise ValidationError(f"'{BROADCAST}' is not a valid target here")
    return role


@dataclass(slots=True)
class ExecutiveProfile:
    """Identity and static configuration of an executive agent."""

    role: str
    name: str
    description: str = ""
    capabilities: frozenset = field(default_factory=frozenset)
    system_prompt: str = ""
    active: bool = True
    created_at: datetime = field(default_factory=utcnow)

    def __post_init__(self) -> None:
        self.role = normalize_role(self.role)
        self.capabilities = frozenset(self.capabilities)


@dataclass(slots=True)
class CompanyContext:
    """Company configuration shared by reference with every agent call."""

    name: str
    industry: str = ""
    size: str = "small"
    goals: Tuple[str, ...] = ()
    challenges: Tuple[str, ...] = ()
    annual_revenue: Optional[float] = None
    employee_count: Optional[int] = None
    fiscal_year_end: str = "December"
    currency: str = "USD"
    timezone: str = "UTC"
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def merged(self, **changes: Any) -> "CompanyContext":
        """Return a copy with ``changes`` applied and ``updated_at`` stamped."""
        for protected in ("id", "created_at", "updated_at"):
            changes.pop(protected, None)
        if "goals" in changes:
            changes["goals"] = tuple(changes["goals"])
        if "challenges" in changes:
            changes["challenges"] = tuple(changes["challenges"])
        return replace(self, **changes, updated_at=utcnow())


@dataclass(slots=True, eq=False)
class ExecutiveMessage:
    """Message exchanged between executives through the router.

    Identity comparison is intentional: enqueuing the same object twice is two
    deliveries of one message, not two equal messages.
    """

    sender: str
    recipient: str
    subject: str
    body: str
    priority: MessagePriority = MessagePriority.NORMAL
    requires_response: bool = False
    parent_message_id: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    id: str = field(default_factory=new_id)
    status: MessageStatus = MessageStatus.PENDING
    created_at: datetime = field(default_factory=utcnow)
    responded_at: Optional[datetime] = None

    @property
    def is_broadcast(self) -> bool:
        return self.recipient == BROADCAST

    @property
    def is_resolved(self) -> bool:
        return self.status is not MessageStatus.PENDING

    def resolve(self, status: MessageStatus) -> bool:
        """Move a pending message to a terminal status.

        Returns False when the message was already resolved; its status is
        left untouched in that case.
        """
        if status is MessageStatus.PENDING:
            raise ValidationError("A message cannot be resolved back to pending")
        if self.is_resolved:
            return False
        self.status = status
        self.responded_at = utcnow()
        return True

    def addressed_to(self, recipient: str) -> "ExecutiveMessage":
        """Copy of this message targeted at a single recipient, with a fresh id."""
        return ExecutiveMessage(
            sender=self.sender,
            recipient=normalize_role(recipient),
            subject=self.subject,
            body=self.body,
            priority=self.priority,
            requires_response=self.requires_response,
            parent_message_id=self.parent_message_id,
            metadata={**self.metadata, "broadcast_id": self.id},
        )


@dataclass(frozen=True, slots=True)
class Decision:
    """Immutable recommendation or verdict issued by an executive."""

    owner: str
    type: DecisionType
    title: str
    summary: str
    details: str = ""
    confidence: float = 0.8
    impacted_roles: Tuple[str, ...] = ()
    action_required: bool = False
    deadline: Optional[datetime] = None
    supporting_data: Dict[str, Any] = field(default_factory=dict)
    id: str = field(default_factory=new_id)
    created_at: datetime = field(default_factory=utcnow)

    def __post_init__(self) -> None:
        object.__setattr__(self, "owner", normalize_role(self.owner))
        object.__setattr__(
            self, "impacted_roles", tuple(normalize_role(role) for role in self.impacted_roles)
        )
        if not 0.0 <= self.confidence <= 1.0:
            raise ValidationError(
                f"Decision confidence must be within [0, 1], got {self.confidence}"
            )


def create_message(
    sender: Role,
    recipient: Role,
    subject: str,
    body: str,
    *,
    priority: Union[MessagePriority, str] = MessagePriority.NORMAL,
    requires_response: bool = False,
    parent_message_id: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> ExecutiveMessage:
    """Validated constructor for :class:`ExecutiveMessage`."""
    try:
        priority = MessagePriority(priority)
    except ValueError as exc:
        raise ValidationError(f"Unknown message priority: {priority!r}") from exc
    return ExecutiveMessage(
        sender=normalize_role(sender),
        recipient=normalize_role(recipient, allow_broadcast=True),
        subject=subject,
        body=body,
        priority=priority,
        requires_response=requires_response,
        parent_message_id=parent_message_id,
        metadata=dict(metadata or {}),
    )


def create_decision(
    owner: Role,
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
    """Validated constructor for :class:`Decision`."""
    try:
        decision_type = DecisionType(decision_type)
    except ValueError as exc:
        raise ValidationError(f"Unknown decision type: {decision_type!r}") from exc
    impacted: list = []
    for role in impacted_roles:
        role = normalize_role(role)
        if role not in impacted:
            impacted.append(role)
    return Decision(
        owner=normalize_role(owner),
        type=decision_type,
        title=title,
        summary=summary,
        details=details,
        confidence=float(confidence),
        impacted_roles=tuple(impacted),
        action_required=action_required,
        deadline=deadline,
        supporting_data=dict(supporting_data or {}),
    )
