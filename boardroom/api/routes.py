"""HTTP API exposing executives and message routing."""
from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from boardroom.agents.base import Agent
from boardroom.core.errors import UnroutableMessageError, ValidationError
from boardroom.core.models import ExecutiveMessage, MessagePriority, create_message
from boardroom.core.router import DeliveryFailure
from boardroom.orchestration.orchestrator import ExecutiveOrchestrator
from boardroom.runtime import get_orchestrator

router = APIRouter(tags=["messages"])


class ExecutiveResponse(BaseModel):
    role: str
    name: str
    description: str
    capabilities: List[str]
    active: bool

    @classmethod
    def from_agent(cls, agent: Agent) -> "ExecutiveResponse":
        return cls(
            role=agent.role,
            name=agent.name,
            description=agent.profile.description,
            capabilities=sorted(agent.capabilities),
            active=agent.active,
        )


class MessageRequest(BaseModel):
    sender: str = Field(..., description="Role of the sending executive")
    recipient: str = Field(..., description="Role of the receiving executive")
    subject: str
    body: str
    priority: MessagePriority = MessagePriority.NORMAL
    requires_response: bool = False
    parent_message_id: Optional[str] = None


class BroadcastRequest(BaseModel):
    sender: str
    subject: str
    body: str
    priority: MessagePriority = MessagePriority.NORMAL


class MessageResponse(BaseModel):
    id: str
    sender: str
    recipient: str
    subject: str
    body: str
    priority: str
    requires_response: bool
    parent_message_id: Optional[str]
    status: str
    created_at: datetime
    responded_at: Optional[datetime]

    @classmethod
    def from_message(cls, message: ExecutiveMessage) -> "MessageResponse":
        return cls(
            id=message.id,
            sender=message.sender,
            recipient=message.recipient,
            subject=message.subject,
            body=message.body,
            priority=message.priority.value,
            requires_response=message.requires_response,
            parent_message_id=message.parent_message_id,
            status=message.status.value,
            created_at=message.created_at,
            responded_at=message.responded_at,
        )


class SendResponse(BaseModel):
    message: MessageResponse
    reply: Optional[MessageResponse] = None
    pending: int


class ProcessResponse(BaseModel):
    steps: int
    pending: int


class FailureResponse(BaseModel):
    message: MessageResponse
    kind: str
    attempts: int
    reason: str

    @classmethod
    def from_failure(cls, failure: DeliveryFailure) -> "FailureResponse":
        return cls(
            message=MessageResponse.from_message(failure.message),
            kind=failure.kind.value,
            attempts=failure.attempts,
            reason=failure.reason,
        )


@router.get("/executives", response_model=List[ExecutiveResponse])
async def list_executives(
    orchestrator: ExecutiveOrchestrator = Depends(get_orchestrator),
) -> List[ExecutiveResponse]:
    return [ExecutiveResponse.from_agent(agent) for agent in orchestrator.registry.agents()]


@router.post("/messages", response_model=SendResponse, status_code=status.HTTP_202_ACCEPTED)
async def send_message(
    request: MessageRequest,
    orchestrator: ExecutiveOrchestrator = Depends(get_orchestrator),
) -> SendResponse:
    try:
        message = create_message(
            request.sender,
            request.recipient,
            request.subject,
            request.body,
            priority=request.priority,
            requires_response=request.requires_response,
            parent_message_id=request.parent_message_id,
        )
        reply = await orchestrator.send_message(message)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    except UnroutableMessageError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return SendResponse(
        message=MessageResponse.from_message(message),
        reply=MessageResponse.from_message(reply) if reply else None,
        pending=orchestrator.pending_count,
    )


@router.post("/messages/process", response_model=ProcessResponse)
async def process_messages(
    orchestrator: ExecutiveOrchestrator = Depends(get_orchestrator),
) -> ProcessResponse:
    steps = await orchestrator.process_all()
    return ProcessResponse(steps=steps, pending=orchestrator.pending_count)


@router.get("/messages/processed", response_model=Dict[str, MessageResponse])
async def list_processed(
    orchestrator: ExecutiveOrchestrator = Depends(get_orchestrator),
) -> Dict[str, MessageResponse]:
    return {
        delivery_id: MessageResponse.from_message(message)
        for delivery_id, message in orchestrator.processed_messages.items()
    }


@router.get("/messages/failures", response_model=List[FailureResponse])
async def list_failures(
    orchestrator: ExecutiveOrchestrator = Depends(get_orchestrator),
) -> List[FailureResponse]:
    return [FailureResponse.from_failure(failure) for failure in orchestrator.failures]


@router.post("/broadcasts", response_model=List[MessageResponse], status_code=status.HTTP_202_ACCEPTED)
async def broadcast(
    request: BroadcastRequest,
    orchestrator: ExecutiveOrchestrator = Depends(get_orchestrator),
) -> List[MessageResponse]:
    try:
        delivered = await orchestrator.broadcast_message(
            request.sender, request.subject, request.body, request.priority
        )
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    return [MessageResponse.from_message(message) for message in delivered]
