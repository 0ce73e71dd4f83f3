"""Decision ledger and report routes."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from boardroom.core.errors import ValidationError
from boardroom.core.models import Decision, DecisionType, create_decision
from boardroom.orchestration.orchestrator import ExecutiveOrchestrator
from boardroom.runtime import get_orchestrator

router = APIRouter(tags=["decisions"])


class DecisionRequest(BaseModel):
    owner: str = Field(..., description="Role of the executive issuing the decision")
    type: DecisionType
    title: str
    summary: str
    details: str = ""
    confidence: float = Field(default=0.8, ge=0.0, le=1.0)
    impacted_roles: List[str] = Field(default_factory=list)
    action_required: bool = False
    deadline: Optional[datetime] = None
    supporting_data: Dict[str, Any] = Field(default_factory=dict)


class DecisionResponse(BaseModel):
    id: str
    owner: str
    type: str
    title: str
    summary: str
    details: str
    confidence: float
    impacted_roles: List[str]
    action_required: bool
    deadline: Optional[datetime]
    created_at: datetime

    @classmethod
    def from_decision(cls, decision: Decision) -> "DecisionResponse":
        return cls(
            id=decision.id,
            owner=decision.owner,
            type=decision.type.value,
            title=decision.title,
            summary=decision.summary,
            details=decision.details,
            confidence=decision.confidence,
            impacted_roles=list(decision.impacted_roles),
            action_required=decision.action_required,
            deadline=decision.deadline,
            created_at=decision.created_at,
        )


class RecordResponse(BaseModel):
    decision: DecisionResponse
    notifications: List[str] = Field(description="Ids of the notification messages queued")


class ReportErrorResponse(BaseModel):
    role: str
    error: str


class ReportsResponse(BaseModel):
    decisions: List[DecisionResponse]
    errors: List[ReportErrorResponse]


@router.post("/decisions", response_model=RecordResponse, status_code=status.HTTP_201_CREATED)
async def record_decision(
    request: DecisionRequest,
    orchestrator: ExecutiveOrchestrator = Depends(get_orchestrator),
) -> RecordResponse:
    try:
        decision = create_decision(
            request.owner,
            request.type,
            request.title,
            request.summary,
            request.details,
            confidence=request.confidence,
            impacted_roles=request.impacted_roles,
            action_required=request.action_required,
            deadline=request.deadline,
            supporting_data=request.supporting_data,
        )
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    notifications = await orchestrator.record_decision(decision)
    return RecordResponse(
        decision=DecisionResponse.from_decision(decision),
        notifications=[message.id for message in notifications],
    )


@router.get("/decisions", response_model=List[DecisionResponse])
async def list_decisions(
    orchestrator: ExecutiveOrchestrator = Depends(get_orchestrator),
) -> List[DecisionResponse]:
    return [DecisionResponse.from_decision(d) for d in orchestrator.get_decisions()]


@router.get("/decisions/pending", response_model=List[DecisionResponse])
async def list_pending_decisions(
    orchestrator: ExecutiveOrchestrator = Depends(get_orchestrator),
) -> List[DecisionResponse]:
    return [DecisionResponse.from_decision(d) for d in orchestrator.get_pending_decisions()]


@router.get("/decisions/{role}", response_model=List[DecisionResponse])
async def list_decisions_by_executive(
    role: str,
    orchestrator: ExecutiveOrchestrator = Depends(get_orchestrator),
) -> List[DecisionResponse]:
    try:
        decisions = orchestrator.get_decisions_by_executive(role)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    return [DecisionResponse.from_decision(d) for d in decisions]


@router.post("/reports", response_model=ReportsResponse)
async def generate_reports(
    orchestrator: ExecutiveOrchestrator = Depends(get_orchestrator),
) -> ReportsResponse:
    batch = await orchestrator.generate_all_reports()
    return ReportsResponse(
        decisions=[DecisionResponse.from_decision(d) for d in batch.decisions],
        errors=[
            ReportErrorResponse(role=failure.role, error=str(failure.error))
            for failure in batch.errors
        ],
    )
