"""Company context and session reset routes."""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from boardroom.core.models import CompanyContext
from boardroom.orchestration.orchestrator import ExecutiveOrchestrator
from boardroom.runtime import get_orchestrator

router = APIRouter(tags=["context"])

# Fields that may be cleared back to null by a PATCH.
_NULLABLE_FIELDS = frozenset({"annual_revenue", "employee_count"})


class ContextResponse(BaseModel):
    id: str
    name: str
    industry: str
    size: str
    goals: List[str]
    challenges: List[str]
    annual_revenue: Optional[float]
    employee_count: Optional[int]
    fiscal_year_end: str
    currency: str
    timezone: str
    updated_at: datetime

    @classmethod
    def from_context(cls, context: CompanyContext) -> "ContextResponse":
        return cls(
            id=context.id,
            name=context.name,
            industry=context.industry,
            size=context.size,
            goals=list(context.goals),
            challenges=list(context.challenges),
            annual_revenue=context.annual_revenue,
            employee_count=context.employee_count,
            fiscal_year_end=context.fiscal_year_end,
            currency=context.currency,
            timezone=context.timezone,
            updated_at=context.updated_at,
        )


class ContextUpdate(BaseModel):
    name: Optional[str] = None
    industry: Optional[str] = None
    size: Optional[str] = None
    goals: Optional[List[str]] = None
    challenges: Optional[List[str]] = None
    annual_revenue: Optional[float] = None
    employee_count: Optional[int] = None
    fiscal_year_end: Optional[str] = None
    currency: Optional[str] = None
    timezone: Optional[str] = None


@router.get("/context", response_model=ContextResponse)
async def get_context(
    orchestrator: ExecutiveOrchestrator = Depends(get_orchestrator),
) -> ContextResponse:
    return ContextResponse.from_context(orchestrator.company_context)


@router.patch("/context", response_model=ContextResponse)
async def update_context(
    request: ContextUpdate,
    orchestrator: ExecutiveOrchestrator = Depends(get_orchestrator),
) -> ContextResponse:
    changes = {
        key: value
        for key, value in request.model_dump(exclude_unset=True).items()
        if value is not None or key in _NULLABLE_FIELDS
    }
    context = orchestrator.update_context(**changes)
    return ContextResponse.from_context(context)


@router.delete("/history", status_code=status.HTTP_204_NO_CONTENT)
async def clear_history(orchestrator: ExecutiveOrchestrator = Depends(get_orchestrator)) -> None:
    orchestrator.clear_all_history()
