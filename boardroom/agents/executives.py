"""Catalog of the built-in executive seats and a factory to instantiate them."""
from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Tuple

from boardroom.agents.echo import EchoExecutive
from boardroom.agents.llm_executive import LLMExecutive
from boardroom.core.errors import ValidationError
from boardroom.core.models import ExecutiveProfile, ExecutiveRole, Role, normalize_role

if TYPE_CHECKING:
    from boardroom.agents.base import Agent
    from boardroom.services.llm_pool import LLMPool

_STYLE = (
    "Be clear, precise and direct. Quantify impacts where you can, flag risks early, "
    "and end with concrete next steps."
)

# role -> (name, description, capabilities, focus)
_SEATS: Dict[str, Tuple[str, str, Tuple[str, ...], str]] = {
    ExecutiveRole.CFO.value: (
        "Alex",
        "AI Chief Financial Officer - Managing financial strategy, budgets, and cash flow",
        (
            "Financial strategy and planning",
            "Cash flow management and forecasting",
            "Budget creation and monitoring",
            "Financial reporting and KPI tracking",
            "Cross-departmental budget reviews",
        ),
        "financial health: cash flow, budgets, pricing and capital allocation",
    ),
    ExecutiveRole.CMO.value: (
        "Jordan",
        "AI Chief Marketing Officer - Driving growth through strategic marketing",
        (
            "Marketing strategy",
            "Campaign planning and analysis",
            "Customer segmentation",
            "Competitor analysis",
            "Content review",
        ),
        "growth: positioning, campaigns, acquisition cost and brand",
    ),
    ExecutiveRole.COO.value: (
        "Morgan",
        "AI Chief Operating Officer - Optimizing operations and ensuring efficiency",
        (
            "Process optimization",
            "Capacity planning",
            "Vendor and inventory management",
            "SOP analysis",
        ),
        "operations: processes, capacity, suppliers and delivery quality",
    ),
    ExecutiveRole.CHRO.value: (
        "Taylor",
        "AI Chief Human Resources Officer - Building teams and nurturing culture",
        (
            "Hiring and workforce planning",
            "Compensation analysis",
            "Organization design review",
            "Employee engagement",
        ),
        "people: hiring, compensation, engagement and organization design",
    ),
    ExecutiveRole.CTO.value: (
        "Riley",
        "AI Chief Technology Officer - Guiding technology strategy and security",
        (
            "Technology strategy",
            "Architecture review",
            "Security assessment",
            "Dependency audit",
            "Code review",
        ),
        "technology: architecture, security posture, tooling and delivery",
    ),
    ExecutiveRole.CCO.value: (
        "Casey",
        "AI Chief Compliance Officer - Ensuring regulatory compliance and managing risk",
        (
            "Regulatory compliance",
            "Risk assessment",
            "Contract review",
            "Compliance audits",
        ),
        "compliance: regulation, contracts, audits and risk exposure",
    ),
}


def build_profile(role: Role) -> ExecutiveProfile:
    """Profile for one of the built-in seats."""
    role = normalize_role(role)
    if role not in _SEATS:
        raise ValidationError(f"No built-in executive for role '{role}'")
    name, description, capabilities, focus = _SEATS[role]
    return ExecutiveProfile(
        role=role,
        name=name,
        description=description,
        capabilities=frozenset(capabilities),
        system_prompt=(
            f"You are {name}, the {description.split(' - ')[0]} of a small business, "
            f"working alongside the other AI executives. Your focus is {focus}. {_STYLE}"
        ),
    )


def builtin_roles() -> List[str]:
    return list(_SEATS)


def create_executive(
    role: Role,
    llm_pool: Optional[LLMPool] = None,
    *,
    model_name: Optional[str] = None,
) -> Agent:
    """Instantiate a built-in executive.

    Without an LLM pool and model the executive falls back to the provider-free
    :class:`EchoExecutive`.
    """
    profile = build_profile(role)
    if llm_pool is None or model_name is None:
        return EchoExecutive(profile)
    audience = [seat for seat in _SEATS if seat != profile.role]
    return LLMExecutive(profile, llm_pool, model_name=model_name, report_audience=audience)


def create_executives(
    roles: Iterable[Role],
    llm_pool: Optional[LLMPool] = None,
    *,
    model_name: Optional[str] = None,
) -> List[Agent]:
    return [create_executive(role, llm_pool, model_name=model_name) for role in roles]
