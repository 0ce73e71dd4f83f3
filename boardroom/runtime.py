"""Application runtime composition helpers."""
from __future__ import annotations

from functools import lru_cache

from boardroom.config import config
from boardroom.core.models import CompanyContext
from boardroom.logs import setup_logging
from boardroom.orchestration.orchestrator import ExecutiveOrchestrator, create_orchestrator
from boardroom.services.llm_pool import LLMPool


@lru_cache
def get_llm_pool() -> LLMPool:
    pool = LLMPool()

    # Register whichever provider is configured
    if config.azure_openai:
        pool.register_azure_openai(config.azure_openai.deployment_name, config.azure_openai)
    elif config.openai:
        pool.register_openai(config.openai.model, config.openai)

    return pool


def default_company_context() -> CompanyContext:
    company = config.company
    return CompanyContext(
        name=company.name,
        industry=company.industry,
        size=company.size,
        goals=company.goals,
        challenges=company.challenges,
    )


@lru_cache
def get_orchestrator() -> ExecutiveOrchestrator:
    setup_logging(config.log_level, json_output=config.log_json)
    settings = config.orchestrator
    return create_orchestrator(
        default_company_context(),
        llm_pool=get_llm_pool(),
        model_name=config.default_model,
        auto_routing=settings.auto_routing,
        notifications=settings.notifications,
        max_retries=settings.max_retries,
        handler_timeout=settings.handler_timeout,
    )
