"""Tests for the LLM-backed executive using an in-memory chat client."""
from __future__ import annotations

import asyncio
from types import SimpleNamespace

import pytest

from boardroom.agents.executives import build_profile, create_executive
from boardroom.agents.llm_executive import LLMExecutive
from boardroom.core.errors import ProviderError
from boardroom.core.models import CompanyContext, MessageStatus, create_message
from boardroom.core.registry import AgentRegistry
from boardroom.core.router import MessageRouter
from boardroom.services.llm_pool import LLMPool


class FakeCompletions:
    def __init__(self, answers) -> None:
        self.answers = list(answers)
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        answer = self.answers.pop(0)
        if isinstance(answer, Exception):
            raise answer
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=answer))])


class FakeClient:
    def __init__(self, *answers) -> None:
        self.completions = FakeCompletions(answers)
        self.chat = SimpleNamespace(completions=self.completions)


def _executive(role: str, client: FakeClient) -> LLMExecutive:
    pool = LLMPool()
    pool.register_client("fake-model", client)
    executive = create_executive(role, pool, model_name="fake-model")
    assert isinstance(executive, LLMExecutive)
    return executive


@pytest.mark.anyio
async def test_replies_when_response_required() -> None:
    client = FakeClient("Keep it under 15k.")
    cfo = _executive("CFO", client)
    message = create_message("CMO", "CFO", "Ad budget", "Can we spend 20k?", requires_response=True)

    reply = await cfo.handle_incoming_message(message)

    assert reply is not None
    assert reply.body == "Keep it under 15k."
    assert reply.recipient == "CMO"
    assert reply.parent_message_id == message.id
    [call] = client.completions.calls
    assert call["model"] == "fake-model"
    assert call["messages"][0]["role"] == "system"
    assert "Can we spend 20k?" in call["messages"][1]["content"]
    assert [entry["role"] for entry in cfo.history] == ["user", "assistant"]


@pytest.mark.anyio
async def test_no_reply_when_not_required() -> None:
    cfo = _executive("CFO", FakeClient("Noted."))

    reply = await cfo.handle_incoming_message(create_message("CMO", "CFO", "FYI", "Launch soon"))

    assert reply is None
    assert len(cfo.history) == 2


@pytest.mark.anyio
async def test_provider_failure_raises_and_leaves_history_untouched() -> None:
    cfo = _executive("CFO", FakeClient(RuntimeError("rate limited")))

    with pytest.raises(ProviderError):
        await cfo.handle_incoming_message(create_message("CMO", "CFO", "Q", "?"))

    assert cfo.history == []


@pytest.mark.anyio
async def test_empty_provider_answer_is_a_failure() -> None:
    cfo = _executive("CFO", FakeClient(""))

    with pytest.raises(ProviderError):
        await cfo.handle_incoming_message(create_message("CMO", "CFO", "Q", "?"))


@pytest.mark.anyio
async def test_unregistered_model_is_a_provider_failure() -> None:
    executive = LLMExecutive(build_profile("CTO"), LLMPool(), model_name="missing")

    with pytest.raises(ProviderError):
        await executive.handle_incoming_message(create_message("CFO", "CTO", "Q", "?"))


@pytest.mark.anyio
async def test_router_retries_provider_failures() -> None:
    client = FakeClient(RuntimeError("timeout"), "All good.")
    cfo = _executive("CFO", client)
    registry = AgentRegistry()
    registry.register("CFO", cfo)
    router = MessageRouter(registry)
    message = create_message("CMO", "CFO", "Q", "?")

    router.enqueue(message)
    await router.process_all()

    assert message.status is MessageStatus.COMPLETED
    assert len(client.completions.calls) == 2


@pytest.mark.anyio
async def test_timed_out_call_is_retried_with_clean_history() -> None:
    client = FakeClient("Late answer.", "All good.")
    original_create = client.completions.create

    async def slow_first_call(**kwargs):
        if not client.completions.calls:
            client.completions.calls.append(kwargs)
            client.completions.answers.pop(0)
            await asyncio.sleep(1)
        return await original_create(**kwargs)

    client.completions.create = slow_first_call
    cfo = _executive("CFO", client)
    registry = AgentRegistry()
    registry.register("CFO", cfo)
    router = MessageRouter(registry, handler_timeout=0.05)
    message = create_message("CMO", "CFO", "Q", "?")

    router.enqueue(message)
    await router.process_all()

    assert message.status is MessageStatus.COMPLETED
    assert [turn["role"] for turn in cfo.history] == ["user", "assistant"]
    retried = client.completions.calls[-1]["messages"]
    assert [turn["role"] for turn in retried] == ["system", "user"]


@pytest.mark.anyio
async def test_report_includes_company_context_and_audience() -> None:
    client = FakeClient("Runway is 9 months.")
    cfo = _executive("CFO", client)
    context = CompanyContext(
        name="Acme",
        industry="Retail",
        goals=("Grow online sales",),
        annual_revenue=1_200_000,
        employee_count=12,
    )

    decision = await cfo.generate_report(context)

    assert decision.owner == "CFO"
    assert decision.details == "Runway is 9 months."
    assert decision.confidence == 0.9
    assert "CFO" not in decision.impacted_roles
    assert set(decision.impacted_roles) == {"CMO", "COO", "CHRO", "CTO", "CCO"}
    system_prompt = client.completions.calls[0]["messages"][0]["content"]
    assert "Company Name: Acme" in system_prompt
    assert "- Grow online sales" in system_prompt
    assert "1,200,000 USD" in system_prompt


def test_executive_without_pool_falls_back_to_echo() -> None:
    executive = create_executive("CCO")

    assert not isinstance(executive, LLMExecutive)
    assert executive.name == "Casey"
    assert "Compliance audits" in executive.capabilities
