"""LLM-powered executive that answers messages and writes reports with a language model."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Optional

from boardroom.agents.base import Agent
from boardroom.core.errors import ProviderError
from boardroom.core.models import (
    CompanyContext,
    Decision,
    DecisionType,
    ExecutiveMessage,
    normalize_role,
)

if TYPE_CHECKING:
    from boardroom.core.models import ExecutiveProfile
    from boardroom.services.llm_pool import LLMPool

logger = logging.getLogger(__name__)


class LLMExecutive(Agent):
    """Executive whose answers come from a chat-completion model.

    The conversation history is kept per executive and sent with every call, so
    messages are answered in the context of what this executive said before.
    """

    def __init__(
        self,
        profile: ExecutiveProfile,
        llm_pool: LLMPool,
        *,
        model_name: str = "gpt-4",
        temperature: float = 0.7,
        max_tokens: int = 4096,
        report_audience: Iterable[str] = (),
    ) -> None:
        super().__init__(profile)
        self._llm_pool = llm_pool
        self.model_name = model_name
        self.temperature = temperature
        self.max_tokens = max_tokens
        audience = (normalize_role(role) for role in report_audience)
        self.report_audience = tuple(role for role in audience if role != profile.role)

    def build_system_prompt(self, context: Optional[CompanyContext] = None) -> str:
        prompt = self.profile.system_prompt
        if context is None:
            return prompt

        employees = context.employee_count if context.employee_count is not None else "Unknown"
        revenue = (
            f"{context.annual_revenue:,.0f} {context.currency}"
            if context.annual_revenue is not None
            else "Not specified"
        )
        lines = [
            prompt,
            "",
            "## Company Context",
            f"- Company Name: {context.name}",
            f"- Industry: {context.industry}",
            f"- Company Size: {context.size} ({employees} employees)",
            f"- Annual Revenue: {revenue}",
            f"- Fiscal Year End: {context.fiscal_year_end}",
            f"- Currency: {context.currency}",
            f"- Timezone: {context.timezone}",
            "",
            "### Company Goals",
            *(f"- {goal}" for goal in context.goals),
            "",
            "### Current Challenges",
            *(f"- {challenge}" for challenge in context.challenges),
        ]
        return "\n".join(lines)

    async def ask(self, prompt: str, context: Optional[CompanyContext] = None) -> str:
        """Send ``prompt`` with this executive's history and return the answer."""
        self._history.append({"role": "user", "content": prompt})
        try:
            async with self._llm_pool.acquire(self.model_name) as client:
                response = await client.chat.completions.create(
                    model=self.model_name,
                    messages=[
                        {"role": "system", "content": self.build_system_prompt(context)},
                        *self._history,
                    ],
                    temperature=self.temperature,
                    max_tokens=self.max_tokens,
                )
            content = response.choices[0].message.content
        except Exception as exc:  # noqa: BLE001
            # A failed turn must not stay in the history, the router will retry it.
            self._history.pop()
            logger.warning("%s provider call failed: %s", self.role, exc)
            raise ProviderError(f"{self.role} could not reach model '{self.model_name}': {exc}") from exc
        except BaseException:
            # Cancelled by a handler timeout.
            self._history.pop()
            raise

        if not content:
            self._history.pop()
            raise ProviderError(f"{self.role} received an empty response from '{self.model_name}'")

        self._history.append({"role": "assistant", "content": content})
        return content

    async def handle_incoming_message(
        self, message: ExecutiveMessage
    ) -> Optional[ExecutiveMessage]:
        prompt = (
            f"You received a message from the {message.sender}:\n\n"
            f"Subject: {message.subject}\n"
            f"Priority: {message.priority.value}\n\n"
            f"Message:\n{message.body}\n\n"
            f"Please provide a thoughtful response as the {self.role}, "
            "considering the implications for your area and providing actionable guidance."
        )
        answer = await self.ask(prompt)
        if not message.requires_response:
            return None
        return self.reply_to(message, answer)

    async def generate_report(self, context: CompanyContext) -> Decision:
        prompt = (
            f"Generate a status report from the {self.role} for {context.name}.\n\n"
            "Include:\n"
            "1. Executive Summary\n"
            "2. Key Metrics\n"
            "3. Risks and Opportunities\n"
            "4. Recommendations\n\n"
            "Make it actionable and highlight any areas requiring immediate attention."
        )
        report = await self.ask(prompt, context)
        return self.create_decision(
            DecisionType.RECOMMENDATION,
            f"{self.role} Status Report",
            f"{self.name} overview and recommendations",
            report,
            confidence=0.9,
            impacted_roles=self.report_audience,
        )
