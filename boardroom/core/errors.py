"""Error taxonomy for the orchestration core."""
from __future__ import annotations


class OrchestrationError(Exception):
    """Base class for errors raised by the orchestration core."""


class ValidationError(OrchestrationError, ValueError):
    """A message or decision was malformed and never entered the queue."""


class AgentFailure(OrchestrationError):
    """Transient failure while an agent handled a message. Retried by the router."""


class ProviderError(AgentFailure):
    """The language-model provider behind an agent failed or timed out."""


class UnroutableMessageError(OrchestrationError, LookupError):
    """The target executive is not registered or is inactive. Never retried."""

    def __init__(self, message_id: str, recipient: str) -> None:
        super().__init__(f"No active executive '{recipient}' for message {message_id}")
        self.message_id = message_id
        self.recipient = recipient
