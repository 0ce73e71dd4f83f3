"""Configuration management for the orchestrator."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional, Tuple


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_list(name: str) -> Tuple[str, ...]:
    value = os.getenv(name, "")
    return tuple(item.strip() for item in value.split(";") if item.strip())


@dataclass(frozen=True)
class AzureOpenAIConfig:
    """Azure OpenAI service configuration."""

    api_key: str
    endpoint: str
    api_version: str = "2024-02-15-preview"
    deployment_name: str = "gpt-4"
    max_concurrent: int = 50


@dataclass(frozen=True)
class OpenAIConfig:
    """OpenAI API configuration."""

    api_key: str
    model: str = "gpt-4o-mini"
    base_url: Optional[str] = None
    max_concurrent: int = 10


@dataclass(frozen=True)
class OrchestratorSettings:
    """Routing behavior of the executive orchestrator."""

    auto_routing: bool = True
    notifications: bool = True
    max_retries: int = 3
    handler_timeout: Optional[float] = None


@dataclass(frozen=True)
class CompanySettings:
    """Company profile used to seed the shared context."""

    name: str = "Acme Inc."
    industry: str = "General"
    size: str = "small"
    goals: Tuple[str, ...] = ()
    challenges: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Config:
    """Application configuration loaded from environment variables."""

    azure_openai: Optional[AzureOpenAIConfig] = None
    openai: Optional[OpenAIConfig] = None
    orchestrator: OrchestratorSettings = field(default_factory=OrchestratorSettings)
    company: CompanySettings = field(default_factory=CompanySettings)
    log_level: str = "INFO"
    log_json: bool = False
    environment: str = "development"

    @property
    def default_model(self) -> Optional[str]:
        if self.azure_openai:
            return self.azure_openai.deployment_name
        if self.openai:
            return self.openai.model
        return None

    @classmethod
    def from_env(cls) -> Config:
        """Load configuration from environment variables."""
        azure_key = os.getenv("AZURE_OPENAI_KEY")
        azure_endpoint = os.getenv("AZURE_OPENAI_ENDPOINT")

        azure_config = None
        if azure_key and azure_endpoint:
            azure_config = AzureOpenAIConfig(
                api_key=azure_key,
                endpoint=azure_endpoint,
                api_version=os.getenv("AZURE_OPENAI_API_VERSION", "2024-02-15-preview"),
                deployment_name=os.getenv("AZURE_OPENAI_DEPLOYMENT", "gpt-4"),
                max_concurrent=int(os.getenv("AZURE_OPENAI_MAX_CONCURRENT", "50")),
            )

        openai_config = None
        openai_key = os.getenv("OPENAI_API_KEY")
        if openai_key:
            openai_config = OpenAIConfig(
                api_key=openai_key,
                model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
                base_url=os.getenv("OPENAI_BASE_URL") or None,
                max_concurrent=int(os.getenv("OPENAI_MAX_CONCURRENT", "10")),
            )

        timeout = os.getenv("BOARDROOM_HANDLER_TIMEOUT")
        orchestrator = OrchestratorSettings(
            auto_routing=_env_bool("BOARDROOM_AUTO_ROUTING", True),
            notifications=_env_bool("BOARDROOM_NOTIFICATIONS", True),
            max_retries=int(os.getenv("BOARDROOM_MAX_RETRIES", "3")),
            handler_timeout=float(timeout) if timeout else None,
        )

        company = CompanySettings(
            name=os.getenv("BOARDROOM_COMPANY_NAME", "Acme Inc."),
            industry=os.getenv("BOARDROOM_COMPANY_INDUSTRY", "General"),
            size=os.getenv("BOARDROOM_COMPANY_SIZE", "small"),
            goals=_env_list("BOARDROOM_COMPANY_GOALS"),
            challenges=_env_list("BOARDROOM_COMPANY_CHALLENGES"),
        )

        return cls(
            azure_openai=azure_config,
            openai=openai_config,
            orchestrator=orchestrator,
            company=company,
            log_level=os.getenv("BOARDROOM_LOG_LEVEL", "INFO"),
            log_json=_env_bool("BOARDROOM_LOG_JSON", False),
            environment=os.getenv("ENVIRONMENT", "development"),
        )


# Global config instance
config = Config.from_env()
