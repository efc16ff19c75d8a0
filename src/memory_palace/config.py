"""
Settings for memory-palace.

Values come from ``MEMORY_PALACE_*`` environment variables or a ``.env``
file in the working directory.
"""

import logging
from typing import Literal, Optional

from casual_llm import ModelConfig, Provider, create_provider
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from memory_palace.llm import CasualLLMGateway

logger = logging.getLogger(__name__)


class PalaceSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="MEMORY_PALACE_", env_file=".env", extra="ignore"
    )

    # Language model
    llm_provider: Literal["openai", "ollama"] = "openai"
    llm_model: Optional[str] = None
    llm_api_key: Optional[str] = None
    llm_base_url: Optional[str] = None
    llm_timeout: float = Field(default=20.0, gt=0)

    # Insights
    insight_count: int = Field(default=3, ge=1)

    @property
    def llm_configured(self) -> bool:
        """Whether enough is set to build a provider."""
        if not self.llm_model:
            return False
        if self.llm_provider == "openai":
            return bool(self.llm_api_key and self.llm_api_key.strip())
        return True


def create_gateway(settings: PalaceSettings) -> CasualLLMGateway:
    """
    Build a casual-llm gateway from settings.

    Returns an unconfigured gateway (``configured() == False``) instead of
    failing when no model or API key is set.
    """
    if not settings.llm_configured:
        logger.warning(
            "Language model not configured; classification and insights will use heuristics only"
        )
        return CasualLLMGateway(None, timeout=settings.llm_timeout)

    provider_map = {
        "openai": Provider.OPENAI,
        "ollama": Provider.OLLAMA,
    }
    model_config = ModelConfig(
        name=settings.llm_model,
        provider=provider_map[settings.llm_provider],
        base_url=settings.llm_base_url,
        api_key=settings.llm_api_key,
    )
    return CasualLLMGateway(
        create_provider(model_config),
        model_name=settings.llm_model,
        timeout=settings.llm_timeout,
    )
