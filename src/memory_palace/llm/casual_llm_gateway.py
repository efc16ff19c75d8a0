"""
casual-llm adapter for the language model gateway protocol.

Wraps any ``casual_llm.LLMProvider`` (OpenAI, Ollama, ...) behind
``configured()``/``complete()`` with a single timeout and no retries.
"""

import asyncio
import logging
from typing import List, Optional

from casual_llm import AssistantMessage, LLMProvider, SystemMessage, UserMessage

from memory_palace.llm.errors import (
    GatewayNotConfiguredError,
    GatewayRequestError,
    GatewayResponseError,
)
from memory_palace.llm.protocol import GatewayMessage

logger = logging.getLogger(__name__)


class CasualLLMGateway:
    """
    Language model gateway backed by a casual-llm provider.

    A gateway built without a provider reports ``configured() == False`` and
    raises ``GatewayNotConfiguredError`` if called anyway.
    """

    def __init__(
        self,
        llm_provider: Optional[LLMProvider],
        model_name: str = "unknown",
        timeout: float = 20.0,
        temperature: float = 0.7,
        max_tokens: int = 1024,
    ):
        """
        Initialize the gateway.

        Args:
            llm_provider: casual-llm provider instance, or None when no
                          credentials are available
            model_name: Name of the model (for logging)
            timeout: Seconds to wait for one completion before giving up
            temperature: Sampling temperature passed to the provider
            max_tokens: Reply length cap passed to the provider
        """
        self.llm_provider = llm_provider
        self.model_name = model_name
        self.timeout = timeout
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.call_count = 0
        self.failure_count = 0

        logger.info(
            f"CasualLLMGateway initialized: model={model_name}, "
            f"configured={self.configured()}, timeout={timeout}s"
        )

    def configured(self) -> bool:
        return self.llm_provider is not None

    def _to_chat_messages(self, messages: List[GatewayMessage], system_prompt: Optional[str]):
        chat_messages = []
        if system_prompt:
            chat_messages.append(SystemMessage(content=system_prompt))
        for message in messages:
            if message.role == "assistant":
                chat_messages.append(AssistantMessage(content=message.text))
            else:
                chat_messages.append(UserMessage(content=message.text))
        return chat_messages

    async def complete(
        self, messages: List[GatewayMessage], system_prompt: Optional[str] = None
    ) -> str:
        if self.llm_provider is None:
            raise GatewayNotConfiguredError(
                "No language model configured. Set MEMORY_PALACE_LLM_MODEL "
                "(and MEMORY_PALACE_LLM_API_KEY for OpenAI)."
            )

        self.call_count += 1
        try:
            response = await asyncio.wait_for(
                self.llm_provider.chat(
                    self._to_chat_messages(messages, system_prompt),
                    response_format="text",
                    temperature=self.temperature,
                    max_tokens=self.max_tokens,
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            self.failure_count += 1
            raise GatewayRequestError(
                f"Completion timed out after {self.timeout}s (model={self.model_name})"
            ) from e
        except Exception as e:
            self.failure_count += 1
            raise GatewayRequestError(f"Completion failed (model={self.model_name}): {e}") from e

        content = getattr(response, "content", None)
        if not isinstance(content, str) or not content.strip():
            self.failure_count += 1
            raise GatewayResponseError(f"Empty completion from model={self.model_name}")

        logger.debug(f"Completion received ({len(content)} chars)")
        return content.strip()

    def get_metrics(self) -> dict:
        return {
            "gateway_call_count": self.call_count,
            "gateway_failure_count": self.failure_count,
        }
