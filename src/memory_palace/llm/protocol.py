"""
Language model gateway protocol for memory-palace.

The classifier, the connection finder, the thinking partner and the AI
insight generators only need two things from a language model: to know whether one is available,
and to turn a short conversation into a text reply.
"""

from dataclasses import dataclass
from typing import List, Literal, Optional, Protocol

from typing_extensions import runtime_checkable

GatewayRole = Literal["user", "assistant"]


@dataclass(frozen=True)
class GatewayMessage:
    """One turn of a conversation sent to the gateway."""

    role: GatewayRole
    text: str


@runtime_checkable
class LanguageModelGateway(Protocol):
    """
    Protocol for text-completion backends.

    Implementations must:

    1. Answer ``configured()`` without doing any I/O
    2. Raise a ``GatewayError`` subclass from ``complete()`` on missing
       credentials, upstream errors, timeouts or empty replies instead of
       returning empty text
    3. Apply their own timeout so callers are never blocked indefinitely

    Example:
        >>> gateway = CasualLLMGateway(provider)
        >>> if gateway.configured():
        ...     text = await gateway.complete([GatewayMessage("user", "Hi")])
    """

    def configured(self) -> bool:
        """Whether completions can be attempted at all."""
        ...

    async def complete(
        self, messages: List[GatewayMessage], system_prompt: Optional[str] = None
    ) -> str:
        """
        Run one request/response completion.

        Args:
            messages: Ordered conversation turns
            system_prompt: Optional instruction prompt

        Returns:
            Non-empty reply text

        Raises:
            GatewayError: On any failure
        """
        ...
