"""
Language model gateway abstractions for memory-palace.

Provides the protocol consumed by the classifier and insight generators,
plus an adapter for casual-llm providers.
"""

from memory_palace.llm.casual_llm_gateway import CasualLLMGateway
from memory_palace.llm.errors import (
    GatewayError,
    GatewayNotConfiguredError,
    GatewayRequestError,
    GatewayResponseError,
)
from memory_palace.llm.protocol import GatewayMessage, LanguageModelGateway

__all__ = [
    "CasualLLMGateway",
    "GatewayError",
    "GatewayMessage",
    "GatewayNotConfiguredError",
    "GatewayRequestError",
    "GatewayResponseError",
    "LanguageModelGateway",
]
