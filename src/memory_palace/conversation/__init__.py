"""
Thinking-partner conversation for memory-palace.
"""

from memory_palace.conversation.thinking_partner import (
    ThinkingPartner,
    build_thinking_partner_prompt,
)

__all__ = [
    "ThinkingPartner",
    "build_thinking_partner_prompt",
]
