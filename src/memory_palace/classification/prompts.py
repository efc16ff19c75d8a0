"""
System prompts for memory classification and connection finding.
"""

MEMORY_ANALYSIS_SYSTEM_PROMPT = """You are a memory analysis assistant. Given a piece of text (a transcribed voice note, written note, or conversation excerpt), extract:
1. tags: 3-5 relevant topic tags (lowercase, single words or short phrases)
2. summary: A concise 1-2 sentence summary
3. suggestedRoom: A suggested category room name (e.g., "Work & Projects", "Ideas Lab", "Learning", "Personal")

Respond in JSON format only: {"tags": [...], "summary": "...", "suggestedRoom": "..."}"""

MEMORY_ANALYSIS_USER_PROMPT = """Analyze this memory:

{content}"""


CONNECTION_FINDING_SYSTEM_PROMPT = """You find connections between memories. Given a new memory and a list of existing memories, identify which existing memories are related and how.

Respond in JSON format only: [{"memoryId": "...", "relationship": "...", "strength": 0.0-1.0}]
Only include memories with strength > 0.3. Maximum 5 connections."""

CONNECTION_FINDING_USER_PROMPT = """New memory: {content}

Existing memories:
{memory_list}"""
