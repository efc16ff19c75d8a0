"""
Parsing of untrusted language model replies into strict schemas.
"""

import json
import logging
import re
from typing import List

from pydantic import ValidationError

from memory_palace.classification.models import (
    AnalysisParseResult,
    AnalysisPayload,
    ConnectionPayload,
    MalformedAnalysis,
    ParsedAnalysis,
)

logger = logging.getLogger(__name__)

_CODE_FENCE = re.compile(r"^```[a-zA-Z]*\s*(.*?)\s*```$", re.DOTALL)


def strip_code_fence(text: str) -> str:
    """Remove a surrounding Markdown code fence, if the model added one."""
    text = text.strip()
    match = _CODE_FENCE.match(text)
    return match.group(1) if match else text


def parse_analysis(text: str) -> AnalysisParseResult:
    """
    Parse a memory analysis reply.

    Args:
        text: Raw reply text

    Returns:
        ParsedAnalysis when the reply is a JSON object matching the schema,
        MalformedAnalysis otherwise
    """
    body = strip_code_fence(text)
    try:
        data = json.loads(body)
    except json.JSONDecodeError as e:
        return MalformedAnalysis(reason=f"invalid JSON: {e}", raw=text)

    if not isinstance(data, dict):
        return MalformedAnalysis(reason=f"expected object, got {type(data).__name__}", raw=text)

    try:
        payload = AnalysisPayload.model_validate(data)
    except ValidationError as e:
        return MalformedAnalysis(reason=f"schema mismatch: {e.error_count()} errors", raw=text)

    return ParsedAnalysis(payload=payload)


def parse_connections(text: str) -> List[ConnectionPayload]:
    """
    Parse a connection finding reply.

    Entries that don't match the schema are skipped individually.

    Raises:
        ValueError: If the reply is not a JSON array
    """
    data = json.loads(strip_code_fence(text))
    if not isinstance(data, list):
        raise ValueError(f"expected array, got {type(data).__name__}")

    connections = []
    for entry in data:
        try:
            connections.append(ConnectionPayload.model_validate(entry))
        except ValidationError:
            logger.debug(f"Skipping malformed connection entry: {entry!r}")
    return connections
