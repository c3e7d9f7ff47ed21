# src/medical_structuring/normalizers/json_locator.py
"""
Locate and decode JSON embedded in LLM text responses.

LLMs often wrap JSON in prose or fenced code blocks:
"Here are the departments: [{"department": "Kardiyoloji", ...}]"

Candidate payloads are tried in a fixed order; each is parsed with json and,
failing that, with json_repair (single quotes, trailing commas, etc).
"""

import json
import logging
import re
from typing import Any, Dict, Iterator, List, Optional

from json_repair import repair_json

logger = logging.getLogger(__name__)

_ARRAY_CODE_BLOCK = re.compile(r'```(?:json)?\s*(\[.*?\])\s*```', re.DOTALL | re.IGNORECASE)
_OBJECT_CODE_BLOCK = re.compile(r'```(?:json)?\s*(\{.*?\})\s*```', re.DOTALL | re.IGNORECASE)


def _loads(payload: str) -> Any:
    """json.loads, then json_repair; None when neither yields a value."""
    try:
        return json.loads(payload)
    except json.JSONDecodeError:
        pass

    try:
        return repair_json(payload, return_objects=True)
    except Exception as e:
        logger.debug(f"json_repair failed: {e}")
        return None


def _outer_slice(text: str, open_char: str, close_char: str) -> Optional[str]:
    start = text.find(open_char)
    end = text.rfind(close_char)
    if start == -1 or end <= start:
        return None
    return text[start:end + 1]


def array_candidates(text: str) -> Iterator[str]:
    """
    Candidate array payloads, in order:
    1. First '[' through last ']'
    2. Fenced ```json [...]``` block
    3. A single line that is itself an array
    """
    outer = _outer_slice(text, '[', ']')
    if outer:
        yield outer

    match = _ARRAY_CODE_BLOCK.search(text)
    if match:
        yield match.group(1)

    for line in text.splitlines():
        stripped = line.strip()
        if stripped.startswith('[') and stripped.endswith(']') and stripped != outer:
            yield stripped


def extract_json_array(text: str) -> Optional[List[Any]]:
    """
    Decode the first array candidate holding at least one object; otherwise
    the first candidate that parses to any list.
    """
    if not text or not text.strip():
        return None

    first_list = None
    for payload in array_candidates(text):
        decoded = _loads(payload)
        if not isinstance(decoded, list):
            continue
        if any(isinstance(item, dict) for item in decoded):
            return decoded
        if first_list is None:
            first_list = decoded

    if first_list is not None:
        return first_list

    logger.debug("No JSON array found in response")
    return None


def extract_json_object(text: str) -> Optional[Dict[str, Any]]:
    """Decode the first JSON object ('{'..'}' slice, then fenced block)."""
    if not text or not text.strip():
        return None

    candidates = []
    outer = _outer_slice(text, '{', '}')
    if outer:
        candidates.append(outer)
    match = _OBJECT_CODE_BLOCK.search(text)
    if match:
        candidates.append(match.group(1))

    for payload in candidates:
        decoded = _loads(payload)
        if isinstance(decoded, dict):
            return decoded

    logger.debug("No JSON object found in response")
    return None
