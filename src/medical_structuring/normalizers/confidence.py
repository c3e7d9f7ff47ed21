# src/medical_structuring/normalizers/confidence.py
"""
Confidence parsing and clamping.

Every confidence that leaves the normalizer is a float in [0, 100], whether it
arrived as a JSON number, a string like "72%" / "%72" / "72,5 %", or not at all.
"""

import math
import re
from typing import Any, Optional

CONFIDENCE_MIN = 0.0
CONFIDENCE_MAX = 100.0

_LEADING_NUMBER = re.compile(r'^[-+]?\d+(?:[.,]\d+)?')


def clamp_confidence(value: float) -> float:
    """Clamp into [0, 100]; non-finite values collapse to 0."""
    try:
        value = float(value)
    except (TypeError, ValueError):
        return CONFIDENCE_MIN
    if not math.isfinite(value):
        return CONFIDENCE_MIN
    return max(CONFIDENCE_MIN, min(CONFIDENCE_MAX, value))


def parse_confidence(raw: Any) -> Optional[float]:
    """
    Parse a confidence value without clamping.

    Handles:
    - 72 / 72.5           (JSON numbers)
    - "72%" / "72 %"      (trailing percent, suffix characters stripped)
    - "%72"               (Turkish leading percent)
    - "72,5"              (comma decimal separator)

    Returns None when no number can be read.
    """
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, (int, float)):
        return float(raw)

    if not isinstance(raw, str):
        return None

    text = raw.strip()
    if text.startswith('%'):
        text = text[1:].strip()

    match = _LEADING_NUMBER.match(text)
    if not match:
        return None

    try:
        return float(match.group(0).replace(',', '.'))
    except ValueError:
        return None
