# src/medical_structuring/mappers/ordering.py
from typing import List, Sequence

from ..normalizers import NormalizedRecord


def by_confidence(records: Sequence[NormalizedRecord]) -> List[NormalizedRecord]:
    """Highest confidence first; ties keep response order."""
    return sorted(records, key=lambda r: r.confidence, reverse=True)
