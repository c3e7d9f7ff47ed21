# src/medical_structuring/mappers/department.py
"""
Department suggestion mapping.
"""

import re
from typing import List, Optional, Sequence, Tuple

from ..normalizers import NormalizedRecord, RecordShape, ResponseNormalizer
from .models import DepartmentSuggestionModel
from .ordering import by_confidence

_LABEL = re.compile(r'^(.+?)\s*\((\d+)%\)$')

# Shown by history views when a stored label carries no percentage
SUGGESTED_PLACEHOLDER = "Önerilen"


def format_department_label(record: NormalizedRecord) -> str:
    return f"{record.name} ({int(record.confidence)}%)"


def parse_department_label(label: str) -> Tuple[str, str]:
    """Inverse of format_department_label: ("Kardiyoloji (85%)") -> ("Kardiyoloji", "85%")."""
    match = _LABEL.match(label.strip())
    if match:
        return match.group(1).strip(), f"{match.group(2)}%"
    return label, SUGGESTED_PLACEHOLDER


def to_department_model(
    user_id: str,
    symptoms: Sequence[str],
    records: Sequence[NormalizedRecord]
) -> DepartmentSuggestionModel:
    return DepartmentSuggestionModel(
        user_id=user_id,
        symptoms=list(symptoms),
        suggested_departments=[format_department_label(r) for r in by_confidence(records)],
    )


def parse_department_suggestions(
    response: str,
    normalizer: Optional[ResponseNormalizer] = None
) -> List[NormalizedRecord]:
    normalizer = normalizer or ResponseNormalizer()
    return normalizer.normalize(response, RecordShape.DEPARTMENT)
