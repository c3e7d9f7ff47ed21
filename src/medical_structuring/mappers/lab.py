# src/medical_structuring/mappers/lab.py
"""
Lab result mapping.

- Table rows -> {test name: value} (first cell = name, first numeric cell = value)
- Abnormality records -> LabAbnormality
- Analysis text -> suggested medications / natural solutions (keyword lines)
"""

import re
from typing import Dict, List, Optional, Sequence

from ..extractors.table_reconstructor import ExtractedTable
from ..normalizers import NormalizedRecord, extract_keyword_lines
from .models import LabAbnormality, LabResultRecommendationModel
from .ordering import by_confidence

_NUMBER = re.compile(r'[-+]?[0-9]*[.,]?[0-9]+')

MEDICATION_KEYWORDS = ("ilaç", "ilac", "medication", "medicine")
NATURAL_KEYWORDS = ("doğal", "dogal", "natural")


def first_number(cell: str) -> Optional[float]:
    """First number in a cell; comma decimals accepted ("5,4" -> 5.4)."""
    match = _NUMBER.search(cell)
    if not match:
        return None
    try:
        return float(match.group(0).replace(',', '.'))
    except ValueError:
        return None


def lab_values_from_rows(rows: ExtractedTable) -> Dict[str, float]:
    """Map each row's first cell to the first numeric value in its other cells."""
    values: Dict[str, float] = {}
    for row in rows:
        if not row:
            continue
        name = row[0].strip()
        if not name:
            continue
        for cell in row[1:]:
            value = first_number(cell)
            if value is not None:
                values[name] = value
                break
    return values


def to_lab_abnormalities(records: Sequence[NormalizedRecord]) -> List[LabAbnormality]:
    return [
        LabAbnormality(
            test_name=r.name,
            confidence=r.confidence,
            description=r.description,
            reference_range=r.reference_range,
            recommendation=r.remedy,
        )
        for r in by_confidence(records)
    ]


def to_lab_model(
    user_id: str,
    rows: ExtractedTable,
    analysis_text: str,
    records: Sequence[NormalizedRecord] = ()
) -> LabResultRecommendationModel:
    return LabResultRecommendationModel(
        user_id=user_id,
        lab_results=lab_values_from_rows(rows),
        suggested_medications=extract_keyword_lines(analysis_text, MEDICATION_KEYWORDS),
        suggested_natural_solutions=extract_keyword_lines(analysis_text, NATURAL_KEYWORDS),
        abnormalities=to_lab_abnormalities(records),
    )
