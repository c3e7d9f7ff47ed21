# src/medical_structuring/mappers/disease.py
"""
Disease prediction mapping.
"""

from typing import List, Optional, Sequence

from ..normalizers import NormalizedRecord, RecordShape, ResponseNormalizer
from .models import DiseasePredictionModel, PredictedDisease
from .ordering import by_confidence


def to_disease_model(
    user_id: str,
    symptoms: Sequence[str],
    records: Sequence[NormalizedRecord]
) -> DiseasePredictionModel:
    return DiseasePredictionModel(
        user_id=user_id,
        symptoms=list(symptoms),
        possible_diseases=[
            PredictedDisease(name=r.name, probability=r.confidence, description=r.description)
            for r in by_confidence(records)
        ],
    )


def parse_disease_predictions(
    response: str,
    normalizer: Optional[ResponseNormalizer] = None
) -> List[NormalizedRecord]:
    normalizer = normalizer or ResponseNormalizer()
    return normalizer.normalize(response, RecordShape.DISEASE)
