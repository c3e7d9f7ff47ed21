# src/medical_structuring/mappers/models.py
"""
Persisted feature models.

Probabilities/confidences are stored on the 0-100 scale the UI renders as a
percentage, not as 0-1.
"""

from dataclasses import dataclass, field, asdict
from datetime import datetime, timezone
from typing import Dict, List, Optional


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class DepartmentSuggestionModel:
    user_id: str
    symptoms: List[str]
    suggested_departments: List[str]  # "Name (NN%)"
    created_at: datetime = field(default_factory=_now)
    id: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class PredictedDisease:
    name: str
    probability: float  # 0-100
    description: Optional[str] = None


@dataclass
class DiseasePredictionModel:
    user_id: str
    symptoms: List[str]
    possible_diseases: List[PredictedDisease]
    created_at: datetime = field(default_factory=_now)
    id: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class LabAbnormality:
    test_name: str
    confidence: float  # 0-100
    description: Optional[str] = None
    reference_range: Optional[str] = None
    recommendation: Optional[str] = None


@dataclass
class LabResultRecommendationModel:
    user_id: str
    lab_results: Dict[str, float]  # test name -> value
    suggested_medications: List[str]
    suggested_natural_solutions: List[str]
    abnormalities: List[LabAbnormality] = field(default_factory=list)
    created_at: datetime = field(default_factory=_now)
    id: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class Solution:
    title: str
    description: str


@dataclass
class HomeSolutionModel:
    user_id: str
    symptom: str
    solutions: List[Solution]
    created_at: datetime = field(default_factory=_now)
    id: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class NaturalSolutionsModel:
    user_id: str
    question: str
    remedies: List[str]
    created_at: datetime = field(default_factory=_now)
    id: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)
