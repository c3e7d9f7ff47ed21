# src/medical_structuring/normalizers/records.py
"""
Normalized record produced from one AI response.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from .confidence import clamp_confidence


class DecodeStrategy(Enum):
    """Normalization strategies, in the order they are attempted."""
    PRIMARY_SCHEMA = "primary_schema"
    ALTERNATE_SCHEMA = "alternate_schema"
    LOCALIZED_SCHEMA = "localized_schema"
    LINE_PATTERN = "line_pattern"
    BULLET_FALLBACK = "bullet_fallback"


def _clean_text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, (dict, list)):
        return None
    text = str(value).strip()
    return text or None


@dataclass(frozen=True)
class NormalizedRecord:
    """
    Name/label + confidence (always clamped to [0, 100]) + optional fields.

    Construction rejects an empty name and clamps confidence, so every
    instance satisfies the record invariants.
    """
    name: str
    confidence: float = 0.0
    description: Optional[str] = None
    reference_range: Optional[str] = None
    remedy: Optional[str] = None
    strategy: DecodeStrategy = DecodeStrategy.PRIMARY_SCHEMA

    def __post_init__(self):
        name = _clean_text(self.name)
        if name is None:
            raise ValueError("NormalizedRecord requires a non-empty name")
        object.__setattr__(self, 'name', name)
        object.__setattr__(self, 'confidence', clamp_confidence(self.confidence))
        for attr in ('description', 'reference_range', 'remedy'):
            object.__setattr__(self, attr, _clean_text(getattr(self, attr)))

    @classmethod
    def create(cls, name: Any, confidence: Optional[float] = None, **kwargs) -> Optional["NormalizedRecord"]:
        """Build a record, or None when the name is empty."""
        if _clean_text(name) is None:
            return None
        return cls(name=name, confidence=0.0 if confidence is None else confidence, **kwargs)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "confidence": self.confidence,
            "description": self.description,
            "reference_range": self.reference_range,
            "remedy": self.remedy,
            "strategy": self.strategy.value,
        }
