# src/medical_structuring/normalizers/field_profiles.py
"""
Field-name profiles: which keys each feature expects in an AI response.

A profile bundles three key sets tried in order by the schema strategies
(canonical, alternate, localized) plus the confidence-label phrases the
line-pattern strategy must recognize. Localized keys list Turkish diacritic
and non-diacritic spellings explicitly.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, Optional, Tuple
import re


class RecordShape(Enum):
    """Record shapes produced by the normalizer."""
    DEPARTMENT = "department"
    DISEASE = "disease"
    LAB_ABNORMALITY = "lab_abnormality"
    GENERIC = "generic"


# Roles a key set can fill on a NormalizedRecord
ROLES = ("name", "confidence", "description", "reference_range", "remedy")

_KEY_SEPARATORS = re.compile(r'[\s_\-]+')


def fold_key(key: str) -> str:
    """Case- and separator-insensitive form of a JSON key or label phrase."""
    return _KEY_SEPARATORS.sub(' ', str(key).strip().casefold())


@dataclass(frozen=True)
class FieldKeys:
    """Keys accepted for each record role, plus the roles an item must carry."""
    name: Tuple[str, ...]
    confidence: Tuple[str, ...] = ()
    description: Tuple[str, ...] = ()
    reference_range: Tuple[str, ...] = ()
    remedy: Tuple[str, ...] = ()
    required: Tuple[str, ...] = ("name",)

    def keys_for(self, role: str) -> Tuple[str, ...]:
        return getattr(self, role)


@dataclass(frozen=True)
class FieldNameProfile:
    """Canonical + alternate + localized key sets for one record shape."""
    shape: RecordShape
    canonical: FieldKeys
    alternate: FieldKeys
    localized: FieldKeys
    confidence_labels: Tuple[str, ...] = field(default=())


# ----------------------------------------------------------------------------
# Shared vocabulary
# ----------------------------------------------------------------------------

CONFIDENCE_LABELS: Tuple[str, ...] = (
    "confidence level", "confidence", "probability", "likelihood",
    "güven yüzdesi", "guven yuzdesi", "güven oranı", "guven orani", "güven", "guven",
    "olasılık", "olasilik", "ihtimal", "yüzde", "yuzde",
)

LOCALIZED_CONFIDENCE_KEYS: Tuple[str, ...] = (
    "güven yüzdesi", "guven yuzdesi", "güven oranı", "guven orani", "güven", "guven",
    "olasılık", "olasilik", "olasılık yüzdesi", "olasilik yuzdesi",
    "ihtimal", "yüzde", "yuzde", "oran",
)

LOCALIZED_DESCRIPTION_KEYS: Tuple[str, ...] = (
    "açıklama", "aciklama", "tanım", "tanim", "detay", "bilgi",
)

LOCALIZED_REFERENCE_KEYS: Tuple[str, ...] = (
    "referans aralığı", "referans araligi", "normal aralık", "normal aralik", "referans",
)

LOCALIZED_REMEDY_KEYS: Tuple[str, ...] = (
    "öneri", "oneri", "tavsiye", "çözüm", "cozum",
)


DEPARTMENT_PROFILE = FieldNameProfile(
    shape=RecordShape.DEPARTMENT,
    canonical=FieldKeys(
        name=("department",),
        confidence=("confidence",),
        required=("name", "confidence"),
    ),
    alternate=FieldKeys(
        name=("name", "department_name", "specialty"),
        confidence=("confidence", "probability", "score"),
        required=("name", "confidence"),
    ),
    localized=FieldKeys(
        name=("bölüm", "bolum", "bölüm adı", "bolum adi", "departman", "poliklinik",
              "uzmanlık", "uzmanlik", "birim"),
        confidence=LOCALIZED_CONFIDENCE_KEYS,
    ),
    confidence_labels=CONFIDENCE_LABELS,
)

DISEASE_PROFILE = FieldNameProfile(
    shape=RecordShape.DISEASE,
    canonical=FieldKeys(
        name=("disease",),
        confidence=("confidence",),
        description=("description",),
        required=("name", "confidence", "description"),
    ),
    alternate=FieldKeys(
        name=("name", "disease", "disease_name", "condition"),
        confidence=("confidence", "probability", "score"),
        description=("description", "details", "summary"),
        required=("name", "confidence"),
    ),
    localized=FieldKeys(
        name=("hastalık", "hastalik", "hastalık adı", "hastalik adi", "tanı", "tani"),
        confidence=LOCALIZED_CONFIDENCE_KEYS,
        description=LOCALIZED_DESCRIPTION_KEYS,
    ),
    confidence_labels=CONFIDENCE_LABELS,
)

LAB_ABNORMALITY_PROFILE = FieldNameProfile(
    shape=RecordShape.LAB_ABNORMALITY,
    canonical=FieldKeys(
        name=("test",),
        confidence=("confidence",),
        description=("description",),
        reference_range=("reference_range",),
        remedy=("recommendation",),
        required=("name", "confidence"),
    ),
    alternate=FieldKeys(
        name=("name", "test_name", "parameter"),
        confidence=("confidence", "severity", "score"),
        description=("description", "comment", "interpretation"),
        reference_range=("reference", "range", "normal_range"),
        remedy=("recommendation", "suggestion", "advice"),
        required=("name",),
    ),
    localized=FieldKeys(
        name=("test adı", "test adi", "tahlil", "parametre", "test"),
        confidence=LOCALIZED_CONFIDENCE_KEYS,
        description=LOCALIZED_DESCRIPTION_KEYS,
        reference_range=LOCALIZED_REFERENCE_KEYS,
        remedy=LOCALIZED_REMEDY_KEYS,
    ),
    confidence_labels=CONFIDENCE_LABELS,
)

GENERIC_PROFILE = FieldNameProfile(
    shape=RecordShape.GENERIC,
    canonical=FieldKeys(
        name=("name",),
        confidence=("confidence",),
        description=("description",),
        remedy=("remedy",),
    ),
    alternate=FieldKeys(
        name=("title", "label"),
        confidence=("probability", "score"),
        description=("details", "summary"),
        remedy=("solution", "advice"),
    ),
    localized=FieldKeys(
        name=("ad", "isim", "başlık", "baslik"),
        confidence=LOCALIZED_CONFIDENCE_KEYS,
        description=LOCALIZED_DESCRIPTION_KEYS,
        remedy=LOCALIZED_REMEDY_KEYS,
    ),
    confidence_labels=CONFIDENCE_LABELS,
)


DEFAULT_PROFILES: Dict[RecordShape, FieldNameProfile] = {
    profile.shape: profile
    for profile in (DEPARTMENT_PROFILE, DISEASE_PROFILE, LAB_ABNORMALITY_PROFILE, GENERIC_PROFILE)
}


def lookup(item: Dict[str, object], keys: Iterable[str]) -> Optional[object]:
    """Return the value of the first matching key (folded comparison)."""
    folded = {fold_key(k): v for k, v in item.items()}
    for key in keys:
        value = folded.get(fold_key(key))
        if value is not None:
            return value
    return None
