"""
Turning free-form AI responses into typed, bounded records.
"""

from .confidence import clamp_confidence, parse_confidence
from .field_profiles import (
    RecordShape,
    FieldKeys,
    FieldNameProfile,
    DEFAULT_PROFILES,
    DEPARTMENT_PROFILE,
    DISEASE_PROFILE,
    LAB_ABNORMALITY_PROFILE,
    GENERIC_PROFILE,
)
from .records import NormalizedRecord, DecodeStrategy
from .json_locator import extract_json_array, extract_json_object
from .response_normalizer import ResponseNormalizer, normalize
from .sections import AnalysisSection, parse_analysis_sections, strip_emphasis, extract_list_items, extract_keyword_lines

__all__ = [
    'clamp_confidence',
    'parse_confidence',
    'RecordShape',
    'FieldKeys',
    'FieldNameProfile',
    'DEFAULT_PROFILES',
    'DEPARTMENT_PROFILE',
    'DISEASE_PROFILE',
    'LAB_ABNORMALITY_PROFILE',
    'GENERIC_PROFILE',
    'NormalizedRecord',
    'DecodeStrategy',
    'extract_json_array',
    'extract_json_object',
    'ResponseNormalizer',
    'normalize',
    'AnalysisSection',
    'parse_analysis_sections',
    'strip_emphasis',
    'extract_list_items',
    'extract_keyword_lines',
]
