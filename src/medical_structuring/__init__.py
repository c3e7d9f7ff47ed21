# ============================================================================
# src/medical_structuring/__init__.py
# ============================================================================
"""
Medical structuring pipeline.

Recovers lab-report tables from positional OCR tokens and normalizes
free-form AI responses into bounded, typed records.
"""

from .extractors import RecognizedToken, TableReconstructor, to_tabular_text
from .normalizers import NormalizedRecord, RecordShape, ResponseNormalizer, normalize

__version__ = "0.1.0"

__all__ = [
    'RecognizedToken',
    'TableReconstructor',
    'to_tabular_text',
    'NormalizedRecord',
    'RecordShape',
    'ResponseNormalizer',
    'normalize',
]
