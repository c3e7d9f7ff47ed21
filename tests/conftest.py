# ============================================================================
# FILE: tests/conftest.py
# ============================================================================
"""
Pytest configuration and shared fixtures for testing.
"""

import pytest

from src.medical_structuring.extractors.tokens import RecognizedToken
from src.medical_structuring.normalizers import ResponseNormalizer


def make_token(text, x_start, x_end, y_center):
    return RecognizedToken(text=text, x_start=x_start, x_end=x_end, y_center=y_center)


@pytest.fixture
def token():
    """Token factory: token("Kolesterol", 0.0, 0.2, 0.9)"""
    return make_token


@pytest.fixture
def lab_page_tokens():
    """One page of a Turkish lab report (bottom-up y, shuffled order)"""
    return [
        make_token("210", 0.50, 0.56, 0.800),
        make_token("Hemoglobin", 0.05, 0.22, 0.750),
        make_token("Kolesterol", 0.05, 0.20, 0.801),
        make_token("13,5", 0.50, 0.55, 0.752),
        make_token("mg/dL", 0.57, 0.65, 0.799),
        make_token("g/dL", 0.56, 0.62, 0.749),
        make_token("<200", 0.75, 0.82, 0.800),
        make_token("12-16", 0.75, 0.83, 0.751),
        # Running header: single cell, dropped
        make_token("LABORATUVAR", 0.30, 0.50, 0.950),
        make_token("SONUÇLARI", 0.505, 0.70, 0.951),
    ]


@pytest.fixture
def normalizer():
    return ResponseNormalizer()


@pytest.fixture
def lab_response():
    """Lab analysis as returned by the chat model"""
    return (
        '[{"test": "Kolesterol", "confidence": 85, "description": "Yüksek", '
        '"reference_range": "<200 mg/dL", "recommendation": "Doktorunuza danışın"}]\n'
        "1) Anormal değerler\n"
        "- **Kolesterol** yüksek\n"
        "2) Önerilen ilaçlar\n"
        "- Statin ilaç tedavisi doktorla konuşulabilir\n"
        "3) Doğal çözümler\n"
        "- Doğal lif tüketimi\n"
    )
