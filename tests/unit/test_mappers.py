# ============================================================================
# FILE: tests/unit/test_mappers.py
# ============================================================================
"""
Unit tests for feature model mappers
"""

import pytest

from src.medical_structuring.mappers import (
    by_confidence,
    format_department_label,
    lab_values_from_rows,
    parse_department_label,
    parse_department_suggestions,
    parse_disease_predictions,
    remedies_from_response,
    solutions_from_response,
    to_department_model,
    to_disease_model,
    to_home_solution_model,
    to_lab_model,
    to_natural_solutions_model,
)
from src.medical_structuring.mappers.lab import first_number
from src.medical_structuring.normalizers import NormalizedRecord


# ============================================================================
# DEPARTMENTS
# ============================================================================

def test_department_label_round_trip():
    record = NormalizedRecord("Kardiyoloji", 85.7)

    label = format_department_label(record)

    assert label == "Kardiyoloji (85%)"
    assert parse_department_label(label) == ("Kardiyoloji", "85%")


def test_department_label_without_percentage():
    assert parse_department_label("Dahiliye") == ("Dahiliye", "Önerilen")


def test_department_model_sorted_by_confidence():
    records = parse_department_suggestions(
        '[{"department": "Dahiliye", "confidence": 40},'
        ' {"department": "Kardiyoloji", "confidence": 85}]'
    )

    model = to_department_model("user-1", ["göğüs ağrısı"], records)

    assert model.suggested_departments == ["Kardiyoloji (85%)", "Dahiliye (40%)"]
    assert model.to_dict()["symptoms"] == ["göğüs ağrısı"]


def test_ordering_is_stable_for_ties():
    records = [NormalizedRecord("A", 50), NormalizedRecord("B", 70), NormalizedRecord("C", 50)]

    assert [r.name for r in by_confidence(records)] == ["B", "A", "C"]


# ============================================================================
# DISEASES
# ============================================================================

def test_disease_model():
    records = parse_disease_predictions(
        "Migren - 72% - Tekrarlayan baş ağrısı\nGerilim tipi baş ağrısı - 20%"
    )

    model = to_disease_model("user-1", ["baş ağrısı"], records)

    assert [(d.name, d.probability) for d in model.possible_diseases] == [
        ("Migren", 72.0),
        ("Gerilim tipi baş ağrısı", 20.0),
    ]
    assert model.possible_diseases[0].description == "Tekrarlayan baş ağrısı"


# ============================================================================
# LAB RESULTS
# ============================================================================

@pytest.mark.parametrize("cell, expected", [
    ("210 mg/dL", 210.0),
    ("13,5 g/dL", 13.5),
    ("<0.5", 0.5),
    ("negatif", None),
])
def test_first_number(cell, expected):
    assert first_number(cell) == expected


def test_lab_values_use_first_numeric_cell():
    rows = [
        ["Kolesterol", "210 mg/dL", "<200"],
        ["Hemoglobin", "g/dL", "13,5"],
        ["İdrar rengi", "sarı", "berrak"],
    ]

    assert lab_values_from_rows(rows) == {"Kolesterol": 210.0, "Hemoglobin": 13.5}


def test_lab_model_collects_keyword_lines():
    analysis = (
        "1) Anormal değerler\n"
        "Kolesterol yüksek\n"
        "2) Tedavi\n"
        "Statin ilaç tedavisi doktorla konuşulabilir\n"
        "3) Doğal çözümler\n"
        "Yulaf gibi doğal lif kaynakları\n"
    )
    records = [NormalizedRecord("Kolesterol", 85, description="Yüksek")]

    model = to_lab_model("user-1", [["Kolesterol", "210"]], analysis, records)

    assert model.lab_results == {"Kolesterol": 210.0}
    assert model.suggested_medications == ["Statin ilaç tedavisi doktorla konuşulabilir"]
    assert model.suggested_natural_solutions == ["3) Doğal çözümler", "Yulaf gibi doğal lif kaynakları"]
    assert model.abnormalities[0].test_name == "Kolesterol"
    assert model.abnormalities[0].description == "Yüksek"


# ============================================================================
# SOLUTIONS
# ============================================================================

def test_home_solutions_from_object():
    response = (
        '{"solutions": [{"title": "Dinlenme", "description": "Bol uyuyun"},'
        ' {"title": "Sıvı", "description": "Günde 2 litre su için"}]}'
    )

    model = to_home_solution_model("user-1", " boğaz ağrısı ", response)

    assert model.symptom == "boğaz ağrısı"
    assert [s.title for s in model.solutions] == ["Dinlenme", "Sıvı"]


def test_home_solution_prose_fallback():
    solutions = solutions_from_response("**Ilık tuzlu su** ile gargara yapın.")

    assert len(solutions) == 1
    assert solutions[0].title == "Home Solution"
    assert solutions[0].description == "Ilık tuzlu su ile gargara yapın."


def test_home_solution_empty_response():
    assert solutions_from_response("   ") == []


def test_natural_remedies_from_bullets():
    model = to_natural_solutions_model("user-1", "Uykusuzluk", "- Papatya çayı\n- Lavanta yağı")

    assert model.remedies == ["Papatya çayı", "Lavanta yağı"]


def test_natural_remedies_from_json_remedy_field():
    response = '[{"name": "Bitki çayı", "remedy": "Yatmadan önce papatya çayı"}]'

    assert remedies_from_response(response) == ["Yatmadan önce papatya çayı"]


def test_natural_remedies_prose_fallback():
    assert remedies_from_response("Düzenli uyku saatleri belirleyin.") == [
        "Düzenli uyku saatleri belirleyin."
    ]
