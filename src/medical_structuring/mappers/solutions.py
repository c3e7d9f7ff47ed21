# src/medical_structuring/mappers/solutions.py
"""
Home solution and natural solution mapping.
"""

from typing import List, Optional

from ..normalizers import (
    RecordShape,
    ResponseNormalizer,
    extract_json_object,
    extract_list_items,
    strip_emphasis,
)
from ..normalizers.field_profiles import lookup
from .models import HomeSolutionModel, NaturalSolutionsModel, Solution

DEFAULT_SOLUTION_TITLE = "Home Solution"

_SOLUTION_LIST_KEYS = ("solutions", "çözümler", "cozumler", "öneriler", "oneriler")
_TITLE_KEYS = ("title", "name", "başlık", "baslik")
_DESCRIPTION_KEYS = ("description", "details", "açıklama", "aciklama")


def solutions_from_response(response: str) -> List[Solution]:
    """
    Solutions from a {"solutions": [{"title", "description"}]} object, or the
    whole response as a single solution.
    """
    payload = extract_json_object(response)
    if payload:
        items = lookup(payload, _SOLUTION_LIST_KEYS)
        solutions = []
        for item in items if isinstance(items, list) else []:
            if not isinstance(item, dict):
                continue
            title = lookup(item, _TITLE_KEYS)
            description = lookup(item, _DESCRIPTION_KEYS)
            if title and description:
                solutions.append(Solution(title=str(title).strip(), description=str(description).strip()))
        if solutions:
            return solutions

    text = strip_emphasis(response)
    return [Solution(title=DEFAULT_SOLUTION_TITLE, description=text)] if text else []


def to_home_solution_model(user_id: str, symptom: str, response: str) -> HomeSolutionModel:
    return HomeSolutionModel(
        user_id=user_id,
        symptom=symptom.strip(),
        solutions=solutions_from_response(response),
    )


def remedies_from_response(response: str, normalizer: Optional[ResponseNormalizer] = None) -> List[str]:
    """Remedy names via the generic normalizer; list items / whole text otherwise."""
    normalizer = normalizer or ResponseNormalizer()
    records = normalizer.normalize(response, RecordShape.GENERIC)
    if records:
        return [r.remedy or r.name for r in records]
    return extract_list_items(strip_emphasis(response))


def to_natural_solutions_model(
    user_id: str,
    question: str,
    response: str,
    normalizer: Optional[ResponseNormalizer] = None
) -> NaturalSolutionsModel:
    return NaturalSolutionsModel(
        user_id=user_id,
        question=question,
        remedies=remedies_from_response(response, normalizer),
    )
