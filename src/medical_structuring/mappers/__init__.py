"""
Domain mappers: normalized records -> persisted feature models.
"""

from .models import (
    DepartmentSuggestionModel,
    DiseasePredictionModel,
    PredictedDisease,
    LabAbnormality,
    LabResultRecommendationModel,
    HomeSolutionModel,
    Solution,
    NaturalSolutionsModel,
)
from .ordering import by_confidence
from .department import (
    format_department_label,
    parse_department_label,
    parse_department_suggestions,
    to_department_model,
)
from .disease import parse_disease_predictions, to_disease_model
from .lab import lab_values_from_rows, to_lab_abnormalities, to_lab_model
from .solutions import (
    solutions_from_response,
    to_home_solution_model,
    remedies_from_response,
    to_natural_solutions_model,
)
