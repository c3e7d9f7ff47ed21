# ============================================================================
# src/medical_structuring/config/thresholds_config.py
# ============================================================================
"""
Table Geometry Thresholds
- Row grouping (vertical proximity)
- Cell splitting (horizontal gap)
- Row filtering
- Vertical axis convention of recognized tokens

Defaults were tuned against typical lab report layouts; override per
recognizer/resolution with environment variables.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class ThresholdSettings(BaseSettings):
    ROW_THRESHOLD: float = Field(
        default=0.015,
        ge=0.0, le=1.0,
        description="Max vertical distance (page-height units) from a row's first token to join that row"
    )
    GAP_THRESHOLD: float = Field(
        default=0.02,
        ge=0.0, le=1.0,
        description="Horizontal gap (page-width units) above which a new cell starts"
    )
    MIN_CELLS_PER_ROW: int = Field(
        default=2,
        ge=1,
        description="Rows with fewer non-empty cells are dropped (headers, footers, stray lines)"
    )
    TABLE_Y_ORIGIN: Literal["bottom-left", "top-left"] = Field(
        default="bottom-left",
        description="Vertical origin of RecognizedToken.y_center"
    )
    PAGE_WORKERS: int = Field(
        default=4,
        ge=1,
        description="Thread pool size for per-page reconstruction"
    )


threshold_settings = ThresholdSettings()
