# ============================================================================
# src/medical_structuring/core/bbox_utils.py
# ============================================================================
"""
Bounding box utilities for recognizer coordinate handling.

This module provides:
- Bbox validation
- Pixel -> normalized conversion
- Reduction of a box to token geometry (x_start, x_end, y_center)

Coordinate System:
- All bboxes are (x0, y0, x1, y1) tuples
- Normalized bboxes are 0-1 with (0,0) at the top-left
- Token geometry follows ThresholdSettings.TABLE_Y_ORIGIN
"""

import math
import logging
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

# Type alias for bounding box
BBox = Tuple[float, float, float, float]

ORIGINS = ("top-left", "bottom-left")


def validate_bbox(bbox: Optional[BBox]) -> bool:
    """
    Validate that a bbox is properly formed.

    Args:
        bbox: (x0, y0, x1, y1) tuple

    Returns:
        True if bbox is valid, False otherwise
    """
    if bbox is None:
        return False

    if not isinstance(bbox, (tuple, list)) or len(bbox) != 4:
        return False

    if not all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in bbox):
        return False
    if not all(math.isfinite(v) for v in bbox):
        return False

    x0, y0, x1, y1 = bbox
    return x0 <= x1 and y0 <= y1


def is_normalized(value: float) -> bool:
    """True for a finite coordinate inside [0, 1]."""
    return isinstance(value, (int, float)) and math.isfinite(value) and 0.0 <= value <= 1.0


def normalize_bbox(
    bbox: BBox,
    page_width: float,
    page_height: float,
    origin: str = "top-left"
) -> Optional[BBox]:
    """
    Normalize bbox to 0-1 range with a top-left origin.

    Args:
        bbox: (x0, y0, x1, y1) in absolute coordinates
        page_width: Page width in same units as bbox
        page_height: Page height in same units as bbox
        origin: Coordinate origin of the input - "top-left" or "bottom-left"

    Returns:
        Normalized bbox or None if invalid
    """
    if not bbox or page_width <= 0 or page_height <= 0:
        return None

    try:
        x0, y0, x1, y1 = bbox

        nx0 = x0 / page_width
        ny0 = y0 / page_height
        nx1 = x1 / page_width
        ny1 = y1 / page_height

        if origin == "bottom-left":
            ny0, ny1 = 1.0 - ny1, 1.0 - ny0

        if nx0 > nx1:
            nx0, nx1 = nx1, nx0
        if ny0 > ny1:
            ny0, ny1 = ny1, ny0

        result = (
            max(0.0, min(1.0, nx0)),
            max(0.0, min(1.0, ny0)),
            max(0.0, min(1.0, nx1)),
            max(0.0, min(1.0, ny1))
        )

        return result if validate_bbox(result) else None

    except (TypeError, ValueError, ZeroDivisionError) as e:
        logger.debug(f"Bbox normalization failed: {e}")
        return None


def token_geometry(bbox: BBox, y_origin: str = "bottom-left") -> Tuple[float, float, float]:
    """
    Reduce a normalized top-left bbox to (x_start, x_end, y_center).

    y_center is expressed in the requested vertical convention.
    """
    if y_origin not in ORIGINS:
        raise ValueError(f"Unknown y origin: {y_origin}")

    x0, y0, x1, y1 = bbox
    y_center = (y0 + y1) / 2.0
    if y_origin == "bottom-left":
        y_center = 1.0 - y_center
    return x0, x1, y_center
