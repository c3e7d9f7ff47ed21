"""
Core geometry helpers shared by recognizers and the table reconstructor.
"""

from .bbox_utils import BBox, validate_bbox, normalize_bbox, token_geometry, is_normalized

__all__ = ['BBox', 'validate_bbox', 'normalize_bbox', 'token_geometry', 'is_normalized']
