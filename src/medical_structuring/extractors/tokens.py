# src/medical_structuring/extractors/tokens.py
"""
Recognized text tokens and the recognizer boundary.

A RecognizedToken is one text hit on a page with normalized geometry:
x_start/x_end are fractions of page width, y_center a fraction of page height.

Vertical convention: y_center is bottom-up by default (origin at the
bottom-left, larger value = higher on the page). The convention is set once
by ThresholdSettings.TABLE_Y_ORIGIN; recognizers convert into it and the
table reconstructor reads it.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List

from PIL import Image

from ..core.bbox_utils import BBox, is_normalized, token_geometry


@dataclass(frozen=True)
class RecognizedToken:
    """One OCR hit on a page."""
    text: str
    x_start: float
    x_end: float
    y_center: float

    @classmethod
    def from_bbox(cls, text: str, bbox: BBox, y_origin: str = "bottom-left") -> "RecognizedToken":
        """Build a token from a normalized top-left (x0, y0, x1, y1) box."""
        x_start, x_end, y_center = token_geometry(bbox, y_origin)
        return cls(text=text, x_start=x_start, x_end=x_end, y_center=y_center)

    def is_well_formed(self) -> bool:
        """Coordinates are finite, inside [0, 1] and x_start <= x_end."""
        if not isinstance(self.text, str):
            return False
        coords = (self.x_start, self.x_end, self.y_center)
        if not all(is_normalized(v) for v in coords):
            return False
        return self.x_start <= self.x_end

    @property
    def is_blank(self) -> bool:
        return not self.text.strip()


class TokenRecognizer(ABC):
    """
    Text recognition engine producing tokens for one rendered page.

    Implementations must return normalized coordinates in the configured
    vertical convention.
    """

    @abstractmethod
    def recognize(self, image: Image.Image) -> List[RecognizedToken]:
        """Recognize tokens on a single page image."""
        pass
