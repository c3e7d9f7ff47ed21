# src/medical_structuring/extractors/ocr_recognizer.py
"""
Token recognizer adapters for scanned lab reports.

Renders PDF pages with pypdfium2 and recognizes words with Tesseract
(pytesseract.image_to_data), converting pixel boxes into normalized
RecognizedTokens in the configured vertical convention.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional
import logging
import shutil

import pypdfium2
import pytesseract
from PIL import Image

from ..config import threshold_settings
from ..core.bbox_utils import normalize_bbox
from .tokens import RecognizedToken, TokenRecognizer
from src.utils.exceptions import RecognizerError

logger = logging.getLogger(__name__)

# Languages common for the lab reports we see
DEFAULT_LANGUAGES = "tur+eng"


class TesseractRecognizer(TokenRecognizer):
    """
    Word-level Tesseract recognizer.

    Config:
        languages: Tesseract language string (default: tur+eng)
        min_confidence: Drop words below this Tesseract confidence (0-100)
        y_origin: Vertical convention of produced tokens
    """

    def __init__(
        self,
        languages: str = DEFAULT_LANGUAGES,
        min_confidence: float = 0.0,
        y_origin: Optional[str] = None,
    ):
        self.languages = languages
        self.min_confidence = min_confidence
        self.y_origin = y_origin or threshold_settings.TABLE_Y_ORIGIN
        self._tesseract_available: Optional[bool] = None

    @property
    def tesseract_available(self) -> bool:
        """Check if the Tesseract binary is installed."""
        if self._tesseract_available is None:
            self._tesseract_available = shutil.which('tesseract') is not None
            if not self._tesseract_available:
                logger.warning("Tesseract OCR not found on PATH")
        return self._tesseract_available

    def recognize(self, image: Image.Image) -> List[RecognizedToken]:
        if not self.tesseract_available:
            raise RecognizerError("Tesseract is not installed")

        try:
            data = pytesseract.image_to_data(
                image,
                lang=self.languages,
                output_type=pytesseract.Output.DICT
            )
        except pytesseract.TesseractNotFoundError as e:
            raise RecognizerError("Tesseract is not installed") from e
        except pytesseract.TesseractError as e:
            raise RecognizerError(f"Tesseract failed: {e}") from e

        return self.tokens_from_data(data, image.width, image.height)

    def tokens_from_data(
        self,
        data: Dict[str, List[Any]],
        page_width: int,
        page_height: int
    ) -> List[RecognizedToken]:
        """Convert an image_to_data dict into normalized tokens."""
        tokens: List[RecognizedToken] = []

        for i, text in enumerate(data.get('text', [])):
            try:
                conf = float(data['conf'][i])
            except (TypeError, ValueError):
                continue
            # Tesseract reports -1 for layout-only entries (blocks, lines)
            if conf < 0 or conf < self.min_confidence:
                continue
            if not str(text).strip():
                continue

            x0 = data['left'][i]
            y0 = data['top'][i]
            x1 = x0 + data['width'][i]
            y1 = y0 + data['height'][i]

            bbox = normalize_bbox((x0, y0, x1, y1), page_width, page_height, origin="top-left")
            if bbox is None:
                continue

            tokens.append(RecognizedToken.from_bbox(str(text).strip(), bbox, self.y_origin))

        logger.debug(f"Tesseract produced {len(tokens)} tokens")
        return tokens


def render_pdf_pages(pdf_path: Path, dpi: int = 200) -> List[Image.Image]:
    """
    Render every PDF page to a PIL image using pypdfium2.

    Args:
        pdf_path: Path to PDF
        dpi: Rendering resolution

    Returns:
        One image per page, in page order
    """
    scale = dpi / 72.0  # PDF points to pixels
    images: List[Image.Image] = []

    pdf = pypdfium2.PdfDocument(str(pdf_path))
    try:
        for page_index in range(len(pdf)):
            page = pdf[page_index]
            images.append(page.render(scale=scale).to_pil())
    finally:
        pdf.close()

    return images


def recognize_pages(recognizer: TokenRecognizer, images: List[Image.Image]) -> List[List[RecognizedToken]]:
    """Run the recognizer on each page image, keeping page order."""
    return [recognizer.recognize(image) for image in images]
