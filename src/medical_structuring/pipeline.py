# ============================================================================
# src/medical_structuring/pipeline.py
# ============================================================================
"""
Lab Result Pipeline

Pipeline Flow:
    Page tokens → Table Reconstructor → tabular prompt → chat completion
    → emphasis stripping → sections + abnormality records → LabAnalysis

An empty table is still sent to the model; an answer with no structured
content comes back as an empty record list for the caller to render.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence
import logging

from .chat.client import OpenRouterChatClient
from .chat.prompts import LAB_RESULT_TEMPLATE, PromptTemplate, build_lab_prompt, join_messages
from .extractors.ocr_recognizer import TesseractRecognizer, recognize_pages, render_pdf_pages
from .extractors.table_reconstructor import ExtractedTable, TableReconstructor
from .extractors.tokens import RecognizedToken, TokenRecognizer
from .mappers.lab import to_lab_model
from .mappers.models import LabResultRecommendationModel
from .normalizers import (
    AnalysisSection,
    NormalizedRecord,
    RecordShape,
    ResponseNormalizer,
    parse_analysis_sections,
    strip_emphasis,
)
from src.utils.logging import log_performance

logger = logging.getLogger(__name__)


@dataclass
class LabAnalysis:
    """Result of one lab-result analysis request."""
    rows: ExtractedTable
    raw_response: str
    analysis_text: str
    sections: List[AnalysisSection] = field(default_factory=list)
    abnormalities: List[NormalizedRecord] = field(default_factory=list)

    @property
    def has_structured_result(self) -> bool:
        return bool(self.abnormalities)

    def to_model(self, user_id: str) -> LabResultRecommendationModel:
        return to_lab_model(user_id, self.rows, self.analysis_text, self.abnormalities)


class LabResultPipeline:
    """
    Lab-result analysis over recognized page tokens.

    Collaborators are injectable so the chat client and recognizer can be
    swapped or mocked.
    """

    def __init__(
        self,
        chat_client: Optional[OpenRouterChatClient] = None,
        reconstructor: Optional[TableReconstructor] = None,
        normalizer: Optional[ResponseNormalizer] = None,
        recognizer: Optional[TokenRecognizer] = None,
        template: PromptTemplate = LAB_RESULT_TEMPLATE,
    ):
        self.chat_client = chat_client or OpenRouterChatClient()
        self.reconstructor = reconstructor or TableReconstructor()
        self.normalizer = normalizer or ResponseNormalizer()
        self.recognizer = recognizer
        self.template = template

    def extract_table(self, pages: Sequence[Sequence[RecognizedToken]]) -> ExtractedTable:
        """Reconstruct the document table from per-page tokens."""
        return self.reconstructor.reconstruct_document(pages)

    def extract_table_from_pdf(self, pdf_path: Path, dpi: int = 200) -> ExtractedTable:
        """Render, recognize and reconstruct a PDF (Tesseract by default)."""
        recognizer = self.recognizer or TesseractRecognizer()
        images = render_pdf_pages(pdf_path, dpi=dpi)
        return self.extract_table(recognize_pages(recognizer, images))

    @log_performance(logger, "Lab result analysis")
    async def analyze(
        self,
        pages: Sequence[Sequence[RecognizedToken]],
        user_summary: str = ""
    ) -> LabAnalysis:
        rows = self.extract_table(pages)
        return await self.analyze_rows(rows, user_summary)

    async def analyze_rows(self, rows: ExtractedTable, user_summary: str = "") -> LabAnalysis:
        if not rows:
            logger.warning("No table rows reconstructed; sending empty table to the model")

        messages = build_lab_prompt(user_summary, rows, self.template)
        logger.debug(f"Lab prompt:\n{join_messages(messages)}")
        raw_response = await self.chat_client.complete(messages)

        analysis_text = strip_emphasis(raw_response)
        abnormalities = self.normalizer.normalize(raw_response, RecordShape.LAB_ABNORMALITY)
        if not abnormalities:
            logger.info("Lab response had no structured abnormality records")

        return LabAnalysis(
            rows=rows,
            raw_response=raw_response,
            analysis_text=analysis_text,
            sections=parse_analysis_sections(analysis_text),
            abnormalities=abnormalities,
        )
