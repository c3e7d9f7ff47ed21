# src/medical_structuring/extractors/table_reconstructor.py
"""
Geometric table reconstruction from recognized tokens.

Scanned lab reports rarely have a table primitive we can rely on, so rows and
cells are recovered from token positions alone:

1. Row grouping   - tokens sorted top-to-bottom; a token joins the open row
                    while it stays within ROW_THRESHOLD of the row's first token
2. Cell splitting - row tokens sorted left-to-right; a horizontal gap wider
                    than GAP_THRESHOLD starts a new cell
3. Row filtering  - rows with fewer than MIN_CELLS_PER_ROW cells are dropped

Greedy single pass: tightly packed multi-line cells will under-split.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Sequence
import logging

from ..config import threshold_settings
from ..core.bbox_utils import ORIGINS
from .tokens import RecognizedToken
from src.utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Ordered cell strings, left-to-right
TableRow = List[str]
# Rows of a whole document, page order then top-to-bottom
ExtractedTable = List[TableRow]


class TableReconstructor:
    """
    Rebuild table rows/cells from one page of recognized tokens.

    Thresholds default to ThresholdSettings and can be overridden per instance
    so they can be tuned per recognizer/resolution.
    """

    def __init__(
        self,
        row_threshold: Optional[float] = None,
        gap_threshold: Optional[float] = None,
        min_cells: Optional[int] = None,
        y_origin: Optional[str] = None,
        page_workers: Optional[int] = None,
    ):
        self.row_threshold = threshold_settings.ROW_THRESHOLD if row_threshold is None else row_threshold
        self.gap_threshold = threshold_settings.GAP_THRESHOLD if gap_threshold is None else gap_threshold
        self.min_cells = threshold_settings.MIN_CELLS_PER_ROW if min_cells is None else min_cells
        self.y_origin = y_origin or threshold_settings.TABLE_Y_ORIGIN
        self.page_workers = page_workers or threshold_settings.PAGE_WORKERS

        if self.y_origin not in ORIGINS:
            raise ConfigurationError(f"Unknown y origin: {self.y_origin}")
        if self.row_threshold < 0 or self.gap_threshold < 0:
            raise ConfigurationError("Thresholds must be non-negative")

        self.logger = logging.getLogger(__name__)

    def reconstruct(self, tokens: Iterable[RecognizedToken]) -> ExtractedTable:
        """
        Reconstruct table rows for a single page.

        Never raises on token content: malformed tokens are skipped and an
        empty or token-less page yields an empty table.
        """
        usable = [t for t in tokens if t.is_well_formed()]
        if not usable:
            return []

        rows: ExtractedTable = []
        for line in self._group_rows(usable):
            cells = self._split_cells(line)
            if len(cells) >= self.min_cells:
                rows.append(cells)

        self.logger.debug(f"Reconstructed {len(rows)} table rows from {len(usable)} tokens")
        return rows

    def reconstruct_document(self, pages: Sequence[Sequence[RecognizedToken]]) -> ExtractedTable:
        """
        Reconstruct every page and concatenate in page order.

        Pages are independent, so they run on a thread pool; map() keeps the
        output in page order.
        """
        if not pages:
            return []

        if len(pages) == 1 or self.page_workers == 1:
            page_rows = [self.reconstruct(page) for page in pages]
        else:
            with ThreadPoolExecutor(max_workers=min(self.page_workers, len(pages))) as pool:
                page_rows = list(pool.map(self.reconstruct, pages))

        table: ExtractedTable = []
        for page_number, rows in enumerate(page_rows, start=1):
            if not rows:
                self.logger.debug(f"No table-like rows detected on page {page_number}")
            table.extend(rows)

        self.logger.info(f"Extracted {len(table)} table rows from {len(pages)} page(s)")
        return table

    def _group_rows(self, tokens: List[RecognizedToken]) -> List[List[RecognizedToken]]:
        # Topmost first: largest y for bottom-up coordinates, smallest for top-down
        ordered = sorted(
            tokens,
            key=lambda t: t.y_center,
            reverse=(self.y_origin == "bottom-left"),
        )

        rows: List[List[RecognizedToken]] = []
        for token in ordered:
            if rows and abs(token.y_center - rows[-1][0].y_center) <= self.row_threshold:
                rows[-1].append(token)
            else:
                rows.append([token])
        return rows

    def _split_cells(self, row: List[RecognizedToken]) -> TableRow:
        cells: TableRow = []
        current: List[str] = []
        prev_x_end: Optional[float] = None

        for token in sorted(row, key=lambda t: t.x_start):
            if prev_x_end is not None and (token.x_start - prev_x_end) > self.gap_threshold:
                if current:
                    cells.append(" ".join(current))
                current = []

            # Blank tokens still advance the gap computation
            if not token.is_blank:
                current.append(token.text.strip())

            prev_x_end = token.x_end if prev_x_end is None else max(prev_x_end, token.x_end)

        if current:
            cells.append(" ".join(current))

        return cells


def to_tabular_text(rows: ExtractedTable) -> str:
    """Serialize rows for a prompt: cells tab-separated, rows newline-separated."""
    return "\n".join("\t".join(row) for row in rows)
