"""
Token recognition and geometric table reconstruction.
"""

from .tokens import RecognizedToken, TokenRecognizer
from .table_reconstructor import TableReconstructor, TableRow, ExtractedTable, to_tabular_text

__all__ = [
    'RecognizedToken',
    'TokenRecognizer',
    'TableReconstructor',
    'TableRow',
    'ExtractedTable',
    'to_tabular_text',
]
