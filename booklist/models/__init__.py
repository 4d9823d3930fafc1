# booklist/models/__init__.py
"""
Data models for the book list pipeline.
"""

from .book import BookRecord, NormalizedInfo, COLUMN_LABELS, INPUT_COLUMNS, OUTPUT_COLUMNS
from .report import RecordFailure, RunReport

__all__ = [
    "BookRecord",
    "NormalizedInfo",
    "COLUMN_LABELS",
    "INPUT_COLUMNS",
    "OUTPUT_COLUMNS",
    "RecordFailure",
    "RunReport"
]
