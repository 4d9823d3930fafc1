# booklist/__init__.py
"""
Book list enrichment pipeline for printable recommendation sheets.

Primary interfaces:
- BookListPipeline: Full run from pcbis.de export to enriched CSV
- CsvBridge: Read and write delimited files
- RecordEnricher: Single-record normalization and cover download
- FieldNormalizer: Parse the free-text information column

Catalog providers:
- KNVProvider: Enrichment from the KNV web service
- run_providers: First-success provider selection
"""

from .config import Settings, Translations
from .csv_bridge import CsvBridge
from .covers import CoverDownloader
from .enricher import RecordEnricher, convert_price, convert_title
from .errors import (
    BookListError,
    CatalogError,
    CatalogLoginError,
    ConfigError,
    MalformedRowError,
    UnknownBindingError,
)
from .http_client import HTTPClient
from .models import BookRecord, NormalizedInfo, RecordFailure, RunReport
from .normalizer import FieldNormalizer, split_information
from .pipeline import BookListPipeline
from .sources import PROVIDERS, CatalogProvider, KNVProvider, run_providers

__version__ = "1.0.0"

__all__ = [
    # Primary interface
    "BookListPipeline",
    "CsvBridge",
    "RecordEnricher",
    "FieldNormalizer",
    "split_information",
    "convert_price",
    "convert_title",
    "CoverDownloader",
    "HTTPClient",
    "Settings",
    "Translations",

    # Models
    "BookRecord",
    "NormalizedInfo",
    "RecordFailure",
    "RunReport",

    # Providers
    "CatalogProvider",
    "KNVProvider",
    "PROVIDERS",
    "run_providers",

    # Errors
    "BookListError",
    "CatalogError",
    "CatalogLoginError",
    "ConfigError",
    "MalformedRowError",
    "UnknownBindingError"
]
