# booklist/sources/base.py
"""
Catalog provider interface and first-success selection.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Tuple

from ..errors import BookListError
from ..models import BookRecord, RecordFailure

logger = logging.getLogger(__name__)


class CatalogProvider(ABC):
    """
    Pluggable enrichment pass over a whole record set.

    ``process`` returns the enriched records, or an empty list when the
    provider could not do anything useful. Per-record problems are
    collected in ``failures`` rather than raised.
    """

    name: str = ""

    def __init__(self):
        self.failures: List[RecordFailure] = []
        self.logger = logging.getLogger(self.__class__.__name__)

    @classmethod
    @abstractmethod
    def from_settings(cls, settings, http) -> "CatalogProvider":
        """Build the provider from runtime settings and a shared HTTP client"""

    @abstractmethod
    def process(self, records: List[BookRecord]) -> List[BookRecord]:
        """Enrich records, returning a new list"""

    def record_failure(self, record: BookRecord, error: Exception) -> None:
        self.logger.warning(f"{self.name} lookup failed for {record.isbn}: {error}")
        self.failures.append(
            RecordFailure(isbn=record.isbn, title=record.title, stage="catalog", message=str(error))
        )

    def record_provider_failure(self, error: Exception) -> None:
        """A failure of the whole pass, not tied to one record"""
        self.failures.append(
            RecordFailure(isbn="", title="", stage="catalog", message=f"{self.name}: {error}")
        )


def run_providers(
    records: List[BookRecord],
    providers: Sequence[CatalogProvider]
) -> Tuple[Optional[CatalogProvider], List[BookRecord]]:
    """
    Run providers in order until one returns a non-empty result.

    Later providers are never called once one succeeds. A provider that
    raises is logged, skipped and left with the error in its ``failures``.

    Returns:
        (provider, records) of the first success, or (None, []) if none
    """
    for provider in providers:
        try:
            result = provider.process(records)
        except BookListError as e:
            logger.error(f"Provider {provider.name} failed: {e}")
            provider.record_provider_failure(e)
            continue

        if result:
            logger.info(f"Provider {provider.name} enriched {len(result)} records")
            return provider, result

        logger.info(f"Provider {provider.name} returned no data")

    return None, []
