# booklist/pipeline.py
"""
Book List Pipeline - Orchestrates a full run from CSV export to enriched CSV.

Workflow: CSV -> RecordEnricher (per record) -> catalog provider -> CSV
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .config import Settings
from .covers import CoverDownloader
from .csv_bridge import CsvBridge
from .enricher import RecordEnricher
from .errors import BookListError
from .http_client import HTTPClient
from .models import BookRecord, RunReport
from .sources import CatalogProvider, build_providers, run_providers


class BookListPipeline:
    """
    Wires the pipeline stages together.

    Failures are collected per record in the returned RunReport; only
    an unreadable input or unwritable output ends a run early.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        http: Optional[HTTPClient] = None,
        csv_bridge: Optional[CsvBridge] = None,
        enricher: Optional[RecordEnricher] = None,
        providers: Optional[Sequence[CatalogProvider]] = None
    ):
        self.settings = settings or Settings()
        # Only a client built here is closed at the end of a run
        self.owns_http = http is None
        self.http = http or HTTPClient(
            rate_limit=self.settings.rate_limit,
            max_retries=self.settings.max_retries,
            timeout=self.settings.timeout,
        )
        self.csv_bridge = csv_bridge or CsvBridge()
        self.enricher = enricher or RecordEnricher(
            self.settings.translations,
            CoverDownloader(self.http, self.settings.image_dir, self.settings.cover_url),
        )
        self.providers = list(providers) if providers is not None else build_providers(self.settings, self.http)
        self.logger = logging.getLogger(self.__class__.__name__)

    def load(self, input_path: Union[str, Path], report: RunReport) -> List[BookRecord]:
        rows = self.csv_bridge.read(input_path)

        for error in self.csv_bridge.rejected_rows:
            report.add_failure(BookRecord(), "read", error)

        return [BookRecord.from_row(row) for row in rows]

    def enrich_records(self, records: List[BookRecord], report: RunReport) -> List[BookRecord]:
        """
        Enrich every record, leaving out the ones that fail.

        Args:
            records: Records as read from the export
            report: Collects per-record failures

        Returns:
            Successfully enriched records, in input order
        """
        self.logger.info(f"Starting enrichment of {len(records)} records")

        enriched = []
        for i, record in enumerate(records, 1):
            self.logger.info(f"Processing record {i}/{len(records)}: {record.title}")

            try:
                enriched.append(self.enricher.enrich(record))
            except BookListError as e:
                self.logger.warning(f"Failed to enrich '{record.title}' ({record.isbn}): {e}")
                report.add_failure(record, "enrich", e)

        return enriched

    def apply_providers(self, records: List[BookRecord], report: RunReport) -> List[BookRecord]:
        if not records:
            return records

        provider, result = run_providers(records, self.providers)

        # Every provider up to the winner ran and may have failures to report
        tried = self.providers if provider is None else self.providers[:self.providers.index(provider) + 1]
        for candidate in tried:
            report.failures.extend(candidate.failures)

        if provider is None:
            self.logger.warning("No catalog provider succeeded, keeping records as they are")
            return records

        report.provider = provider.name
        return result

    def run(self, input_path: Union[str, Path], output_path: Union[str, Path]) -> RunReport:
        """
        Run the whole pipeline.

        Args:
            input_path: pcbis.de CSV export
            output_path: Destination for the enriched CSV

        Returns:
            RunReport with the final records and all failures
        """
        report = RunReport()

        try:
            records = self.load(input_path, report)
            records = self.enrich_records(records, report)
            records = self.apply_providers(records, report)
        finally:
            if self.owns_http:
                self.http.close()

        report.records = records
        report.output_written = self.csv_bridge.write([record.to_row() for record in records], output_path)

        self.logger.info(f"Run complete: {report.summary()}")
        return report

