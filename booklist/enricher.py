# booklist/enricher.py
"""
Record Enricher - Single record transformation.
Handles a single raw BookRecord -> enriched BookRecord transformation.
"""

import logging

from .config import Translations
from .covers import CoverDownloader
from .errors import UnknownBindingError
from .models import BookRecord
from .normalizer import FieldNormalizer
from .utils import slugify


def convert_title(title: str) -> str:
    """
    Drop the trailing artifact the export appends to every title.

    "Book title." -> "Book title"
    """
    return title[:-1]


def convert_price(price: str) -> str:
    """'XX.YY EUR' -> 'XX,YY €'"""
    return price.replace("EUR", "€").replace(".", ",")


class RecordEnricher:
    """
    Enriches a single record with normalized fields and a local cover.

    This class has no knowledge of CSV handling or catalog providers.
    """

    def __init__(self, translations: Translations, covers: CoverDownloader):
        self.translations = translations
        self.covers = covers
        self.normalizer = FieldNormalizer(translations)
        self.logger = logging.getLogger(self.__class__.__name__)

    def convert_binding(self, code: str) -> str:
        try:
            return self.translations.binding[code]
        except KeyError:
            raise UnknownBindingError(code) from None

    def enrich(self, record: BookRecord) -> BookRecord:
        """
        Main enrichment method for a single record.

        Args:
            record: Record as read from the CSV export

        Returns:
            New BookRecord; the input is left untouched

        Raises:
            UnknownBindingError: binding code is not in the lookup table
        """
        info = self.normalizer.normalize_information(record.information)

        title = convert_title(record.title)
        slug = slugify(title)
        self.logger.info(f"Enriching: {title} ({record.isbn})")

        # Fail before anything is written to disk
        binding = self.convert_binding(record.binding)

        has_cover = self.covers.download(record.isbn, slug or None)
        cover_name = slug or record.isbn

        return record.updated(
            binding=binding,
            price=convert_price(record.price),
            title=title,
            subtitle="",
            age_rating=info.age_rating,
            year=info.year,
            page_count=info.page_count,
            dimensions="",
            participants="",
            information=info.description,
            description="",
            cover=f"{cover_name}.jpg" if has_cover else "",
            cover_dnb=self.covers.cover_link(record.isbn) if has_cover else "",
            cover_knv="",
        )
