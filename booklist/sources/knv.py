# booklist/sources/knv.py
"""
KNV catalog provider.

Turns raw KNV article data into record fields: year, author, subtitle,
dimensions, participants, description and a cover URL.
"""

from typing import Any, Dict, List

from ..config import Translations
from ..errors import BookListError, CatalogLoginError
from ..http_client import HTTPClient
from ..models import BookRecord
from ..utils import clean_html_segment
from .base import CatalogProvider
from .cache import ResponseCache
from .knv_client import KNVClient

# Description segments shorter than this are teasers or bylines
MIN_SEGMENT_LENGTH = 130
SEGMENT_SEPARATOR = "º"


def _text(book: Dict[str, Any], key: str) -> str:
    value = book.get(key)
    if value is None or isinstance(value, (dict, list)):
        return ""
    return str(value).strip()


def get_year(book: Dict[str, Any]) -> str:
    return _text(book, "Erschjahr")


def get_author(book: Dict[str, Any], record: BookRecord) -> str:
    """Author from KNV, unless KNV just repeats the title"""
    author = _text(book, "AutorSachtitel")
    if author == record.title:
        return ""
    return author


def get_subtitle(book: Dict[str, Any]) -> str:
    return _text(book, "Utitel")


def get_participants(book: Dict[str, Any]) -> str:
    return _text(book, "Mitarb")


def convert_mm(value: str) -> str:
    """'210' -> '21,0cm'"""
    return f"{float(value) / 10:.1f}".replace(".", ",") + "cm"


def get_dimensions(book: Dict[str, Any]) -> str:
    width = _text(book, "Breite")
    height = _text(book, "Hoehe")
    if not width or not height:
        return ""

    try:
        return f"{convert_mm(width)} x {convert_mm(height)}"
    except ValueError:
        return ""


def get_text(book: Dict[str, Any], no_description: str) -> str:
    """
    Pick the most useful description segment.

    Segments are split on the KNV separator and cleaned; while more than
    one remains, short ones are dropped. The first survivor wins.
    """
    text = _text(book, "Text1")
    if not text:
        return no_description

    segments = [clean_html_segment(segment) for segment in text.split(SEGMENT_SEPARATOR)]

    remaining = list(segments)
    for segment in segments:
        if len(segment) < MIN_SEGMENT_LENGTH and len(remaining) > 1:
            remaining.remove(segment)

    return remaining[0] if remaining else ""


def get_cover(book: Dict[str, Any]) -> str:
    multimedia = book.get("MULTIMEDIA")
    if isinstance(multimedia, list):
        multimedia = multimedia[0] if multimedia else None
    if not isinstance(multimedia, dict):
        return ""
    return _text(multimedia, "MMUrl")


class KNVProvider(CatalogProvider):
    """
    Enriches records with data from the KNV web service.

    Raw responses are cached per ISBN, so re-runs only query new titles.
    """

    name = "KNV"

    def __init__(self, client: KNVClient, cache: ResponseCache, translations: Translations):
        super().__init__()
        self.client = client
        self.cache = cache
        self.translations = translations

    @classmethod
    def from_settings(cls, settings, http: HTTPClient) -> "KNVProvider":
        client = KNVClient(http, settings.catalog_url, settings.login_path)
        cache = ResponseCache(settings.cache_dir, cls.name)
        return cls(client, cache, settings.translations)

    def lookup(self, isbn: str) -> Dict[str, Any]:
        book = self.cache.get(isbn)
        if book is None:
            book = self.client.fetch(isbn)
            self.cache.set(isbn, book)
        return book

    def extract(self, book: Dict[str, Any], record: BookRecord) -> Dict[str, str]:
        return {
            "year": get_year(book),
            "author": get_author(book, record),
            "subtitle": get_subtitle(book),
            "dimensions": get_dimensions(book),
            "participants": get_participants(book),
            "description": get_text(book, self.translations.no_description),
            "cover_knv": get_cover(book),
        }

    def process(self, records: List[BookRecord]) -> List[BookRecord]:
        """
        Enrich records with KNV information.

        Records whose lookup fails are kept as they are and reported in
        ``failures``. If no lookup succeeds at all, an empty list is
        returned so the next provider gets a chance.

        Raises:
            CatalogLoginError: no session could be opened, so no further
                record can be looked up
        """
        self.failures = []
        if not records:
            raise ValueError("No data to process!")

        output = []

        with self.client:
            for record in records:
                record = record.updated()
                knv: Dict[str, str] = {}

                try:
                    book = self.lookup(record.isbn)
                    knv = self.extract(book, record)
                except CatalogLoginError:
                    raise
                except BookListError as e:
                    self.record_failure(record, e)

                record.merge(knv)
                output.append(record)

        if len(self.failures) == len(output):
            self.logger.warning("Every KNV lookup failed, giving up on this provider")
            return []

        self.logger.info(f"Processed {len(output)} records, {len(self.failures)} lookups failed")
        return output
