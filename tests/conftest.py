# tests/conftest.py
import pytest

from booklist.config import Settings, Translations
from booklist.covers import CoverDownloader
from booklist.enricher import RecordEnricher
from booklist.errors import CatalogError
from booklist.models import BookRecord


class FakeResponse:
    def __init__(self, content: bytes = b"", status_code: int = 200):
        self.content = content
        self.status_code = status_code


class FakeHTTP:
    """Stands in for HTTPClient; replies are queued per call"""

    def __init__(self, replies=None):
        self.replies = list(replies or [])
        self.calls = []

    def _next(self):
        if not self.replies:
            return False, 0, None
        response = self.replies.pop(0)
        if response is None:
            return False, 0, None
        return response.status_code == 200, response.status_code, response

    def get(self, url, params=None, headers=None):
        self.calls.append(("GET", url, params, headers))
        return self._next()

    def post(self, url, data, headers=None):
        self.calls.append(("POST", url, data, headers))
        return self._next()


class FakeClient:
    """Stands in for KNVClient; books maps ISBN to raw article data"""

    def __init__(self, books):
        self.books = books
        self.fetched = []
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.closed = True

    def fetch(self, isbn):
        self.fetched.append(isbn)
        book = self.books.get(isbn)
        if book is None:
            raise CatalogError(f"No KNV entry for ISBN {isbn}")
        return book


@pytest.fixture
def translations():
    return Translations.load()


@pytest.fixture
def settings(tmp_path, translations):
    return Settings(
        translations=translations,
        image_dir=tmp_path / "images",
        cache_dir=tmp_path / "cache",
        login_path=tmp_path / "knv.login.json",
    )


@pytest.fixture
def fake_http():
    return FakeHTTP()


@pytest.fixture
def enricher(settings, fake_http):
    covers = CoverDownloader(fake_http, settings.image_dir, settings.cover_url)
    return RecordEnricher(settings.translations, covers)


@pytest.fixture
def raw_record():
    return BookRecord(
        author="Lindgren, Astrid",
        title="Pippi Langstrumpf.",
        publisher="Oetinger",
        isbn="9783789141619",
        binding="Gb",
        price="14.99 EUR",
        information="Mit Illustrationen; 6-8 J.; 32 S.; 2019",
        comment="Klassiker",
    )
