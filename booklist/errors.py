# booklist/errors.py
"""
Exception hierarchy for the book list pipeline.
"""


class BookListError(Exception):
    """Base class for all pipeline errors"""


class ConfigError(BookListError):
    """Language resource or settings are missing required keys"""


class MalformedRowError(BookListError):
    """A CSV row has fewer columns than the header schema"""

    def __init__(self, line_number: int, expected: int, found: int):
        self.line_number = line_number
        self.expected = expected
        self.found = found
        super().__init__(
            f"Row {line_number} has {found} columns, expected {expected}"
        )


class UnknownBindingError(BookListError):
    """Binding code has no entry in the translation table"""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Unknown binding code: {code!r}")


class CatalogError(BookListError):
    """Catalog lookup failed (transport, SOAP fault or unparsable data)"""


class CatalogLoginError(CatalogError):
    """Catalog credentials are missing or were rejected"""
