# booklist/models/book.py
"""
Data models for the book list pipeline.
"""

from dataclasses import dataclass, fields, replace
from typing import Any, Dict, List, Optional

# Input columns in order of use when exporting with pcbis.de
INPUT_COLUMNS = [
    "AutorIn",
    "Titel",
    "Verlag",
    "ISBN",
    "Einband",
    "Preis",
    "a",
    "b",
    "c",
    "Informationen",
    "Zusatz",
    "Kommentar",
]


@dataclass
class BookRecord:
    """
    One book flowing through the pipeline.

    Attribute order is the canonical output order; ``COLUMN_LABELS`` maps
    each attribute to its CSV column.
    """
    author: str = ""
    title: str = ""
    subtitle: str = ""
    publisher: str = ""
    participants: str = ""
    isbn: str = ""
    binding: str = ""
    price: str = ""
    year: str = ""
    age_rating: str = ""
    page_count: Optional[int] = None
    dimensions: str = ""
    information: str = ""
    description: str = ""
    addendum: str = ""
    comment: str = ""
    misc_a: str = ""
    misc_b: str = ""
    misc_c: str = ""
    cover: str = ""
    cover_dnb: str = ""
    cover_knv: str = ""

    @classmethod
    def from_row(cls, row: Dict[str, str]) -> "BookRecord":
        """Build a record from a CSV row, ignoring unknown columns"""
        values: Dict[str, Any] = {}
        for attribute, label in COLUMN_LABELS.items():
            if label not in row:
                continue
            value = row[label] or ""
            if attribute == "page_count":
                values[attribute] = int(value) if value.strip().isdigit() else None
            else:
                values[attribute] = value
        return cls(**values)

    def to_row(self) -> Dict[str, str]:
        """Render the record as an ordered CSV row"""
        row = {}
        for f in fields(self):
            value = getattr(self, f.name)
            row[COLUMN_LABELS[f.name]] = "" if value is None else str(value)
        return row

    def merge(self, values: Dict[str, Any]) -> None:
        """
        Overwrite fields with new values, skipping empty ones.

        An empty string or None never replaces existing content.
        """
        for name, value in values.items():
            if name not in COLUMN_LABELS:
                raise KeyError(f"BookRecord has no field {name!r}")
            if value is None or value == "":
                continue
            setattr(self, name, value)

    def updated(self, **values: Any) -> "BookRecord":
        """Return a copy with the given fields overwritten"""
        return replace(self, **values)


COLUMN_LABELS: Dict[str, str] = {
    "author": "AutorIn",
    "title": "Titel",
    "subtitle": "Untertitel",
    "publisher": "Verlag",
    "participants": "Mitwirkende",
    "isbn": "ISBN",
    "binding": "Einband",
    "price": "Preis",
    "year": "Erscheinungsjahr",
    "age_rating": "Altersempfehlung",
    "page_count": "Seitenzahl",
    "dimensions": "Abmessungen",
    "information": "Informationen",
    "description": "Inhaltsbeschreibung",
    "addendum": "Zusatz",
    "comment": "Kommentar",
    "misc_a": "a",
    "misc_b": "b",
    "misc_c": "c",
    "cover": "Cover",
    "cover_dnb": "Cover DNB",
    "cover_knv": "Cover KNV",
}

OUTPUT_COLUMNS: List[str] = [COLUMN_LABELS[f.name] for f in fields(BookRecord)]


@dataclass
class NormalizedInfo:
    """Fields extracted from a free-text information string"""
    description: str = ""
    year: str = ""
    age_rating: str = ""
    page_count: Optional[int] = None
