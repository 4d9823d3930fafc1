# booklist/normalizer.py
"""
Field normalization for the free-text information column.

The pcbis.de export packs age rating, page count, publication year and
assorted remarks into one string, e.g.

    "Mit Illustrationen; 6-8 J.; 32 S.; 2019"
"""

import logging
import re
from typing import List, Optional

from .config import Translations
from .models import NormalizedInfo
from .utils import ucfirst

LEADING_NUMBER = re.compile(r"^\s*(\d+)")


def split_information(text: str) -> List[str]:
    """
    Split an information string into trimmed, non-empty tokens.

    Semicolons are the usual separator; strings without any fall back
    to splitting on periods.
    """
    tokens = _split(text, ";")
    if len(tokens) == 1:
        tokens = _split(text, ".")
    return tokens


def _split(text: str, separator: str) -> List[str]:
    return [token.strip() for token in text.split(separator) if token.strip()]


class FieldNormalizer:
    """
    Extracts structured fields from information tokens.

    Each token is consumed by the first rule it matches:
    1. dimension fragment (" cm", " mm") -> discarded
    2. age (" J.", " Mon.") -> age rating
    3. page count (" S.") -> page count
    4. exactly four characters -> year
    Everything else ends up in the description.
    """

    def __init__(self, translations: Translations):
        self.translations = translations
        self.logger = logging.getLogger(self.__class__.__name__)

    def normalize(self, tokens: List[str]) -> NormalizedInfo:
        info = NormalizedInfo(age_rating=self.translations.no_age_rating)
        remaining = []

        for token in tokens:
            if " cm" in token or " mm" in token:
                # Garbled book dimensions
                continue
            elif " J." in token or " Mon." in token:
                info.age_rating = self.convert_age(token)
            elif " S." in token:
                info.page_count = self.convert_page_count(token)
            elif len(token) == 4:
                # Almost always the year at this point
                info.year = token
            else:
                remaining.append(token)

        info.description = self.build_description(remaining)
        return info

    def normalize_information(self, text: str) -> NormalizedInfo:
        return self.normalize(split_information(text))

    def convert_age(self, token: str) -> str:
        """'6-8 J.' -> '6 bis 8 Jahren'"""
        for abbreviation, replacement in self.translations.age.items():
            token = token.replace(abbreviation, replacement)
        return token

    def convert_page_count(self, token: str) -> Optional[int]:
        """'32 S.' -> 32"""
        match = LEADING_NUMBER.match(token)
        if not match:
            self.logger.debug(f"No page count in {token!r}")
            return None
        return int(match.group(1))

    def build_description(self, tokens: List[str]) -> str:
        phrases = []
        for token in tokens:
            for jargon, phrase in self.translations.information.items():
                token = token.replace(jargon, phrase)
            phrases.append(token)

        description = ucfirst(", ".join(phrases)).rstrip(".")
        if description:
            description += "."
        return description
