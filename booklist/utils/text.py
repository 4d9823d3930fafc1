# booklist/utils/text.py
"""
String helpers shared by the enricher and the catalog providers.
"""

import html
import re
import unicodedata

from bs4 import BeautifulSoup

# German transliterations that NFKD decomposition would otherwise flatten
TRANSLITERATIONS = {
    "ä": "ae",
    "ö": "oe",
    "ü": "ue",
    "ß": "ss",
}


def slugify(text: str, separator: str = "-") -> str:
    """
    Build a filename and URL safe slug from a title.

    "Die Häschenschule!" -> "die-haeschenschule"
    """
    text = text.lower()
    for char, replacement in TRANSLITERATIONS.items():
        text = text.replace(char, replacement)

    # Strip remaining diacritics
    text = unicodedata.normalize("NFKD", text)
    text = text.encode("ascii", "ignore").decode("ascii")

    text = re.sub(r"[^a-z0-9]+", separator, text)
    return text.strip(separator)


def ucfirst(text: str) -> str:
    return text[:1].upper() + text[1:]


def strip_tags(text: str) -> str:
    """Remove HTML tags, keeping the text content"""
    if "<" not in text:
        return text
    return BeautifulSoup(text, "lxml").get_text()


def clean_html_segment(segment: str) -> str:
    """Unescape entities, turn paragraph breaks into sentence breaks, drop tags"""
    segment = html.unescape(segment)
    segment = segment.replace("<br><br>", ". ")
    return strip_tags(segment).strip()
