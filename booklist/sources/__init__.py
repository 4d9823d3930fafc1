# booklist/sources/__init__.py
"""
External catalog providers for book data.

``PROVIDERS`` is the ordered registry; the first provider returning a
non-empty result wins.
"""

from typing import List, Type

from .base import CatalogProvider, run_providers
from .cache import ResponseCache
from .knv import KNVProvider
from .knv_client import KNVClient, parse_article_data

PROVIDERS: List[Type[CatalogProvider]] = [
    KNVProvider,
]


def build_providers(settings, http) -> List[CatalogProvider]:
    """Instantiate every registered provider, in registry order"""
    return [provider.from_settings(settings, http) for provider in PROVIDERS]


__all__ = [
    "CatalogProvider",
    "KNVProvider",
    "KNVClient",
    "ResponseCache",
    "PROVIDERS",
    "build_providers",
    "parse_article_data",
    "run_providers"
]
