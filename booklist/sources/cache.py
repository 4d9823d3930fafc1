# booklist/sources/cache.py
"""
On-disk cache for raw catalog responses.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Optional


class ResponseCache:
    """
    Stores one JSON file per ISBN under ``<cache_dir>/<provider>/``.

    Re-running the pipeline serves known ISBNs from disk, so no catalog
    session is opened for them.
    """

    def __init__(self, cache_dir: Path, provider: str):
        self.directory = Path(cache_dir) / provider.lower()
        self.logger = logging.getLogger(self.__class__.__name__)

    def path_for(self, isbn: str) -> Path:
        return self.directory / f"{isbn}.json"

    def get(self, isbn: str) -> Optional[Dict]:
        path = self.path_for(isbn)
        if not path.exists():
            return None

        try:
            with open(path, encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            self.logger.warning(f"Ignoring unreadable cache entry {path}: {e}")
            return None

    def set(self, isbn: str, data: Dict) -> None:
        path = self.path_for(isbn)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
        except OSError as e:
            self.logger.error(f"Could not write cache entry {path}: {e}")
