# booklist/covers.py
"""
Cover image download from the DNB cover service.
"""

import logging
from pathlib import Path
from typing import Optional
from urllib.parse import urlencode, urlparse

from .config import USER_AGENT
from .http_client import HTTPClient


class CoverDownloader:
    """
    Fetches cover images keyed by ISBN into a local directory.

    Downloads are idempotent: an existing ``<name>.jpg`` is never fetched
    again.
    """

    def __init__(self, http: HTTPClient, image_dir: Path, cover_url: str):
        self.http = http
        self.image_dir = Path(image_dir)
        self.cover_url = cover_url
        self.logger = logging.getLogger(self.__class__.__name__)

    def cover_path(self, name: str) -> Path:
        return self.image_dir / f"{name}.jpg"

    def cover_link(self, isbn: str) -> str:
        return f"{self.cover_url}?{urlencode({'isbn': isbn})}"

    def download(self, isbn: str, file_name: Optional[str] = None) -> bool:
        """
        Download the cover for an ISBN unless it is already on disk.

        Args:
            isbn: ISBN to look up
            file_name: Target file name without extension, defaults to the ISBN

        Returns:
            True if the cover exists afterwards, False otherwise
        """
        path = self.cover_path(file_name or isbn)

        if path.exists():
            self.logger.info(f"Book cover for {isbn} already exists, skipping ..")
            return True

        parsed = urlparse(self.cover_url)
        headers = {
            "User-Agent": USER_AGENT,
            "Referer": f"{parsed.scheme}://{parsed.netloc}",
        }

        success, status_code, response = self.http.get(self.cover_url, params={"isbn": isbn}, headers=headers)

        if not success or response is None or not response.content:
            self.logger.warning(f"No cover for {isbn} (status {status_code})")
            return False

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(response.content)
        except OSError as e:
            self.logger.error(f"Could not store cover for {isbn}: {e}")
            path.unlink(missing_ok=True)
            return False

        self.logger.info(f"Downloaded cover for {isbn} to {path}")
        return True
