# booklist/csv_bridge.py
"""
CSV Bridge - Reads pcbis.de title exports and writes enriched book lists.
Separate from enrichment logic for clean separation of concerns.
"""

import csv
import io
import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

import pandas as pd
from charset_normalizer import from_bytes

from .errors import MalformedRowError
from .models import INPUT_COLUMNS

# Candidates when the export is not UTF-8; pcbis.de exports are Western European
LEGACY_ENCODINGS = ["cp1252", "latin_1"]

PathLike = Union[str, Path]


class CsvBridge:
    """
    Converts between delimited files and keyed rows.

    Reading zips every row against a fixed, ordered header schema.
    Writing derives the header row from the first row's keys, so all
    rows in one file must share the same keys.
    """

    def __init__(self, headers: Optional[Sequence[str]] = None):
        self.headers = list(headers) if headers is not None else list(INPUT_COLUMNS)
        self.rejected_rows: List[MalformedRowError] = []
        self.logger = logging.getLogger(self.__class__.__name__)

    def read(
        self,
        path: PathLike,
        delimiter: str = ";",
        skip_header: bool = False,
        strict: bool = False
    ) -> List[Dict[str, str]]:
        """
        Load rows from a delimited file.

        Args:
            path: Source CSV file
            delimiter: Delimiting character
            skip_header: If True, the first row is a header and is ignored
            strict: If True, short rows raise MalformedRowError instead of
                being skipped and collected in ``rejected_rows``

        Returns:
            List of rows keyed by the header schema, empty if the file
            cannot be read
        """
        self.rejected_rows = []

        try:
            raw = Path(path).read_bytes()
        except OSError as e:
            self.logger.warning(f"Could not read {path}: {e}")
            return []

        text = self._decode(raw)
        reader = csv.reader(io.StringIO(text, newline=""), delimiter=delimiter)

        rows = []
        for line_number, fields in enumerate(reader, 1):
            if skip_header and line_number == 1:
                continue
            if not fields or fields == [""]:
                continue

            if len(fields) < len(self.headers):
                error = MalformedRowError(line_number, len(self.headers), len(fields))
                if strict:
                    raise error
                self.logger.warning(f"Skipping malformed row in {path}: {error}")
                self.rejected_rows.append(error)
                continue

            # Extra trailing columns are dropped
            rows.append(dict(zip(self.headers, fields)))

        self.logger.info(f"Loaded {len(rows)} rows from {path}")
        return rows

    def write(self, rows: Sequence[Dict[str, str]], path: PathLike, delimiter: str = ";") -> bool:
        """
        Write rows to a delimited UTF-8 file, header row first.

        Returns:
            True on success, False if the file could not be written
        """
        path = Path(path)

        try:
            if not rows:
                path.write_text("", encoding="utf-8")
                return True

            columns = list(rows[0].keys())
            df = pd.DataFrame(list(rows), columns=columns, dtype=str)
            df.to_csv(path, sep=delimiter, index=False, encoding="utf-8", lineterminator="\n")
        except OSError as e:
            self.logger.error(f"Could not write {path}: {e}")
            return False

        self.logger.info(f"Wrote {len(rows)} rows to {path}")
        return True

    def _decode(self, raw: bytes) -> str:
        """Decode file contents to text, normalizing legacy encodings"""
        try:
            return raw.decode("utf-8-sig")
        except UnicodeDecodeError:
            pass

        match = from_bytes(raw, cp_isolation=LEGACY_ENCODINGS).best()
        encoding = match.encoding if match is not None else "latin-1"
        self.logger.info(f"Input is not UTF-8, decoding as {encoding}")

        try:
            return raw.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            return raw.decode("latin-1")
