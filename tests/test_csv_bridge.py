# tests/test_csv_bridge.py
import pytest

from booklist.csv_bridge import CsvBridge
from booklist.errors import MalformedRowError
from booklist.models import INPUT_COLUMNS

ROW = "Lindgren, Astrid;Pippi Langstrumpf.;Oetinger;9783789141619;Gb;14.99 EUR;x;y;z;6-8 J.;;Klassiker"


def test_read_zips_against_schema(tmp_path):
    path = tmp_path / "export.csv"
    path.write_text(ROW + "\n", encoding="utf-8")

    rows = CsvBridge().read(path)

    assert len(rows) == 1
    assert list(rows[0].keys()) == INPUT_COLUMNS
    assert rows[0]["ISBN"] == "9783789141619"
    assert rows[0]["Kommentar"] == "Klassiker"


def test_read_missing_file_returns_empty(tmp_path):
    assert CsvBridge().read(tmp_path / "missing.csv") == []


def test_read_drops_extra_columns(tmp_path):
    path = tmp_path / "export.csv"
    path.write_text(ROW + ";extra;columns\n", encoding="utf-8")

    rows = CsvBridge().read(path)

    assert len(rows[0]) == len(INPUT_COLUMNS)
    assert rows[0]["Kommentar"] == "Klassiker"


def test_read_skips_short_rows(tmp_path):
    path = tmp_path / "export.csv"
    path.write_text("too;short\n" + ROW + "\n", encoding="utf-8")

    bridge = CsvBridge()
    rows = bridge.read(path)

    assert len(rows) == 1
    assert len(bridge.rejected_rows) == 1
    assert bridge.rejected_rows[0].line_number == 1
    assert bridge.rejected_rows[0].found == 2


def test_read_strict_raises_on_short_rows(tmp_path):
    path = tmp_path / "export.csv"
    path.write_text("too;short\n", encoding="utf-8")

    with pytest.raises(MalformedRowError):
        CsvBridge().read(path, strict=True)


def test_read_legacy_encoding(tmp_path):
    path = tmp_path / "export.csv"
    row = ROW.replace("Pippi Langstrumpf.", "Die Häschenschule, Größe und Glück.")
    path.write_bytes((row + "\n").encode("latin-1"))

    rows = CsvBridge().read(path)

    assert "Häschenschule" in rows[0]["Titel"]
    assert "Größe" in rows[0]["Titel"]


def test_write_then_read_round_trip(tmp_path):
    rows = [
        {"Titel": "Momo", "ISBN": "9783522202107", "Preis": "16,00 €", "Kommentar": ""},
        {"Titel": "Das Sams; Band 1", "ISBN": "9783789142159", "Preis": "13,00 €", "Kommentar": "Über \"Sams\""},
    ]
    path = tmp_path / "out.csv"

    assert CsvBridge().write(rows, path) is True

    bridge = CsvBridge(headers=list(rows[0].keys()))
    assert bridge.read(path, skip_header=True) == rows


def test_write_header_from_first_row(tmp_path):
    path = tmp_path / "out.csv"
    CsvBridge().write([{"b": "1", "a": "2"}], path)

    assert path.read_text(encoding="utf-8").splitlines()[0] == "b;a"


def test_write_empty_sequence(tmp_path):
    path = tmp_path / "out.csv"

    assert CsvBridge().write([], path) is True
    assert path.read_text(encoding="utf-8") == ""


def test_write_unwritable_path_returns_false(tmp_path):
    path = tmp_path / "missing-dir" / "out.csv"
    assert CsvBridge().write([{"a": "1"}], path) is False
