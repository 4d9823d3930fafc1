# tests/test_models.py
import pytest

from booklist.config import Translations
from booklist.errors import ConfigError
from booklist.models import OUTPUT_COLUMNS, BookRecord, RunReport


def test_from_row_ignores_unknown_columns():
    record = BookRecord.from_row({"Titel": "Momo.", "ISBN": "222", "Unbekannt": "x"})

    assert record.title == "Momo."
    assert record.isbn == "222"
    assert record.author == ""


def test_to_row_uses_canonical_order():
    row = BookRecord(title="Momo", page_count=None).to_row()

    assert list(row.keys()) == OUTPUT_COLUMNS
    assert row["Seitenzahl"] == ""


def test_page_count_round_trip():
    row = BookRecord(page_count=32).to_row()
    assert BookRecord.from_row(row).page_count == 32


@pytest.mark.parametrize("existing, new, expected", [
    ("Bestand", "", "Bestand"),
    ("Bestand", None, "Bestand"),
    ("Bestand", "Neu", "Neu"),
    ("", "Neu", "Neu"),
])
def test_merge_never_overwrites_with_empty(existing, new, expected):
    record = BookRecord(subtitle=existing)
    record.merge({"subtitle": new})
    assert record.subtitle == expected


def test_merge_rejects_unknown_fields():
    with pytest.raises(KeyError):
        BookRecord().merge({"genre": "Roman"})


def test_report_summary():
    report = RunReport(records=[BookRecord(cover="a.jpg")], output_written=True)
    report.add_failure(BookRecord(isbn="1"), "enrich", ValueError("kaputt"))

    summary = report.summary()

    assert summary["records"] == 1
    assert summary["failures_by_stage"] == {"enrich": 1}
    assert summary["with_cover"] == 1
    assert not report.success
    assert report.failures_for("enrich")[0].message == "kaputt"


def test_translations_require_sections():
    with pytest.raises(ConfigError):
        Translations.from_dict({"binding": {}, "information": {}, "age": {}})


def test_translations_require_messages():
    with pytest.raises(ConfigError):
        Translations.from_dict({"binding": {}, "information": {}, "age": {}, "messages": {}})


def test_translations_are_read_only(translations):
    with pytest.raises(TypeError):
        translations.binding["Gb"] = "anders"


def test_translations_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        Translations.load(tmp_path / "fr.json")
