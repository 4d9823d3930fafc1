# tests/test_normalizer.py
import pytest

from booklist.normalizer import FieldNormalizer, split_information


@pytest.fixture
def normalizer(translations):
    return FieldNormalizer(translations)


def test_split_prefers_semicolons():
    assert split_information("Mit Illustrationen; 6-8 J.; 32 S.; 2019") == [
        "Mit Illustrationen", "6-8 J.", "32 S.", "2019"
    ]


def test_split_falls_back_to_periods():
    assert split_information("Pappbilderbuch. 2020") == ["Pappbilderbuch", "2020"]


def test_split_drops_empty_tokens():
    assert split_information("Gedichte;; 2018; ") == ["Gedichte", "2018"]


def test_example_information_string(normalizer):
    info = normalizer.normalize_information("Mit Illustrationen; 6-8 J.; 32 S.; 2019")

    assert info.description == "Mit Illustrationen."
    assert info.age_rating == "6 bis 8 Jahren"
    assert info.page_count == 32
    assert info.year == "2019"


@pytest.mark.parametrize("token, expected", [
    ("ab 4 J.", "ab 4 Jahren"),
    ("18 Mon. u. älter", "18 Monaten & älter"),
    ("10-12 J.", "10 bis 12 Jahren"),
])
def test_age_labels_are_spelled_out(normalizer, token, expected):
    age = normalizer.normalize([token]).age_rating

    assert age == expected
    assert "J." not in age
    assert "Mon." not in age


def test_defaults_without_matching_tokens(normalizer, translations):
    info = normalizer.normalize([])

    assert info.age_rating == translations.no_age_rating
    assert info.year == ""
    assert info.page_count is None
    assert info.description == ""


def test_dimension_fragments_are_discarded(normalizer):
    info = normalizer.normalize(["24 x 30 cm", "5 mm", "Gedichte"])
    assert info.description == "Gedichte."


def test_first_matching_rule_wins(normalizer):
    # Both tokens are four characters long, but match an earlier rule
    info = normalizer.normalize(["2 cm", "8 S."])

    assert info.year == ""
    assert info.page_count == 8
    assert info.description == ""


def test_four_character_token_is_year(normalizer):
    assert normalizer.normalize(["Roman", "1999"]).year == "1999"


def test_page_count_without_number(normalizer):
    assert normalizer.normalize(["ca. S. 12"]).page_count is None


def test_description_uses_substitution_table(normalizer):
    info = normalizer.normalize(["m. farb. Abb.", "Großdr."])
    assert info.description == "Mit farbigen Abbildungen, Großdruck."


def test_description_trailing_periods_collapse(normalizer):
    assert normalizer.normalize(["Bilderbuch..."]).description == "Bilderbuch."


def test_unknown_tokens_pass_through(normalizer):
    assert normalizer.normalize(["unbekanntes Kürzel xyz"]).description == "Unbekanntes Kürzel xyz."
