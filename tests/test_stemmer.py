import pytest

from fitmark.stemmer import PorterStemmer, measure, stem, stem_all


@pytest.mark.parametrize(
    "word, expected",
    [
        ("running", "run"),
        ("caresses", "caress"),
        ("feed", "feed"),
        ("agreed", "agre"),
        ("ponies", "poni"),
        ("hopping", "hop"),
        ("hoping", "hope"),
        ("relational", "relat"),
        ("generalization", "gener"),
        ("Running", "run"),
    ],
)
def test_stem_known_words(word, expected):
    assert stem(word) == expected


def test_short_words_only_lowercased():
    assert stem("IS") == "is"
    assert stem("") == ""


@pytest.mark.parametrize("word", ["running", "ponies", "relational", "caresses", "feed"])
def test_stem_is_stable_on_its_own_output(word):
    once = stem(word)
    assert stem(once) == once


def test_measure_counts_vowel_consonant_transitions():
    assert measure("tree") == 0
    assert measure("trouble") == 1
    assert measure("oaten") == 2


def test_stem_all_preserves_order_and_length():
    tokens = ["cats", "running", "is"]
    assert PorterStemmer().stem_all(tokens) == ["cat", "run", "is"]
    assert stem_all([]) == []
