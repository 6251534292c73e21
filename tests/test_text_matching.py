import pytest

from wholesale_store.search.text_matching import levenshtein_distance, normalize_search_term, string_similarity


@pytest.mark.parametrize("raw,expected", [
    ("  USB-C   Cable! ", "usb c cable"),
    ("Smart\tWatch", "smart watch"),
    ("12-hour", "12 hour"),
    ("", ""),
    ("   ", ""),
    ("?!", ""),
])
def test_normalize_search_term(raw, expected):
    assert normalize_search_term(raw) == expected


@pytest.mark.parametrize("source,target,distance", [
    ("kitten", "sitting", 3),
    ("", "abc", 3),
    ("abc", "", 3),
    ("Laptop", "laptop", 0),
    ("headphone", "headphones", 1),
])
def test_levenshtein_distance(source, target, distance):
    assert levenshtein_distance(source, target) == distance


def test_levenshtein_is_symmetric():
    assert levenshtein_distance("speaker", "sneaker") == levenshtein_distance("sneaker", "speaker")


def test_string_similarity():
    assert string_similarity("", "anything") == 0.0
    assert string_similarity("anything", "") == 0.0
    assert string_similarity("WATCH", "watch") == 1.0
    assert string_similarity("headphone", "headphones") == pytest.approx(0.9)
    assert string_similarity("cable", "table") == pytest.approx(0.8)
    assert string_similarity("laptop", "webcam") < 0.7
