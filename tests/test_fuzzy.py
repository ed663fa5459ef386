import pytest

from pyffa.search import levenshtein_distance


@pytest.mark.parametrize(
    ("source", "target", "expected"),
    [
        ("kitten", "sitting", 3),
        ("flaw", "lawn", 2),
        ("brady", "bradey", 1),
        ("a", "b", 1),
        ("", "", 0),
    ],
)
def test_levenshtein_distance_known_values(source, target, expected):
    assert levenshtein_distance(source, target) == expected


def test_distance_to_empty_string_is_length():
    assert levenshtein_distance("", "mahomes") == 7
    assert levenshtein_distance("mahomes", "") == 7


def test_identical_strings_have_zero_distance():
    assert levenshtein_distance("kelce", "kelce") == 0


@pytest.mark.parametrize(
    ("source", "target"),
    [("jefferson", "jeferson"), ("chase", "chaser"), ("hill", "hall"), ("", "x")],
)
def test_distance_is_symmetric(source, target):
    assert levenshtein_distance(source, target) == levenshtein_distance(target, source)
