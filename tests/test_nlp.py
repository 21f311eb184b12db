import re

import pytest

from string_analyzer.errors import UnparseablePhraseError
from string_analyzer.NLP import RECOGNIZERS, Recognizer, interpret_nl_query


def _parsed(q):
    return interpret_nl_query(q).parsed_filters.applied()


def test_single_word_palindromic():
    q = "all single word palindromic strings"
    res = interpret_nl_query(q)
    assert res.original == q
    assert res.parsed_filters.word_count == 1
    assert res.parsed_filters.is_palindrome is True


def test_one_word():
    assert _parsed("one word strings") == {"word_count": 1}


def test_word_count_is_one():
    assert _parsed("strings whose word count is 1") == {"word_count": 1}


def test_numeric_word_count_overrides_single():
    assert _parsed("single strings with 3 words") == {"word_count": 3}


def test_strings_longer_than_10():
    # longer than 10 => min_length = 11
    assert _parsed("strings longer than 10") == {"min_length": 11}


@pytest.mark.parametrize("q", ["strings shorter than 5", "strings less than 5 characters"])
def test_shorter_or_less_than(q):
    assert _parsed(q) == {"max_length": 4}


def test_palindromes_containing_letter():
    assert _parsed("palindromes that contain the letter a") == {
        "is_palindrome": True,
        "contains_character": "a",
    }


@pytest.mark.parametrize("q", [
    "strings containing the letter z",
    "strings that contains z",
    "strings containing letter Z",
])
def test_contains_letter_variants(q):
    assert _parsed(q) == {"contains_character": "z"}


def test_case_insensitive_phrase():
    assert _parsed("PALINDROMES LONGER THAN 3") == {"is_palindrome": True, "min_length": 4}


def test_conflicting_bounds_flagged():
    res = interpret_nl_query("longer than 10 and shorter than 5")
    assert res.parsed_filters.min_length == 11
    assert res.parsed_filters.max_length == 4
    assert res.conflicting is True


def test_consistent_bounds_not_flagged():
    res = interpret_nl_query("longer than 2 and shorter than 8")
    assert res.conflicting is False


def test_matched_recognizers_are_reported_in_order():
    res = interpret_nl_query("palindromes longer than 3 containing the letter e")
    assert res.matched == ["palindrome", "longer_than", "contains_letter"]


def test_to_dict_echoes_original_phrase():
    res = interpret_nl_query("Palindromes")
    assert res.to_dict() == {"original": "Palindromes", "parsed_filters": {"is_palindrome": True}}


@pytest.mark.parametrize("q", ["", "show me everything", "longer strings please"])
def test_unparseable(q):
    with pytest.raises(UnparseablePhraseError):
        interpret_nl_query(q)


def test_non_string_query():
    with pytest.raises(TypeError):
        interpret_nl_query(None)


def test_later_recognizers_win_on_collision():
    x = re.compile("x")
    first = Recognizer("first", x.search, lambda m: {"min_length": 1})
    second = Recognizer("second", x.search, lambda m: {"min_length": 9})
    res = interpret_nl_query("x", recognizers=[first, second])
    assert res.parsed_filters.min_length == 9


def test_recognizers_are_ordered():
    assert [r.name for r in RECOGNIZERS] == [
        "palindrome",
        "word_count",
        "longer_than",
        "shorter_than",
        "contains_letter",
    ]
