"""Tests for call argument tokenizing."""

import pytest
from unittest.mock import Mock
from autoparse.lib.parser.arguments import ArgumentTokenizer, args_split, string_unescape


@pytest.fixture
def references():
    return Mock(return_value="resolved")


@pytest.fixture
def tokenizer(references):
    return ArgumentTokenizer(reference_resolve=references)


def test_quoted_commas_do_not_split(tokenizer):
    assert tokenizer.tokenize("'a,b', 2, true") == ["a,b", 2, True]


def test_split_tracks_quote_types_independently():
    assert args_split("\"it's, fine\", 'say \"hi, there\"'") == [
        "\"it's, fine\"",
        " 'say \"hi, there\"'",
    ]


def test_empty_input_yields_no_arguments(tokenizer):
    assert tokenizer.tokenize("") == []
    assert tokenizer.tokenize("   ") == []


def test_escaped_quote_inside_string(tokenizer):
    assert tokenizer.tokenize(r"'don\'t, stop', 1") == ["don't, stop", 1]


def test_unescape_drops_backslashes():
    assert string_unescape(r"a\\b\"c") == 'a\\b"c'


def test_numbers(tokenizer):
    assert tokenizer.tokenize("1, -3, 1.5, 2e3") == [1, -3, 1.5, 2000.0]


def test_booleans_and_null_case_insensitive(tokenizer):
    assert tokenizer.tokenize("TRUE, False, NULL, null") == [True, False, None, None]


def test_unrecognized_tokens_become_none(tokenizer):
    assert tokenizer.tokenize("bogus, , nan") == [None, None, None]


def test_variable_reference_resolved_eagerly(tokenizer, references):
    assert tokenizer.tokenize("session:user:name, 'x'") == ["resolved", "x"]
    references.assert_called_once_with("session", ["user", "name"])


def test_reference_requires_lowercase_source(tokenizer, references):
    assert tokenizer.tokenize("Session:user") == [None]
    references.assert_not_called()


def test_quoted_reference_is_a_string(tokenizer, references):
    assert tokenizer.tokenize("'session:user'") == ["session:user"]
    references.assert_not_called()


def test_lone_quote_is_empty_string(tokenizer):
    assert tokenizer.tokenize("'") == [""]
    assert tokenizer.tokenize('"') == [""]
