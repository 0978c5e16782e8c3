"""
Tests for JSON extraction, lenient parsing and rounding.
"""

import pytest

from challenge_solver.exceptions import JSONExtractionError, JSONRepairError
from challenge_solver.utils.json_extraction import (
    extract_json_object,
    format_answer,
    parse_lenient_json,
    repair_json,
    round10,
)


def test_extracts_object_from_noise():
    """Test extraction of an object surrounded by prose."""
    text = 'noise {"reasoning":"x","solution":4} trailing'
    assert parse_lenient_json(extract_json_object(text)) == {"reasoning": "x", "solution": 4}


def test_extracts_nested_object_whole():
    """Test that a nested object does not truncate the outer one."""
    text = 'Respuesta: {"data": {"peso": 6}, "solution": 6} fin'
    assert extract_json_object(text) == '{"data": {"peso": 6}, "solution": 6}'


def test_braces_inside_strings_are_ignored():
    text = '{"reasoning": "usé la fórmula {a} + }", "solution": 1}'
    assert parse_lenient_json(extract_json_object(text))["solution"] == 1


def test_first_object_wins():
    text = '{"solution": 1} y luego {"solution": 2}'
    assert extract_json_object(text) == '{"solution": 1}'


def test_missing_object_raises():
    with pytest.raises(JSONExtractionError):
        extract_json_object("no hay json aquí")


def test_unbalanced_object_raises():
    with pytest.raises(JSONExtractionError):
        extract_json_object('{"solution": 4')


def test_repairs_single_quotes_and_bare_keys():
    """Test the repair pass on JavaScript-style object literals."""
    parsed = parse_lenient_json("{reasoning: 'porque sí', solution: 6}")
    assert parsed == {"reasoning": "porque sí", "solution": 6}


def test_repair_keeps_apostrophes_in_double_quoted_strings():
    parsed = parse_lenient_json('{"reasoning": "it\'s Luke\'s mass", solution: 77}')
    assert parsed == {"reasoning": "it's Luke's mass", "solution": 77}


def test_repair_quotes_bare_scalar_values():
    """Test that bare words become strings while literals stay untouched."""
    assert parse_lenient_json('{"reasoning": "x", "solution": abc}') == {"reasoning": "x", "solution": "abc"}
    assert parse_lenient_json("{solution: null, ok: true}") == {"solution": None, "ok": True}


def test_repair_leaves_valid_json_equivalent():
    text = '{"reasoning": "a, b: c", "solution": -1.5e3}'
    assert parse_lenient_json(repair_json(text)) == parse_lenient_json(text)


def test_unrepairable_json_raises():
    with pytest.raises(JSONRepairError):
        parse_lenient_json('{"solution": 4,,}')


def test_non_object_json_raises():
    with pytest.raises(JSONRepairError):
        parse_lenient_json("[1, 2, 3]")


def test_round10_one_third():
    assert round10(1 / 3) == 0.3333333333


def test_round10_negative_rounds_half_up():
    assert round10(-1 / 3) == -0.3333333333


def test_round10_integer_serializes_with_ten_decimals():
    assert format_answer(round10(2)) == "2.0000000000"


def test_round10_huge_value_is_returned_unchanged():
    assert round10(1e300) == 1e300
    assert round10(-1e300) == -1e300
