"""
app/test_normalize.py

Normalizer: candidate dict -> fully defaulted PropertyQuery.

Run: pytest app/test_normalize.py -v
"""

import math

import pytest

from app.normalize import normalize, to_number
from app.schemas import PropertyQuery, query_defaults

DEFAULTS = {"min_price": 1_000_000, "max_price": 30_000_000, "bedrooms": 1, "bathrooms": 1}


def test_partial_candidate_is_overlaid_on_defaults():
    q = normalize({"bedrooms": 3, "max_price": 2_000_000})
    assert q.model_dump() == {"min_price": 1_000_000, "max_price": 2_000_000, "bedrooms": 3, "bathrooms": 1}


def test_empty_candidate_gives_all_defaults():
    assert normalize({}).model_dump() == DEFAULTS
    assert query_defaults() == DEFAULTS


@pytest.mark.parametrize("candidate", [
    None,
    {},
    [],
    "3 bedrooms",
    42,
    {"min_price": None, "max_price": None, "bedrooms": None, "bathrooms": None},
    {"min_price": "cheap", "max_price": "", "bedrooms": "three", "bathrooms": {"n": 2}},
    {"min_price": float("nan"), "max_price": float("inf"), "bedrooms": [], "bathrooms": object()},
])
def test_normalize_is_total(candidate):
    q = normalize(candidate)
    assert isinstance(q, PropertyQuery)
    for name, value in q.model_dump().items():
        assert isinstance(value, (int, float)) and not isinstance(value, bool), name
        assert math.isfinite(value)
    assert q.model_dump() == DEFAULTS


def test_zero_is_treated_as_unspecified():
    q = normalize({"bathrooms": 0, "min_price": 0})
    assert q.bathrooms == 1
    assert q.min_price == 1_000_000


def test_negative_values_fall_back_to_default():
    q = normalize({"bedrooms": -2, "max_price": -5})
    assert q.bedrooms == 1
    assert q.max_price == 30_000_000


def test_numeric_strings_are_coerced():
    q = normalize({"min_price": "$1,500,000", "max_price": " 2500000 ", "bedrooms": "4", "bathrooms": "2.0"})
    assert q.min_price == 1_500_000
    assert q.max_price == 2_500_000
    assert q.bedrooms == 4 and isinstance(q.bedrooms, int)
    assert q.bathrooms == 2 and isinstance(q.bathrooms, int)


def test_fractional_counts_fall_back_to_default():
    q = normalize({"bedrooms": 2.5, "bathrooms": 1.5})
    assert q.bedrooms == 1
    assert q.bathrooms == 1


def test_property_query_input_is_accepted():
    q = normalize(PropertyQuery(bedrooms=5, bathrooms=3))
    assert q.bedrooms == 5 and q.bathrooms == 3
    assert q.min_price == 1_000_000


def test_contradictory_bounds_pass_through():
    q = normalize({"min_price": 3_000_000, "max_price": 2_000_000})
    assert q.min_price == 3_000_000
    assert q.max_price == 2_000_000


@pytest.mark.parametrize("raw,expected", [
    (3, 3.0),
    (2.5, 2.5),
    (True, 1.0),
    (False, 0.0),
    ("1,200", 1200.0),
    ("$900000", 900000.0),
    ("", None),
    ("abc", None),
    (None, None),
    (float("nan"), None),
    ({"x": 1}, None),
])
def test_to_number(raw, expected):
    assert to_number(raw) == expected


def test_only_usable_values_count_as_set():
    q = normalize({"bedrooms": 3, "bathrooms": 0, "max_price": "n/a"})
    assert q.model_fields_set == {"bedrooms"}
    assert normalize(None).model_fields_set == set()
