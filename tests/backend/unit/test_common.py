"""
Unit tests for key folding and id parsing shared by the services.
"""
import uuid

import pytest

from app.services.common import fold_key, parse_id
from app.services.product_service import parse_log


@pytest.mark.parametrize("left,right", [
    ("Alice", "ALICE"),
    ("José", "jose"),
    ("Crème Brûlée", "creme brulee"),
    ("Straße", "STRASSE"),
])
def test_fold_key_equates_case_and_accents(left, right):
    assert fold_key(left) == fold_key(right)


def test_fold_key_keeps_distinct_words_distinct():
    assert fold_key("Widget") != fold_key("Widgets")
    assert fold_key("a b") != fold_key("ab")


def test_parse_id():
    value = uuid.uuid4()
    assert parse_id(str(value)) == value
    assert parse_id(value) is value
    assert parse_id("u1") is None
    assert parse_id(None) is None


def test_parse_log_tolerates_missing_or_malformed_log():
    assert parse_log(None) == []
    assert parse_log([]) == []
    entries = parse_log([{"userId": "u1", "amount": 2, "operationTime": "2024-01-01T00:00:00Z"}, 7])
    assert [e.amount for e in entries] == [2]


def test_parse_log_skips_non_finite_amounts():
    raw = [
        {"userId": "u1", "amount": float("nan"), "operationTime": "2024-01-01T00:00:00Z"},
        {"userId": "u1", "amount": 1.5, "operationTime": "2024-01-01T00:00:00Z"},
    ]
    assert [e.amount for e in parse_log(raw)] == [1.5]
