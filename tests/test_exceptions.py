"""Tests for the exception hierarchy."""

from __future__ import annotations

from catalog_specifications import (
    CriteriaError,
    CriteriaValidationError,
    OperatorNotFoundError,
    QueryTranslationError,
    SpecificationError,
    UnknownCriteriaError,
    ValidationError,
)


def test_hierarchy():
    for exc_type in (
        ValidationError,
        OperatorNotFoundError,
        QueryTranslationError,
        CriteriaError,
    ):
        assert issubclass(exc_type, SpecificationError)
    assert issubclass(UnknownCriteriaError, CriteriaError)
    assert issubclass(CriteriaValidationError, CriteriaError)


def test_validation_error_to_dict():
    err = ValidationError("bad node", path="<root>.conditions[0]")
    assert err.to_dict() == {
        "error": "VALIDATION_ERROR",
        "message": "bad node",
        "path": "<root>.conditions[0]",
    }


def test_operator_not_found_suggestions():
    err = OperatorNotFoundError("ieqq", ["=", "ieq", "in"])
    assert err.suggestions[0] == "ieq"
    assert "Did you mean: ieq" in str(err)
    assert err.to_dict()["error"] == "OPERATOR_NOT_FOUND"


def test_operator_not_found_without_suggestions():
    err = OperatorNotFoundError("zzz", ["=", "in"])
    assert err.suggestions == []
    assert "Did you mean" not in str(err)


def test_base_to_dict():
    err = QueryTranslationError("cannot compile")
    assert err.to_dict() == {
        "error": "QueryTranslationError",
        "message": "cannot compile",
    }


def test_unknown_criteria_message():
    err = UnknownCriteriaError(["colour", "maxprice"], ["max_price", "tag"])
    text = str(err)
    assert text.startswith("Unknown search criteria: 'colour', 'maxprice'.")
    assert "  • max_price" in text
    assert text.endswith("Known criteria: max_price, tag")
    assert err.to_dict() == {
        "error": "UNKNOWN_CRITERIA",
        "fields": ["colour", "maxprice"],
        "suggestions": {"colour": [], "maxprice": ["max_price"]},
        "known_fields": ["max_price", "tag"],
    }


def test_criteria_validation_error_to_dict():
    err = CriteriaValidationError({"max_price": ["Input should be a valid number"]})
    assert err.to_dict()["errors"] == {
        "max_price": ["Input should be a valid number"]
    }
