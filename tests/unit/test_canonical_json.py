"""
Module 01 - Schemas & Canonicalization
File: tests/unit/test_canonical_json.py

Purpose: Unit tests for canonical JSON serialization, schema versioning
and the error taxonomy.
"""

import json
from enum import Enum

import pytest

from core.schemas import (
    CanonicalizationException,
    ClaimTooLargeException,
    ErrorCodes,
    MigrationError,
    MigrationException,
    ProofInvalidException,
    UnsupportedSchemaVersionError,
    assert_supported_schema_version,
    canonicalize_value,
    dumps_canonical,
    is_compatible_schema_version,
    loads_canonical,
)

from fixtures.common import ALICE, make_window


class SampleEnum(str, Enum):
    """Sample enum for testing."""
    OPTION_A = "option_a"


class TestDumpsCanonical:
    """Tests for dumps_canonical()."""

    def test_sorted_compact(self):
        assert dumps_canonical({"b": 1, "a": [2, 3]}) == '{"a":[2,3],"b":1}'

    def test_key_order_irrelevant(self):
        assert dumps_canonical({"x": 1, "y": 2}) == dumps_canonical({"y": 2, "x": 1})

    def test_bytes_as_hex(self):
        assert dumps_canonical({"leaf": b"\x01\xff"}) == '{"leaf":"0x01ff"}'

    def test_large_integers_survive(self):
        value = 2**256 - 1
        assert loads_canonical(dumps_canonical({"v": value}))["v"] == value

    def test_model_uses_aliases(self):
        data = json.loads(dumps_canonical(make_window(total_amount=5, window_start=1, window_end=2)))
        assert data == {"address": ALICE, "amount": 5, "timestamp": 1, "vestedTimestamp": 2}

    def test_indent(self):
        assert dumps_canonical({"a": 1}, indent=2) == '{\n  "a": 1\n}'

    def test_enum_value(self):
        assert canonicalize_value(SampleEnum.OPTION_A) == "option_a"


class TestCanonicalizationErrors:
    """Values that cannot be canonicalized."""

    def test_float_rejected(self):
        with pytest.raises(CanonicalizationException) as exc_info:
            dumps_canonical({"amount": 1.5})
        assert exc_info.value.details["path"] == "amount"

    def test_nested_float_path(self):
        with pytest.raises(CanonicalizationException) as exc_info:
            canonicalize_value({"a": [1, 2.0]})
        assert exc_info.value.details["path"] == "a[1]"

    def test_unknown_type_rejected(self):
        with pytest.raises(CanonicalizationException):
            dumps_canonical({"s": {1, 2}})


class TestSchemaVersion:
    """Tests for versioning helpers."""

    def test_supported(self):
        assert is_compatible_schema_version("v1")
        assert_supported_schema_version("v1")

    def test_unsupported(self):
        assert not is_compatible_schema_version("v2")
        with pytest.raises(UnsupportedSchemaVersionError, match="v2"):
            assert_supported_schema_version("v2")


class TestErrorTaxonomy:
    """Tests for MigrationException and MigrationError."""

    def test_round_trip_through_model(self):
        exc = ClaimTooLargeException(1000, 50)
        model = exc.to_error_model()

        assert isinstance(model, MigrationError)
        assert model.code == ErrorCodes.CLAIM_AMOUNT_TOO_LARGE
        assert model.retryable is False

        again = model.to_exception()
        assert isinstance(again, MigrationException)
        assert again.code == exc.code
        assert again.details == {"requested": 1000, "allowance": 50}

    def test_proof_invalid_message(self):
        exc = ProofInvalidException("0xabc")
        assert str(exc) == "MERKLE_PROOF_FAILED"
        assert exc.details == {"leaf": "0xabc"}
        assert "ProofInvalidException" in repr(exc)

    def test_details_not_shared(self):
        shared = {"context": "x"}
        ClaimTooLargeException(1, 0, details=shared)
        first = ProofInvalidException()
        second = ProofInvalidException()
        assert first.details is not second.details
        assert first.details == {}
