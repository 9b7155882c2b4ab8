"""
Module 02 - Leaf Encoding Unit Tests
Tests for core/merkle/leaf.py and core/schemas/window.py

Tests:
- Packed layout: 20-byte address + three 32-byte big-endian integers
- Leaf is keccak256 of the packed bytes
- Address case does not change the leaf
- Window field aliases and range validation
"""
import pytest
from pydantic import ValidationError

from core.crypto.hashing import keccak256
from core.merkle.leaf import ENCODED_WINDOW_LENGTH, encode_window, window_leaf
from core.schemas.window import UINT256_MAX, VestingWindow, normalize_address

from fixtures.common import ALICE, BOB, T0, TOKEN, TWO_YEARS, make_window


class TestEncodeWindow:
    """Tests for the packed window encoding."""

    def test_length(self):
        assert ENCODED_WINDOW_LENGTH == 116
        assert len(encode_window(make_window())) == 116

    def test_layout(self):
        window = make_window(total_amount=5, window_start=7, window_end=9)
        encoded = encode_window(window)

        assert encoded[:20] == bytes.fromhex(ALICE[2:])
        assert encoded[20:52] == (5).to_bytes(32, "big")
        assert encoded[52:84] == (7).to_bytes(32, "big")
        assert encoded[84:116] == (9).to_bytes(32, "big")

    def test_max_values_fit(self):
        window = make_window(total_amount=UINT256_MAX, window_start=0, window_end=UINT256_MAX)
        assert len(encode_window(window)) == 116


class TestWindowLeaf:
    """Tests for window_leaf()."""

    def test_leaf_is_keccak_of_encoding(self):
        window = make_window()
        assert window_leaf(window) == keccak256(encode_window(window))

    def test_address_case_irrelevant(self):
        lower = "0xaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaa"
        upper = "0x" + "A" * 40
        assert window_leaf(make_window(account=lower)) == window_leaf(make_window(account=upper))

    @pytest.mark.parametrize("field,value", [
        ("account", BOB),
        ("total_amount", 100 * TOKEN + 5),
        ("window_start", T0 + 1),
        ("window_end", T0 + TWO_YEARS + 1),
    ])
    def test_every_field_changes_leaf(self, field, value):
        base = make_window()
        changed = base.model_copy(update={field: value})
        assert window_leaf(changed) != window_leaf(base)


class TestVestingWindow:
    """Tests for the VestingWindow model."""

    def test_tooling_aliases(self):
        window = VestingWindow.model_validate({
            "address": ALICE,
            "amount": 10,
            "timestamp": 1,
            "vestedTimestamp": 2,
        })
        assert window.account == ALICE
        assert window.total_amount == 10
        assert window.window_start == 1
        assert window.window_end == 2

    def test_fixture_aliases(self):
        window = VestingWindow.model_validate({
            "address": ALICE,
            "amount": 10,
            "windowStart": 1,
            "windowVested": 2,
        })
        assert (window.window_start, window.window_end) == (1, 2)

    def test_to_record_uses_tooling_names(self):
        record = make_window(total_amount=3, window_start=1, window_end=2).to_record()
        assert record == {
            "address": ALICE,
            "amount": 3,
            "timestamp": 1,
            "vestedTimestamp": 2,
        }

    def test_extra_keys_ignored(self):
        window = VestingWindow.model_validate({
            "address": ALICE,
            "amount": 10,
            "timestamp": 1,
            "vestedTimestamp": 2,
            "leaf": "0x00",
        })
        assert window.total_amount == 10

    def test_account_checksummed(self):
        window = make_window(account="0x" + "a" * 40)
        assert window.account == normalize_address("0x" + "a" * 40)
        assert window.account != "0x" + "a" * 40

    def test_invalid_address_rejected(self):
        with pytest.raises(ValidationError):
            make_window(account="0x1234")

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError):
            make_window(total_amount=-1)

    def test_amount_above_uint256_rejected(self):
        with pytest.raises(ValidationError):
            make_window(total_amount=UINT256_MAX + 1)

    def test_empty_period_representable(self):
        """end <= start is left for the engine to reject."""
        window = make_window(window_start=10, window_end=10)
        assert window.window_end == window.window_start

    def test_frozen(self):
        window = make_window()
        with pytest.raises(ValidationError):
            window.total_amount = 1

    def test_with_account(self):
        window = make_window()
        moved = window.with_account(BOB)
        assert moved.account == BOB
        assert moved.total_amount == window.total_amount
        assert window.account == ALICE


class TestNormalizeAddress:
    """Tests for normalize_address()."""

    def test_rejects_non_hex(self):
        with pytest.raises(ValueError, match="Invalid EVM address"):
            normalize_address("alice")

    def test_rejects_non_string(self):
        with pytest.raises(ValueError):
            normalize_address(None)
