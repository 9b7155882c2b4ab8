"""
Module 01 - Schemas
File: window.py

Purpose: The vesting window record committed to by the Merkle root.

A window is immutable once committed; its identity is its leaf hash.
Field aliases follow the producing tooling (`address`, `amount`,
`timestamp`, `vestedTimestamp`) so input files load unchanged.
"""

from typing import Annotated

from eth_utils import is_hex_address, to_checksum_address
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from core.schemas.errors import InvalidAmountException


UINT256_MAX = 2**256 - 1

UInt256 = Annotated[int, Field(ge=0, le=UINT256_MAX)]


def check_amount(amount: int) -> None:
    """
    Reject anything that is not an integer in the UInt256 range.

    Raises:
        InvalidAmountException: bools, non-integers, negatives, overflows
    """
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidAmountException(amount)
    if amount < 0 or amount > UINT256_MAX:
        raise InvalidAmountException(amount)


def normalize_address(value: str) -> str:
    """
    Validate an EVM address and return its EIP-55 checksum form.

    Raises:
        ValueError: If the value is not a 20-byte hex address
    """
    if not isinstance(value, str) or not is_hex_address(value):
        raise ValueError(f"Invalid EVM address: {value!r}")
    return to_checksum_address(value)


class VestingWindow(BaseModel):
    """
    One (account, total, start, end) vesting schedule.

    `window_end > window_start` is intentionally not enforced here: a
    malformed window must still be representable so the engine can
    reject it with WRONG_PERIOD.
    """

    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    account: str = Field(
        ...,
        validation_alias=AliasChoices("account", "address"),
        serialization_alias="address",
        description="Owner of the window",
    )
    total_amount: UInt256 = Field(
        ...,
        validation_alias=AliasChoices("total_amount", "amount"),
        serialization_alias="amount",
        description="Total base units released over the window",
    )
    window_start: UInt256 = Field(
        ...,
        validation_alias=AliasChoices("window_start", "timestamp", "windowStart"),
        serialization_alias="timestamp",
        description="Unix time vesting begins",
    )
    window_end: UInt256 = Field(
        ...,
        validation_alias=AliasChoices("window_end", "vestedTimestamp", "windowVested"),
        serialization_alias="vestedTimestamp",
        description="Unix time the window is fully vested",
    )

    @field_validator("account")
    @classmethod
    def _checksum_account(cls, v: str) -> str:
        return normalize_address(v)

    def with_account(self, account: str) -> "VestingWindow":
        """Return a copy of this window owned by another account."""
        return VestingWindow(
            account=account,
            total_amount=self.total_amount,
            window_start=self.window_start,
            window_end=self.window_end,
        )

    def to_record(self) -> dict[str, object]:
        """Serialize using the producing tooling's field names."""
        return self.model_dump(by_alias=True)


__all__ = [
    "UINT256_MAX",
    "UInt256",
    "normalize_address",
    "VestingWindow",
]
