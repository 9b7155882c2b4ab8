"""
Module 05 - Balance Collaborator
File: bridge.py

Purpose: The boundary to whatever actually holds input and output
balances. The engine only decides how much may move; a BalanceBridge
moves it.

Contract: `execute_transfer` is all-or-nothing. It either debits the
source's input balance and credits the receiver's output balance by
exactly `amount`, or raises TransferFailedException having changed
nothing. The engine commits its ledger update only after it returns.
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Protocol

from core.schemas.errors import TransferFailedException
from core.schemas.window import check_amount, normalize_address


logger = logging.getLogger(__name__)


class BalanceBridge(Protocol):
    """External balance-holding collaborator."""

    def execute_transfer(self, source: str, receiver: str, amount: int) -> None:
        """Burn `amount` input from `source`, mint `amount` output to `receiver`."""
        ...


class InMemoryBalanceBridge:
    """
    Reference collaborator keeping both balances in memory.

    Mirrors a burn-input / mint-output token manager pair: migrating more
    than the source's input balance fails.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._input: dict[str, int] = {}
        self._output: dict[str, int] = {}

    @classmethod
    def from_seed_file(cls, path: str | Path) -> "InMemoryBalanceBridge":
        """
        Build a bridge whose input balances come from a JSON object mapping
        addresses to base-unit amounts (integers or decimal strings).

        Raises:
            ValueError: unreadable file, non-object payload or bad address
            InvalidAmountException: an amount outside the uint256 range
        """
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ValueError(f"Cannot read balance seed {path}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object in {path}, got {type(data).__name__}")

        bridge = cls()
        for account, raw in data.items():
            amount = int(raw) if isinstance(raw, str) and raw.isdigit() else raw
            bridge.mint_input(account, amount)

        logger.info(f"Seeded {len(data)} input balances from {path}")
        return bridge

    def mint_input(self, account: str, amount: int) -> None:
        check_amount(amount)
        key = normalize_address(account)
        with self._lock:
            self._input[key] = self._input.get(key, 0) + amount

    def input_balance_of(self, account: str) -> int:
        with self._lock:
            return self._input.get(normalize_address(account), 0)

    def output_balance_of(self, account: str) -> int:
        with self._lock:
            return self._output.get(normalize_address(account), 0)

    def execute_transfer(self, source: str, receiver: str, amount: int) -> None:
        check_amount(amount)
        src = normalize_address(source)
        dst = normalize_address(receiver)

        with self._lock:
            balance = self._input.get(src, 0)
            if balance < amount:
                raise TransferFailedException(
                    "Insufficient input balance",
                    details={"source": src, "balance": balance, "amount": amount},
                )
            self._input[src] = balance - amount
            self._output[dst] = self._output.get(dst, 0) + amount

        logger.debug(f"Transferred {amount} from {src} to {dst}")
