"""
Module 10 - CLI Ledger Commands

Administrative operations against the configured ledger:
- publish-root: replace the active vesting window root
- grant: increase an account's non-vested allowance
- show: print the ledger, one leaf or one account

Usage:
    vestmig ledger publish-root 0x... [--sender 0x...]
    vestmig ledger grant 0x... 1000 [--sender 0x...]
    vestmig ledger show [--leaf 0x...] [--account 0x...] [--json]
"""

from __future__ import annotations

import json
import sys
from argparse import Namespace
from typing import Any

from core.balances.bridge import InMemoryBalanceBridge
from core.config.runtime import RuntimeConfig
from core.crypto.hashing import normalize_hash, to_hex
from core.schemas.errors import MigrationException
from engine.migration_engine import MigrationEngine


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def _engine(args: Namespace) -> MigrationEngine:
    config: RuntimeConfig = args.runtime_config
    # Administrative commands never move balances.
    return MigrationEngine.from_config(config, InMemoryBalanceBridge())


def publish_root_cmd(args: Namespace) -> int:
    try:
        engine = _engine(args)
        engine.set_vesting_window_merkle_root(args.root, sender=args.sender)
    except MigrationException as e:
        print(f"Error: {e.code}: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    print(f"root: {to_hex(engine.active_root)}")
    return EXIT_SUCCESS


def grant_cmd(args: Namespace) -> int:
    try:
        engine = _engine(args)
        total = engine.increase_non_vested(args.account, args.amount, sender=args.sender)
    except MigrationException as e:
        print(f"Error: {e.code}: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    print(f"allowance: {total}")
    return EXIT_SUCCESS


def show_cmd(args: Namespace) -> int:
    try:
        engine = _engine(args)
        root = engine.active_root
        data: dict[str, Any] = {"active_root": to_hex(root) if root is not None else None}
        if args.leaf:
            leaf = normalize_hash(args.leaf)
            data["leaf"] = to_hex(leaf)
            data["migrated"] = engine.amount_migrated_from_window(leaf)
        if args.account:
            data["account"] = args.account
            data["non_vested"] = engine.non_vested_amounts(args.account)
        if not args.leaf and not args.account:
            data = engine.ledger.snapshot().model_dump()
    except MigrationException as e:
        print(f"Error: {e.code}: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.json:
        print(json.dumps(data, indent=2))
    else:
        for key, value in data.items():
            print(f"{key}: {value}")
    return EXIT_SUCCESS
