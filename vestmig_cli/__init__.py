"""
Module 10 - Vesting Migration CLI

Command-line interface for publishing vesting commitments and operating
the migration ledger.

Usage:
    python -m vestmig_cli commit windows.json --out commitment.json
    python -m vestmig_cli proof commitment.json --account 0x...
    python -m vestmig_cli verify commitment.json
    python -m vestmig_cli vested --total 100 --start 0 --end 10 --now 5
    python -m vestmig_cli ledger show
"""

__version__ = "0.1.0"
