"""
CLI command modules.
"""

from vestmig_cli.commands import commit, ledger, proof, verify, vested

__all__ = ["commit", "ledger", "proof", "verify", "vested"]
