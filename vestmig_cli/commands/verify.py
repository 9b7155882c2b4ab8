"""
Module 10 - CLI Verify Command

Recheck a commitment offline: recompute every claim's leaf from its
window fields and fold its proof back to the published root.

Usage:
    vestmig verify commitment.json [--leaf 0x...] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from core.schemas.errors import LeafNotFoundException
from engine.commitment import load_commitment


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass
class VerifySummary:
    """Summary of commitment verification for CLI output."""
    commitment_path: str = ""
    root: str = ""
    checked: int = 0
    failed: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["ok"] = self.all_ok
        return d

    @property
    def all_ok(self) -> bool:
        return not self.failed


def print_summary_human(summary: VerifySummary) -> None:
    print(f"commitment: {summary.commitment_path}")
    print(f"root: {summary.root}")
    print(f"checked: {summary.checked}")
    if summary.failed:
        print(f"\nfailed ({len(summary.failed)}):")
        for leaf in summary.failed[:20]:
            print(f"  ✗ {leaf}")
    else:
        print("ok: true")


def verify_cmd(args: Namespace) -> int:
    """
    Execute the verify command.

    Returns:
        Exit code (2 if any claim fails to verify)
    """
    commitment_path = Path(args.commitment_path)
    if not commitment_path.exists():
        print(f"Error: Commitment not found: {commitment_path}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        commitment = load_commitment(commitment_path)
        if args.leaf:
            claims = [commitment.claim_for_leaf(args.leaf)]
        else:
            claims = list(commitment.claims)
    except LeafNotFoundException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except ValueError as e:
        print(f"Error loading commitment: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    summary = VerifySummary(commitment_path=str(commitment_path), root=commitment.root)
    for claim in claims:
        summary.checked += 1
        if not commitment.verify_claim(claim):
            logger.warning(f"Claim {claim.index} does not verify: {claim.leaf}")
            summary.failed.append(claim.leaf)

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)

    return EXIT_SUCCESS if summary.all_ok else EXIT_VERIFICATION_FAILED
