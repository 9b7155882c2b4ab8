"""
Module 10 - CLI Proof Command

Print the claims (window, leaf, proof) an account can present.

Usage:
    vestmig proof commitment.json --account 0x... [--json]
"""

from __future__ import annotations

import json
import sys
from argparse import Namespace
from pathlib import Path

from engine.commitment import CommitmentClaim, load_commitment


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def print_claim_human(claim: CommitmentClaim) -> None:
    print(f"[{claim.index}] leaf {claim.leaf}")
    print(f"    amount: {claim.amount}")
    print(f"    window: {claim.timestamp} -> {claim.vested_timestamp}")
    print(f"    proof ({len(claim.proof)}):")
    for sibling in claim.proof:
        print(f"      {sibling}")


def proof_cmd(args: Namespace) -> int:
    """
    Execute the proof command.

    Returns:
        Exit code
    """
    commitment_path = Path(args.commitment_path)
    if not commitment_path.exists():
        print(f"Error: Commitment not found: {commitment_path}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        commitment = load_commitment(commitment_path)
        claims = commitment.claims_for(args.account)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if not claims:
        print(f"Error: No windows for {args.account}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.json:
        data = {
            "root": commitment.root,
            "claims": [c.model_dump(by_alias=True) for c in claims],
        }
        print(json.dumps(data, indent=2))
    else:
        print(f"root: {commitment.root}")
        for claim in claims:
            print_claim_human(claim)
    return EXIT_SUCCESS
