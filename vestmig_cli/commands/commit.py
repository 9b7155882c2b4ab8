"""
Module 10 - CLI Commit Command

Build a commitment from a JSON list of vesting windows and write it
(root, leaf ordering, per-claim proofs) to a file.

Usage:
    vestmig commit windows.json --out commitment.json [--allow-duplicates] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from core.schemas.errors import MigrationException
from engine.commitment import build_commitment, load_windows, save_commitment


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


@dataclass
class CommitSummary:
    """Summary of a commitment build for CLI output."""
    windows_path: str = ""
    out_path: str = ""
    root: str = ""
    leaf_count: int = 0
    allow_duplicates: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def print_summary_human(summary: CommitSummary) -> None:
    print(f"windows: {summary.windows_path}")
    print(f"leaves: {summary.leaf_count}")
    print(f"root: {summary.root}")
    print(f"written: {summary.out_path}")


def commit_cmd(args: Namespace) -> int:
    """
    Execute the commit command.

    Returns:
        Exit code
    """
    windows_path = Path(args.windows_path)
    if not windows_path.exists():
        print(f"Error: Windows file not found: {windows_path}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        windows = load_windows(windows_path)
        commitment = build_commitment(windows, allow_duplicates=args.allow_duplicates)
    except MigrationException as e:
        print(f"Error: {e.code}: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except ValueError as e:
        print(f"Error reading windows: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    out = save_commitment(commitment, args.out)
    logger.info(f"Commitment written to {out}")

    summary = CommitSummary(
        windows_path=str(windows_path),
        out_path=str(out),
        root=commitment.root,
        leaf_count=commitment.leaf_count,
        allow_duplicates=commitment.allow_duplicates,
    )
    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)
    return EXIT_SUCCESS
