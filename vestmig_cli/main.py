"""
Module 10 - CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m vestmig_cli commit <windows.json> --out commitment.json [--allow-duplicates]
    python -m vestmig_cli proof <commitment.json> --account 0x...
    python -m vestmig_cli verify <commitment.json> [--leaf 0x...]
    python -m vestmig_cli vested --total N --start S --end E [--now T]
    python -m vestmig_cli ledger publish-root 0x...
    python -m vestmig_cli ledger grant 0x... 1000
    python -m vestmig_cli ledger show [--leaf 0x...] [--account 0x...]
    python -m vestmig_cli config --init

Environment Variables:
    VESTMIG_LEDGER_BACKEND       Ledger backend: memory or json
    VESTMIG_LEDGER_PATH          JSON ledger file
    VESTMIG_ENFORCE_PERMISSIONS  Require admin roles (true/false)
    VESTMIG_ADMINS               Comma-separated admin addresses
    VESTMIG_LOG_LEVEL            Log level (default: INFO)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from core.config.runtime import get_default_config_template, load_runtime_config
from vestmig_cli.commands import commit, ledger, proof, verify, vested


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="vestmig",
        description="Vesting migration CLI - Publish vesting commitments, check proofs and manage the ledger.",
    )
    parser.add_argument(
        "--version", action="version", version="%(prog)s 0.1.0"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./vestmig.json or ~/.config/vestmig/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- commit command ---
    commit_parser = subparsers.add_parser(
        "commit",
        help="Build a commitment from a windows file",
        description="Hash every window, build the Merkle tree and write the root with all proofs.",
    )
    commit_parser.add_argument(
        "windows_path",
        type=str,
        help="JSON list of {address, amount, timestamp, vestedTimestamp}",
    )
    commit_parser.add_argument(
        "--out", "-o",
        type=str,
        required=True,
        help="Output path for the commitment JSON",
    )
    commit_parser.add_argument(
        "--allow-duplicates",
        action="store_true",
        default=False,
        help="Accept identical windows (they will share one ledger entry)",
    )
    commit_parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON summary",
    )
    commit_parser.set_defaults(func=commit.commit_cmd)

    # --- proof command ---
    proof_parser = subparsers.add_parser(
        "proof",
        help="Show the claims and proofs for an account",
    )
    proof_parser.add_argument("commitment_path", type=str, help="Commitment JSON file")
    proof_parser.add_argument("--account", "-a", type=str, required=True, help="Claimant address")
    proof_parser.add_argument("--json", action="store_true", default=False, help="JSON output")
    proof_parser.set_defaults(func=proof.proof_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Recheck a commitment offline",
        description="Recompute each claim's leaf and fold its proof back to the root.",
    )
    verify_parser.add_argument("commitment_path", type=str, help="Commitment JSON file")
    verify_parser.add_argument("--leaf", type=str, default=None, help="Only check this leaf")
    verify_parser.add_argument("--json", action="store_true", default=False, help="JSON output")
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- vested command ---
    vested_parser = subparsers.add_parser(
        "vested",
        help="Compute the vested amount of a window",
    )
    vested_parser.add_argument("--total", type=int, required=True, help="Window total (base units)")
    vested_parser.add_argument("--start", type=int, required=True, help="Window start (unix seconds)")
    vested_parser.add_argument("--end", type=int, required=True, help="Window end (unix seconds)")
    vested_parser.add_argument("--now", type=int, default=None, help="Evaluation time (default: now)")
    vested_parser.add_argument("--json", action="store_true", default=False, help="JSON output")
    vested_parser.set_defaults(func=vested.vested_cmd)

    # --- ledger command ---
    ledger_parser = subparsers.add_parser(
        "ledger",
        help="Administer the configured ledger",
    )
    ledger_subparsers = ledger_parser.add_subparsers(dest="ledger_command", help="Ledger operation")

    publish_parser = ledger_subparsers.add_parser("publish-root", help="Replace the active root")
    publish_parser.add_argument("root", type=str, help="0x-hex 32-byte root")
    publish_parser.add_argument("--sender", type=str, default=None, help="Administrator address")
    publish_parser.set_defaults(func=ledger.publish_root_cmd)

    grant_parser = ledger_subparsers.add_parser("grant", help="Increase a non-vested allowance")
    grant_parser.add_argument("account", type=str, help="Account address")
    grant_parser.add_argument("amount", type=int, help="Amount to add (base units)")
    grant_parser.add_argument("--sender", type=str, default=None, help="Administrator address")
    grant_parser.set_defaults(func=ledger.grant_cmd)

    show_parser = ledger_subparsers.add_parser("show", help="Print ledger state")
    show_parser.add_argument("--leaf", type=str, default=None, help="Show one window's migrated total")
    show_parser.add_argument("--account", type=str, default=None, help="Show one account's allowance")
    show_parser.add_argument("--json", action="store_true", default=False, help="JSON output")
    show_parser.set_defaults(func=ledger.show_cmd)

    ledger_parser.set_defaults(func=lambda args: ledger_parser.print_help() or EXIT_SUCCESS)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="vestmig.json",
        help="Path for config file (default: vestmig.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("\nEdit this file to configure your settings.")
        print("You can also use environment variables (VESTMIG_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.runtime_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    # Default: show help
    print("Usage: vestmig config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=verification failed)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = load_runtime_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # Setup logging
    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    # Attach config to args for commands to use
    args.runtime_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if log_level.upper() == "DEBUG":
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
