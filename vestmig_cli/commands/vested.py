"""
Module 10 - CLI Vested Command

Evaluate the linear vesting formula for one window.

Usage:
    vestmig vested --total N --start S --end E [--now T] [--json]
"""

from __future__ import annotations

import json
import sys
from argparse import Namespace

from core.clock import SystemClock
from core.schemas.errors import MigrationException
from core.vesting.calculator import vested_amount


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def vested_cmd(args: Namespace) -> int:
    now = args.now if args.now is not None else SystemClock().now()
    try:
        amount = vested_amount(args.total, args.start, args.end, now)
    except MigrationException as e:
        print(f"Error: {e.code}: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.json:
        print(json.dumps({
            "total": args.total,
            "start": args.start,
            "end": args.end,
            "now": now,
            "vested": amount,
        }, indent=2))
    else:
        print(amount)
    return EXIT_SUCCESS
