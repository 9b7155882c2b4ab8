"""
Test fixtures package for vesting migration tests.

This package provides factory functions for creating test objects:
- common.py: accounts, windows, trees and a wired engine

Usage:
    from fixtures.common import make_window, make_engine

    def test_something():
        window = make_window(total_amount=10)
        engine, bridge, tree = make_engine([window])
"""

from .common import (
    ADMIN,
    ALICE,
    BOB,
    CAROL,
    DAY,
    T0,
    TOKEN,
    TWO_YEARS,
    make_engine,
    make_tree,
    make_window,
    make_windows,
)

__all__ = [
    "ADMIN",
    "ALICE",
    "BOB",
    "CAROL",
    "DAY",
    "T0",
    "TOKEN",
    "TWO_YEARS",
    "make_engine",
    "make_tree",
    "make_window",
    "make_windows",
]
