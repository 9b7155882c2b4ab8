"""
Module 03 - Vesting Calculator
Pure linear-vesting arithmetic.
"""
from .calculator import claimable, vested_amount

__all__ = [
    "claimable",
    "vested_amount",
]
