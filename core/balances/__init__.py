"""
Module 05 - Balance Collaborator
"""
from .bridge import BalanceBridge, InMemoryBalanceBridge

__all__ = [
    "BalanceBridge",
    "InMemoryBalanceBridge",
]
