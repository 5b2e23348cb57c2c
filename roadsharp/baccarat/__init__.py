"""
Baccarat game implementation.

This module provides the Baccarat drawing rules, round resolution and a
shoe-level game that keeps the road charts up to date.
"""

from roadsharp.baccarat.game import BaccaratGame, resolve_round, verify_round
from roadsharp.baccarat.hand import BaccaratHand
from roadsharp.baccarat.rules import BaccaratRules

__all__ = [
    "BaccaratGame",
    "BaccaratHand",
    "BaccaratRules",
    "resolve_round",
    "verify_round",
]
