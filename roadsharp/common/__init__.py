"""
Shared building blocks: cards, decks, card sources and error types.
"""

from roadsharp.common.card import Card, Rank, Suit
from roadsharp.common.deck import Deck
from roadsharp.common.errors import (
    ContractViolationError,
    InvalidHandError,
    InvalidRoundNumberError,
    OutOfOrderRoundError,
    RoadmapConsistencyError,
    RoadsharpError,
    ShoeExhaustedError,
)
from roadsharp.common.outcome import RoundOutcome, Winner
from roadsharp.common.shoe import CardSource, SequenceCardSource, Shoe

__all__ = [
    "Card",
    "Rank",
    "Suit",
    "Deck",
    "RoundOutcome",
    "Winner",
    "CardSource",
    "SequenceCardSource",
    "Shoe",
    "RoadsharpError",
    "ContractViolationError",
    "InvalidHandError",
    "InvalidRoundNumberError",
    "OutOfOrderRoundError",
    "ShoeExhaustedError",
    "RoadmapConsistencyError",
]
