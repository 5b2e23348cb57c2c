"""
roadsharp: baccarat rules and road charts.

`roadsharp.baccarat` resolves rounds from cards; `roadsharp.roadmap` turns
the resulting outcomes into the Big Road, its derived roads and the Bead
Plate.
"""

from roadsharp.baccarat import BaccaratGame, resolve_round, verify_round
from roadsharp.common import Card, Rank, RoundOutcome, Suit, Winner
from roadsharp.roadmap import DerivedRoadType, RoadmapEngine, compute_all

__version__ = "0.1.0"

__all__ = [
    "BaccaratGame",
    "Card",
    "DerivedRoadType",
    "Rank",
    "RoadmapEngine",
    "RoundOutcome",
    "Suit",
    "Winner",
    "compute_all",
    "resolve_round",
    "verify_round",
]
