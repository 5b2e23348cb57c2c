"""
The per-round result shared by the rules engine and the roadmap engine.

`RoundOutcome` is the only thing the roadmap engine knows about a round. It is
produced by `roadsharp.baccarat.game.resolve_round` for live play, or built
directly from stored history when a shoe is rehydrated.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from roadsharp.common.card import Card


class Winner(Enum):
    """Possible winners of a baccarat round."""

    PLAYER = "player"
    BANKER = "banker"
    TIE = "tie"

    @property
    def is_decisive(self) -> bool:
        return self is not Winner.TIE


@dataclass(frozen=True)
class RoundOutcome:
    """
    Immutable result of one completed round.

    Attributes:
        winner: Player, Banker or Tie
        player_total: Player's final total (0-9), None if not recorded
        banker_total: Banker's final total (0-9), None if not recorded
        is_player_pair: First two Player cards share a rank
        is_banker_pair: First two Banker cards share a rank
        is_natural: Either side had 8 or 9 on its first two cards
        round_number: Position of the round in its shoe; assigned on append when None
        player_cards: Final Player cards, empty when not recorded
        banker_cards: Final Banker cards, empty when not recorded
    """

    winner: Winner
    player_total: Optional[int] = None
    banker_total: Optional[int] = None
    is_player_pair: bool = False
    is_banker_pair: bool = False
    is_natural: bool = False
    round_number: Optional[int] = None
    player_cards: Tuple[Card, ...] = field(default_factory=tuple)
    banker_cards: Tuple[Card, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not isinstance(self.winner, Winner):
            # Accept the plain string form used by stored history
            object.__setattr__(self, "winner", Winner(self.winner))
        for name in ("player_total", "banker_total"):
            value = getattr(self, name)
            if value is not None and not 0 <= value <= 9:
                raise ValueError(f"{name} must be between 0 and 9, got {value}")
        if self.player_total is not None and self.banker_total is not None:
            expected = _winner_for(self.player_total, self.banker_total)
            if expected is not self.winner:
                raise ValueError(
                    f"Winner {self.winner.value} does not match totals "
                    f"{self.player_total}-{self.banker_total}"
                )
        object.__setattr__(self, "player_cards", tuple(self.player_cards))
        object.__setattr__(self, "banker_cards", tuple(self.banker_cards))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dictionary."""
        return {
            "round_number": self.round_number,
            "winner": self.winner.value,
            "player_total": self.player_total,
            "banker_total": self.banker_total,
            "is_player_pair": self.is_player_pair,
            "is_banker_pair": self.is_banker_pair,
            "is_natural": self.is_natural,
            "player_cards": [str(card) for card in self.player_cards],
            "banker_cards": [str(card) for card in self.banker_cards],
        }


def _winner_for(player_total: int, banker_total: int) -> Winner:
    if player_total > banker_total:
        return Winner.PLAYER
    if banker_total > player_total:
        return Winner.BANKER
    return Winner.TIE
