"""
Baccarat hand implementation.

In Baccarat, hand values are calculated differently than blackjack:
- Cards 2-9 are worth face value
- 10, J, Q, K are worth 0
- Aces are worth 1
- Only the rightmost digit of the sum counts (17 = 7, 23 = 3)
"""

from typing import List, Optional, Sequence

from roadsharp.baccarat.constants import NATURAL_TOTALS, get_baccarat_value
from roadsharp.common.card import Card


class BaccaratHand:
    """Represents a hand in Baccarat."""

    def __init__(self, cards: Optional[Sequence[Card]] = None):
        """
        Initialize a Baccarat hand.

        Args:
            cards: Optional initial cards, in the order dealt
        """
        self.cards: List[Card] = list(cards) if cards else []

    def add_card(self, card: Card) -> None:
        """Add a card to the hand."""
        self.cards.append(card)

    def value(self) -> int:
        """
        Calculate the value of the hand.

        Returns:
            Hand value (0-9)
        """
        return sum(get_baccarat_value(card.rank) for card in self.cards) % 10

    def is_natural(self) -> bool:
        """
        Check if the first two cards total 8 or 9.

        Returns:
            True if natural, False otherwise
        """
        return len(self.cards) == 2 and self.value() in NATURAL_TOTALS

    def is_pair(self) -> bool:
        """Check if the first two cards share a rank. Third cards never count."""
        return len(self.cards) >= 2 and self.cards[0].rank == self.cards[1].rank

    def card_count(self) -> int:
        return len(self.cards)

    def third_card_value(self) -> int:
        """
        Get the value of the third card (used for Banker drawing rules).

        Returns:
            Value of third card, or -1 if no third card
        """
        if len(self.cards) >= 3:
            return get_baccarat_value(self.cards[2].rank)
        return -1

    def __str__(self) -> str:
        cards_str = ", ".join(str(card) for card in self.cards)
        return f"[{cards_str}] = {self.value()}"

    def __repr__(self) -> str:
        return f"BaccaratHand(cards={self.cards}, value={self.value()})"
